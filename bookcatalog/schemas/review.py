from datetime import datetime

from pydantic import Field, field_validator

from bookcatalog.schemas.base import CamelModel


class ReviewCreate(CamelModel):
    book_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1, max_length=64)
    username: str = Field(..., min_length=1, max_length=255)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)

    @field_validator("comment", "username")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class ReviewResponse(CamelModel):
    id: str
    book_id: str
    user_id: str
    username: str
    rating: int
    comment: str
    date: datetime


class ReviewListResponse(CamelModel):
    reviews: list[ReviewResponse]


class ReviewCreatedResponse(CamelModel):
    message: str
    review: ReviewResponse
