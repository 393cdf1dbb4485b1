from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from bookcatalog.core.database import get_db
from bookcatalog.schemas.review import ReviewCreate, ReviewCreatedResponse, ReviewListResponse
from bookcatalog.services import review_service

router = APIRouter()


@router.get("", response_model=ReviewListResponse)
def list_reviews(
    book_id: str | None = Query(None, alias="bookId"),
    db: Session = Depends(get_db),
):
    """List reviews, newest first."""
    return ReviewListResponse(reviews=review_service.list_reviews(db, book_id))


@router.post("", response_model=ReviewCreatedResponse, status_code=status.HTTP_201_CREATED)
def submit_review(data: ReviewCreate, db: Session = Depends(get_db)):
    """Submit a review. Each user may review a book once."""
    try:
        review = review_service.create_review(db, data)
    except review_service.BookNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    except review_service.DuplicateReviewError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You have already reviewed this book",
        )

    return ReviewCreatedResponse(message="Review submitted successfully", review=review)
