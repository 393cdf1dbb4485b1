from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookcatalog.core.database import Base


class Review(Base):
    """User review of a book. One per user per book."""

    __tablename__ = "reviews"
    __table_args__ = (UniqueConstraint("book_id", "user_id", name="unique_book_user_review"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    book_id: Mapped[int] = mapped_column(ForeignKey("books.id"), index=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    user_name: Mapped[str] = mapped_column(String(255))

    rating: Mapped[int] = mapped_column(Integer)  # 1-5 scale
    comment: Mapped[str] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    book: Mapped["Book"] = relationship(back_populates="reviews")


# Forward reference
from bookcatalog.models.book import Book  # noqa: E402, F811
