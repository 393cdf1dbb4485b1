from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookcatalog.core.logging import get_logger
from bookcatalog.models.book import Book
from bookcatalog.models.review import Review
from bookcatalog.schemas.review import ReviewCreate, ReviewResponse
from bookcatalog.services.book_service import parse_book_id

logger = get_logger(__name__)


class BookNotFoundError(Exception):
    """Review targets a book that is not in the catalog."""


class DuplicateReviewError(Exception):
    """The user already reviewed this book."""


def to_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        id=str(review.id),
        book_id=str(review.book_id),
        user_id=review.user_id,
        username=review.user_name,
        rating=review.rating,
        comment=review.comment,
        date=review.created_at,
    )


def list_reviews(db: Session, book_id: str | None = None) -> list[ReviewResponse]:
    """Reviews newest first, optionally for a single book."""
    query = select(Review)
    if book_id is not None:
        numeric_id = parse_book_id(book_id)
        if numeric_id is None:
            return []
        query = query.where(Review.book_id == numeric_id)

    reviews = db.scalars(query.order_by(Review.created_at.desc(), Review.id.desc())).all()
    return [to_response(review) for review in reviews]


def create_review(db: Session, data: ReviewCreate) -> ReviewResponse:
    """
    Store a review.

    Uniqueness of (book, user) is left to the database constraint, so two
    concurrent submissions cannot both succeed.

    Raises:
        BookNotFoundError: the book id does not exist
        DuplicateReviewError: the user already reviewed the book
    """
    numeric_id = parse_book_id(data.book_id)
    if numeric_id is None or db.get(Book, numeric_id) is None:
        raise BookNotFoundError(data.book_id)

    review = Review(
        book_id=numeric_id,
        user_id=data.user_id,
        user_name=data.username,
        rating=data.rating,
        comment=data.comment,
    )
    db.add(review)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info(
            "Duplicate review rejected",
            extra={"extra_fields": {"book_id": numeric_id, "user_id": data.user_id}},
        )
        raise DuplicateReviewError(data.book_id) from e

    db.refresh(review)
    return to_response(review)
