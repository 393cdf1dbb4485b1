from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session, sessionmaker

from bookcatalog.core.database import get_db, get_session_factory
from bookcatalog.schemas.book import BookCollectionResponse, BookDetailResponse, BookListResponse
from bookcatalog.services import book_service
from bookcatalog.services.query_builder import BookQueryParams

router = APIRouter()


@router.get("", response_model=BookListResponse)
async def list_books(
    page: int = Query(1, ge=1, description="Page within the batch"),
    limit: int = Query(24, ge=1, le=100),
    search: str = Query("", description="Matches title, author or description"),
    genre: str = Query(""),
    author: str = Query(""),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    batch: int = Query(1, ge=1, description="1000-book window into the results"),
    session_factory: sessionmaker = Depends(get_session_factory),
):
    """List books one page of one batch at a time."""
    params = BookQueryParams(
        search=search,
        genre=genre,
        author=author,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return await book_service.list_books(session_factory, params, page=page, limit=limit, batch=batch)


@router.get("/top-rated", response_model=BookCollectionResponse)
def list_top_rated(request: Request, db: Session = Depends(get_db)):
    """Highest rated books."""
    settings = request.app.state.settings
    books = book_service.top_rated_books(
        db,
        min_rating=settings.TOP_RATED_MIN_RATING,
        limit=settings.TOP_RATED_LIMIT,
    )
    return BookCollectionResponse(books=books)


@router.get("/{book_id}", response_model=BookDetailResponse)
def get_book(book_id: str, db: Session = Depends(get_db)):
    """Get book details by ID."""
    book = book_service.get_book(db, book_id)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return BookDetailResponse(book=book)
