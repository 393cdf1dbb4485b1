from fastapi import APIRouter

from bookcatalog.api import authors, books, genres, reviews, search

router = APIRouter()

router.include_router(books.router, prefix="/books", tags=["books"])
router.include_router(search.router, prefix="/search", tags=["search"])
router.include_router(authors.router, prefix="/authors", tags=["authors"])
router.include_router(genres.router, prefix="/genres", tags=["genres"])
router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
