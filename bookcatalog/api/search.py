from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import sessionmaker

from bookcatalog.core.database import get_session_factory
from bookcatalog.schemas.search import SearchResponse
from bookcatalog.services import search_service

router = APIRouter()


@router.get("", response_model=SearchResponse)
async def search(
    q: str = Query("", description="Search query"),
    type: str = Query("all", description="all, books, authors or genres"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session_factory: sessionmaker = Depends(get_session_factory),
):
    """
    Search books, authors and genres.

    Books are paginated; authors and genres return at most ``limit`` matches.
    """
    return await search_service.search(session_factory, q, search_type=type, page=page, limit=limit)
