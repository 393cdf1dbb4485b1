from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bookcatalog.core.database import get_db
from bookcatalog.schemas.catalog import GenreListResponse
from bookcatalog.services import catalog_service

router = APIRouter()


@router.get("", response_model=GenreListResponse)
def list_genres(
    page: int = Query(1, ge=1),
    limit: int = Query(24, ge=1, le=100),
    search: str = Query(""),
    db: Session = Depends(get_db),
):
    """List genres by popularity."""
    return catalog_service.list_genres(db, page=page, limit=limit, search=search)
