from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookcatalog.core.database import Base


class Author(Base):
    """Author directory entry, aggregated from the books collection."""

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    bio: Mapped[str | None] = mapped_column(Text)
    nationality: Mapped[str | None] = mapped_column(String(100))
    image: Mapped[str | None] = mapped_column(String(500))

    total_books: Mapped[int] = mapped_column(Integer, default=0, index=True)
    average_rating: Mapped[float] = mapped_column(Float, default=0.0, index=True)  # 0-5

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Genre(Base):
    """Genre directory entry."""

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text)
    image: Mapped[str | None] = mapped_column(String(500))

    total_books: Mapped[int] = mapped_column(Integer, default=0, index=True)
    average_rating: Mapped[float] = mapped_column(Float, default=0.0)  # 0-5
    popularity: Mapped[int] = mapped_column(Integer, default=0, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
