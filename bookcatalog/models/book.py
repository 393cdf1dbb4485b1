from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookcatalog.core.database import Base


class Book(Base):
    """Stored book record, columns already mapped onto canonical names.

    Fields stay nullable: defaults are applied by the normalizer when the
    record is served, not when it is stored.
    """

    __tablename__ = "books"

    # Autoincrement id doubles as insertion order (the default sort)
    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str | None] = mapped_column(String(500), index=True)
    author: Mapped[str | None] = mapped_column(String(255), index=True)
    description: Mapped[str | None] = mapped_column(Text)
    cover_image: Mapped[str | None] = mapped_column(String(500))

    rating: Mapped[float | None] = mapped_column(Float, index=True)
    published_year: Mapped[int | None] = mapped_column(Integer)
    pages: Mapped[int | None] = mapped_column(Integer)

    # List or string, exactly as found in the source document
    genres: Mapped[Any] = mapped_column(JSON, nullable=True)

    isbn: Mapped[str | None] = mapped_column(String(20), index=True)
    language: Mapped[str | None] = mapped_column(String(50))
    publisher: Mapped[str | None] = mapped_column(String(255))

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    reviews: Mapped[list["Review"]] = relationship(back_populates="book", cascade="all, delete-orphan")


# Forward reference
from bookcatalog.models.review import Review  # noqa: E402
