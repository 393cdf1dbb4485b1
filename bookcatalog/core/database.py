import json
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


# Largest value a signed 64-bit column or OFFSET clause accepts
MAX_BIGINT = 2**63 - 1


class Base(DeclarativeBase):
    pass


def _json_serializer(value) -> str:
    # Keep non-ASCII genre names searchable with LIKE
    return json.dumps(value, ensure_ascii=False)


class Database:
    """Owns the engine (connection pool) and the session factory for one app."""

    def __init__(self, url: str):
        engine_kwargs: dict = {"pool_pre_ping": True, "json_serializer": _json_serializer}
        if url.startswith("sqlite"):
            # Sub-queries run on worker threads
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs.update(pool_size=10, max_overflow=20)

        self.url = url
        self.engine = create_engine(url, **engine_kwargs)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        # Import models so they register on Base.metadata
        import bookcatalog.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_session_factory(request: Request) -> sessionmaker:
    """Dependency for routes that open one session per concurrent sub-query."""
    return request.app.state.database.session_factory


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency for FastAPI routes to get a database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
