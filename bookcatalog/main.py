"""
Main FastAPI application entry point.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bookcatalog.api import router as api_router
from bookcatalog.core.config import Settings, get_settings
from bookcatalog.core.database import Database
from bookcatalog.core.errors import register_exception_handlers
from bookcatalog.core.logging import get_logger, setup_logging
from bookcatalog.core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware

logger = get_logger(__name__)

VERSION = "1.0.0"


def _init_sentry(settings: Settings) -> None:
    try:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
    except ImportError:
        logger.warning("sentry-sdk not installed, error tracking disabled")
        return

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=0.1 if settings.ENVIRONMENT == "production" else 1.0,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
    )
    logger.info("Sentry initialized successfully")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.settings
    database: Database = app.state.database

    logger.info(
        f"Starting {settings.APP_NAME}",
        extra={
            "extra_fields": {
                "environment": settings.ENVIRONMENT,
                "debug": settings.DEBUG,
            }
        },
    )

    try:
        database.create_all()
        logger.info("Database tables verified/created")
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database: {e}")

    if settings.SENTRY_DSN:
        _init_sentry(settings)

    yield

    database.dispose()
    logger.info(f"Shutting down {settings.APP_NAME}")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build an application that owns its own database pool."""
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Browse and search a book catalog with batched pagination",
        version=VERSION,
        docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings.DATABASE_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/health")
    async def health_check():
        """Basic application health status for load balancers."""
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": VERSION,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health/ready")
    def readiness_check(request: Request):
        """Verify the database answers queries."""
        try:
            with request.app.state.database.session() as db:
                db.execute(text("SELECT 1"))
            db_status = "connected"
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            db_status = "disconnected"

        return {
            "status": "ready" if db_status == "connected" else "not_ready",
            "checks": {"database": db_status},
        }

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_app()
