"""Main FastAPI application."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fitcoach import __version__
from fitcoach.api.routes import notifications_router, sessions_router, workouts_router
from fitcoach.config.settings import get_settings
from fitcoach.core.error_handlers import domain_error_handler
from fitcoach.core.exceptions import DomainError
from fitcoach.core.logging import configure_logging, get_logger
from fitcoach.db.database import close_all_engines, init_db
from fitcoach.middleware.request_id import RequestIDMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging()

    # Startup: Initialize database
    await init_db()
    logger.info("application_started", app=get_settings().app_name)

    yield

    # Shutdown: Close database connections
    await close_all_engines()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Workout schedule resolution and training session lifecycle",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DomainError, domain_error_handler)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "app": settings.app_name}

    app.include_router(workouts_router)
    app.include_router(sessions_router)
    app.include_router(notifications_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fitcoach.main:app", host="0.0.0.0", port=8000, reload=True)
