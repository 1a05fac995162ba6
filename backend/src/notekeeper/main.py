# Main application entry point
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import auth_router, health_router, notes_router
from .config import Settings, get_settings
from .core.exceptions import register_exception_handlers
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .database import Database

# Setup logging first
setup_logging()
logger = get_logger("main")


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the application.

    ``database`` lets callers supply their own store handle; otherwise one is
    built from settings when the app starts and disposed when it stops.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting Notekeeper application",
            extra={"version": __version__, "environment": settings.environment},
        )
        db = database or Database.from_settings(settings)
        app.state.db = db

        if settings.auto_create_tables:
            try:
                await db.create_tables()
                logger.info("Database tables created/verified")
            except Exception as e:
                logger.error("Failed to create database tables", exc_info=e)
                await db.dispose()
                raise

        try:
            yield
        finally:
            logger.info("Shutting down Notekeeper application")
            await db.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Notes API with public/private visibility",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(notes_router)
    app.include_router(health_router)

    @app.get("/")
    async def root():
        return {"message": "API is running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("notekeeper.main:app", host=settings.host, port=settings.port, reload=settings.reload)
