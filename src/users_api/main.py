"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from users_api.config import settings
from users_api.database.engine import Database
from users_api.errors import register_error_handlers
from users_api.routes.users import router as users_router

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

logger = logging.getLogger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    """Build the application.

    *database* is used as-is when given (and left open on shutdown);
    otherwise one is created from settings at startup and closed at
    shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup / shutdown lifecycle hook."""
        logger.info("Starting %s …", settings.app_name)
        db = database or Database(settings.database_url, echo=settings.debug)
        await db.create_all()
        app.state.db = db
        logger.info("Database initialised")
        yield
        logger.info("Shutting down %s …", settings.app_name)
        if database is None:
            await db.close()

    app = FastAPI(
        title=settings.app_name,
        description="CRUD service for customer billing and contact records",
        version="0.1.0",
        lifespan=lifespan,
    )
    if database is not None:
        # Available even when the lifespan is not run (e.g. bare ASGI tests)
        app.state.db = database

    register_error_handlers(app)
    app.include_router(users_router)

    @app.get("/", response_class=PlainTextResponse)
    async def default_route() -> str:
        return "Welcome to default api route"

    @app.get("/health")
    async def health_check():
        """Liveness check."""
        return {"status": "healthy", "app": settings.app_name}

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    logger.info("🚀 Server ready at: http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
