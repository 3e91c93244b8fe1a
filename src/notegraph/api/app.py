"""
Main FastAPI application for notegraph
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .. import __version__
from ..config import Settings, settings as default_settings
from ..database.connection import check_database_connection
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware, SimpleRequestCORSMiddleware
from ..store.base import NoteStore
from ..store.factory import create_note_store
from ..store.sql import SqlNoteStore

logger = get_logger(__name__)


def create_app(settings: Settings | None = None, store: NoteStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to run with; defaults to the global settings
        store: Store to serve; when omitted one is built from settings at
            startup and closed at shutdown
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting notegraph API...")

        owns_store = store is None
        app.state.store = store if store is not None else create_note_store(settings=settings)
        logger.info("Note store ready", store=type(app.state.store).__name__)

        if isinstance(app.state.store, SqlNoteStore):
            success, error_message = await check_database_connection(app.state.store.engine)
            if success:
                logger.info("Database connection validation successful")
            else:
                # Keep serving; every request will surface the failure as a 500
                logger.error("Database connection validation failed", error=error_message)

        try:
            yield
        finally:
            logger.info("Shutting down notegraph API...")
            if owns_store:
                await app.state.store.close()

    app = FastAPI(
        title="notegraph",
        description="GraphQL service over users and their notes",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        SimpleRequestCORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    try:
        from ..graphql.schema import validate_schema
        from .endpoints import graphql

        logger.info("Validating GraphQL schema...")
        validate_schema()

        app.include_router(graphql.router)
        app.add_exception_handler(405, graphql.method_not_allowed_handler)
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    return app


def create_default_app() -> FastAPI:
    """Build the app from environment settings, with logging configured."""
    configure_logging(debug=default_settings.debug)
    return create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "notegraph.api.app:create_default_app",
        factory=True,
        host=default_settings.api_host,
        port=default_settings.api_port,
        reload=default_settings.api_reload,
        log_level=default_settings.log_level.lower(),
    )
