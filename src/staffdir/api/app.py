"""
Main FastAPI application for the staffdir backend
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..auth.adapters.base import AuthAdapter
from ..config import settings
from ..database.connection import check_database_connection, dispose_database, init_database
from ..graphql.registry import registry
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(debug=settings.debug)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting staffdir API...")
    init_database()

    ok, error = await check_database_connection()
    if ok:
        logger.info("Database connection verified")
    else:
        logger.error("Database connection check failed", error=error)
        if settings.environment.lower() in ("production", "prod"):
            raise RuntimeError(error)

    yield

    logger.info("Shutting down staffdir API...")
    await dispose_database()


def create_app(auth_adapter: AuthAdapter | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        auth_adapter: Pin an identity adapter instead of building the configured
            one per request
    """
    # Fail fast on a broken operation catalog
    registry.validate()

    app = FastAPI(
        title="staffdir API",
        description="Employee directory behind a GraphQL-style RPC endpoint",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.auth_adapter = auth_adapter

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Client-Info", "Apikey"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    from .endpoints import graphql

    app.include_router(graphql.router, tags=["GraphQL"])
    logger.info("GraphQL endpoint initialized", endpoint="/graphql", operations=registry.list_names())

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "staffdir.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
