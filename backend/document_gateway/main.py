"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from document_gateway.config import get_settings
from document_gateway.infrastructure.database import engine
from document_gateway.infrastructure.dependencies import get_object_storage, get_taxonomy_registry
from document_gateway.infrastructure.logging.log_config import setup_logging
from document_gateway.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, load the catalog, warm the S3 client."""
    settings = get_settings()
    setup_logging(settings)

    # 1. Load the catalog once; a broken catalog must stop startup
    registry = get_taxonomy_registry()
    logger.info(
        "Serving %d entities from %s",
        len(registry.list_entities()),
        settings.catalog_path,
    )

    # 2. Build the shared object-storage client
    try:
        storage = get_object_storage()
        logger.info("Object storage ready (bucket=%s)", storage.bucket_name)
    except Exception:
        logger.exception("Failed to initialize object storage — document downloads will fail")

    yield

    # Shutdown
    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "document_gateway.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
