"""Health check endpoint — reports version and whether the catalog loaded."""

import logging

from fastapi import APIRouter

from document_gateway.config import get_settings
from document_gateway.domain.exceptions import CatalogError
from document_gateway.infrastructure.dependencies import get_taxonomy_registry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    try:
        registry = get_taxonomy_registry()
    except CatalogError as exc:
        logger.error("Catalog unavailable: %s", exc)
        return {
            "status": "degraded",
            "version": settings.app_version,
            "environment": settings.app_env,
            "categories": 0,
        }

    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "categories": sum(len(e.categories) for e in registry.list_entities()),
    }
