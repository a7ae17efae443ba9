"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from document_gateway.presentation.api.v1.endpoints.health import router as health_router
from document_gateway.presentation.api.v1.document_request_controller import router as document_request_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(document_request_router)
