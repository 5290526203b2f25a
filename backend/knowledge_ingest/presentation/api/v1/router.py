"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from knowledge_ingest.presentation.api.v1.endpoints.health import router as health_router
from knowledge_ingest.presentation.api.v1.chunking_controller import router as chunking_router
from knowledge_ingest.presentation.api.v1.training_controller import router as training_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(chunking_router)
router.include_router(training_router)
