from fastapi import APIRouter

from shortlink_app.config import settings
from shortlink_app.schemas.link import HealthResponse

router = APIRouter(tags=["health"])

HEALTH_VERSION = "1.0"


@router.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
    }


@router.get("/healthz", response_model=HealthResponse)
def health_check():
    """Liveness probe: fixed payload, touches nothing"""
    return HealthResponse(ok=True, version=HEALTH_VERSION)
