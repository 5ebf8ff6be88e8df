"""Health routes for the Dynamic Object Service."""

from __future__ import annotations

from fastapi import APIRouter

from services.dynamic_object_service.config import settings

router = APIRouter()


@router.get("/healthz", tags=["Health"])
async def health_check() -> dict[str, str | dict]:
    """Liveness plus presence of the file-backed configuration."""
    checks = {
        "connections_file_exists": settings.CONNECTIONS_FILE.exists(),
        "field_mappings_file_exists": settings.FIELD_MAPPINGS_FILE.exists(),
    }

    # Without mappings unification still works (everything lands in "additional")
    overall_status = "healthy" if checks["connections_file_exists"] else "degraded"

    return {
        "service": "dynamic_object_service",
        "status": overall_status,
        "message": f"Dynamic Object Service is {overall_status}",
        "version": "0.1.0",
        "checks": checks,
    }
