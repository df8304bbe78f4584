"""Health API routes."""

from fastapi import APIRouter
from pydantic import BaseModel

from ...app import IApplication


class HealthResponse(BaseModel):
    """Response model for health."""

    status: str
    model: str


def create_health_router(app: IApplication) -> APIRouter:
    """Create health router."""
    router = APIRouter(prefix="/api", tags=["health"])

    @router.get("/health", response_model=HealthResponse)
    async def get_health() -> dict:
        """Report liveness and intent model load state."""
        return {"status": "ok", "model": app.model_state.state.value}

    return router
