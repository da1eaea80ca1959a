"""Health endpoints."""
from fastapi import APIRouter, Depends

from ...resolver.controls import ProviderControls
from ..dependencies import get_controls
from ..schemas import HealthStatus

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
def get_health(controls: ProviderControls = Depends(get_controls)) -> HealthStatus:
    """Return service heartbeat information."""

    return HealthStatus(
        sources=len(controls.list_sources()),
        embeds=len(controls.list_embeds()),
    )
