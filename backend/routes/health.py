from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from models import HealthResponse
from config import settings
from osint import PluginRegistry
from .deps import get_registry

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health(registry: PluginRegistry = Depends(get_registry)):
    return HealthResponse(
        status="ok",
        version=settings.VERSION,
        plugins=len(registry),
        timestamp=datetime.now(timezone.utc),
    )
