from .health import router as health_router
from .enrich import router as enrich_router
from .plugins import router as plugins_router

__all__ = ["health_router", "enrich_router", "plugins_router"]
