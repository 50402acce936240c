# API Routes

from .preference import router as preference_router
from .webhook import router as webhook_router

__all__ = ["preference_router", "webhook_router"]
