"""Bot handlers module."""

from .battles import router as battles_router
from .common import router as common_router

__all__ = ["battles_router", "common_router"]
