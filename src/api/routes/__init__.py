"""API route modules."""

from .health import router as health_router
from .submissions import router as submissions_router

__all__ = ["health_router", "submissions_router"]
