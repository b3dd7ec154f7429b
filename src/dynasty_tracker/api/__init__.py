"""API routers."""

from dynasty_tracker.api.router import api_router

__all__ = ["api_router"]
