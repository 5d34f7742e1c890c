"""
Router package for the training API.

This package contains all API routers organized by domain:
- health: Health check and cache statistics
- progression: Current session, manual selection, cycles
- completions: Session completion
- analytics: 1RM estimates and muscle volume
"""

from api.routers.health import router as health_router
from api.routers.progression import router as progression_router
from api.routers.completions import router as completions_router
from api.routers.analytics import router as analytics_router

__all__ = [
    "health_router",
    "progression_router",
    "completions_router",
    "analytics_router",
]
