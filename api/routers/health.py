"""
Health check router.

This router provides health check endpoints for monitoring and load balancers.
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import get_cache
from backend.core.cache import TTLCache

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health():
    """
    Simple liveness endpoint.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok"}


@router.get("/health/cache")
def cache_health(cache: TTLCache = Depends(get_cache)):
    """
    Cache statistics.

    Returns:
        dict: Entry counts and configuration of the in-process cache
    """
    return {"status": "ok", "cache": cache.stats()}
