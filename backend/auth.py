"""
Caller identity for API requests.

Authentication happens upstream: the gateway validates the session and
forwards the user id in the ``X-User-Id`` header. This module only turns
that header into a FastAPI dependency.
"""
from fastapi import HTTPException, Header
from typing import Optional
import logging

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-Id"


async def get_current_user(
    x_user_id: Optional[str] = Header(None, alias=USER_ID_HEADER),
) -> str:
    """
    Get the user id forwarded by the gateway.
    Returns user_id string.

    Usage:
        @app.get("/protected")
        async def protected_route(user_id: str = Depends(get_current_user)):
            return {"user_id": user_id}
    """
    user_id = (x_user_id or "").strip()
    if not user_id:
        logger.debug("Request without %s header", USER_ID_HEADER)
        raise HTTPException(
            status_code=401,
            detail=f"Missing caller identity. Provide the {USER_ID_HEADER} header.",
        )
    return user_id
