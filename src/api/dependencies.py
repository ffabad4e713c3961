"""FastAPI dependencies for authentication."""

import secrets

from fastapi import Header, HTTPException, status

from api.models.responses import ErrorCodes
from core.config import GETBUS_API_KEY


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
) -> str:
    """
    Verify the form trigger's API key from the X-API-Key header.

    Raises:
        HTTPException: 500 if no key is configured, 401 if the key is missing or wrong
    """
    if not GETBUS_API_KEY:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "API key not configured on server",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": ["Set GETBUS_API_KEY"],
            },
        )

    # Constant-time comparison
    if x_api_key is None or not secrets.compare_digest(x_api_key, GETBUS_API_KEY):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Invalid or missing API key",
                "code": ErrorCodes.UNAUTHORIZED,
                "details": [],
            },
        )

    return x_api_key
