"""FastAPI dependencies.

User authentication happens in the gateway in front of this service; it
forwards the user id together with the shared internal API key.
"""

import secrets

from fastapi import Header, HTTPException, status

from forge_ai.core.config.settings import settings


async def get_current_user_id(
    x_user_id: str = Header(..., description="Authenticated user id"),
    x_internal_api_key: str = Header(..., description="Internal service API key"),
) -> str:
    """Validates the internal API key and returns the forwarded user id.

    Raises:
        HTTPException: 401 when the key is wrong or the user id is blank
    """
    if not secrets.compare_digest(
        x_internal_api_key.encode(), settings.internal_api_secret.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid internal API key",
        )
    if not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return x_user_id.strip()
