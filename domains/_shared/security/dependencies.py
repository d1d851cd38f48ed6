from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import Header, HTTPException, status

from .jwt import InvalidTokenError, TokenPayload, decode_access_token

logger = logging.getLogger(__name__)


def build_access_token_dependency(get_settings: Callable):
    """
    Factory that returns a FastAPI dependency verifying the bearer access-token
    from the Authorization header.

    ``get_settings`` must expose ``jwt_secret`` and ``jwt_algorithm``.
    """

    async def dependency(
        authorization: Optional[str] = Header(default=None),
    ) -> TokenPayload:
        if not authorization:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

        scheme, _, token = authorization.partition(" ")
        if scheme != "Bearer" or not token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token format"
            )

        settings = get_settings()
        try:
            return decode_access_token(
                token,
                secret=settings.jwt_secret,
                algorithm=settings.jwt_algorithm,
            )
        except InvalidTokenError as exc:
            logger.warning("Rejected access token", extra={"reason": exc.reason})
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden") from exc

    return dependency
