"""Bearer token decoding (HS256 JWT)."""

from __future__ import annotations

from typing import Any
from uuid import UUID

import jwt
from pydantic import BaseModel, ConfigDict, ValidationError

# Subject claim first, then the `id` claim used by the account service
USER_ID_CLAIMS = ("sub", "id")


class InvalidTokenError(Exception):
    """Token signature, expiry or claims could not be verified."""

    def __init__(self, reason: str = "Invalid token") -> None:
        self.reason = reason
        super().__init__(reason)


class TokenPayload(BaseModel):
    """Verified identity carried by an access token."""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    username: str | None = None
    exp: int | None = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "TokenPayload":
        user_id = next((claims[key] for key in USER_ID_CLAIMS if claims.get(key)), None)
        if user_id is None:
            raise InvalidTokenError("Token has no user id claim")
        try:
            return cls(
                user_id=user_id,
                username=claims.get("username"),
                exp=claims.get("exp"),
            )
        except ValidationError as exc:
            raise InvalidTokenError("Token claims are malformed") from exc


def decode_access_token(token: str, *, secret: str, algorithm: str = "HS256") -> TokenPayload:
    """Verify ``token`` and return its payload.

    ``exp`` is optional but enforced when present. The user id comes from
    ``sub``, or from ``id`` for tokens without a subject.

    Raises:
        InvalidTokenError: bad signature, expired token or no usable user id.
    """
    try:
        claims = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError(f"Invalid token: {type(exc).__name__}") from exc
    return TokenPayload.from_claims(claims)


def encode_access_token(claims: dict[str, Any], *, secret: str, algorithm: str = "HS256") -> str:
    """Sign ``claims`` with the shared secret."""
    return jwt.encode(claims, secret, algorithm=algorithm)
