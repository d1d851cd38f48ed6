from .dependencies import build_access_token_dependency
from .jwt import InvalidTokenError, TokenPayload, decode_access_token, encode_access_token

__all__ = [
    "InvalidTokenError",
    "TokenPayload",
    "build_access_token_dependency",
    "decode_access_token",
    "encode_access_token",
]
