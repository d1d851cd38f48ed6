"""
Pydantic schemas for the Carpark domain.
"""

from .carpark import (
    CarparkItem,
    CarparkPage,
    ErrorResponse,
    FavoriteAddedResponse,
    FavoriteListResponse,
    UploadResponse,
    UserSummary,
)

__all__ = [
    "CarparkItem",
    "CarparkPage",
    "ErrorResponse",
    "FavoriteAddedResponse",
    "FavoriteListResponse",
    "UploadResponse",
    "UserSummary",
]
