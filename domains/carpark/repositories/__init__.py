"""Carpark repositories package."""

from .carpark_repository import CarparkRepository
from .reference_repository import (
    CarParkTypeRepository,
    ParkingSystemTypeRepository,
    ReferenceRepository,
)
from .user_repository import UserRepository

__all__ = [
    "CarparkRepository",
    "CarParkTypeRepository",
    "ParkingSystemTypeRepository",
    "ReferenceRepository",
    "UserRepository",
]
