"""Carpark ORM models."""

from .carpark import Carpark
from .reference import CarParkType, ParkingSystemType
from .user import User, UserFavoriteCarpark

__all__ = ["Carpark", "CarParkType", "ParkingSystemType", "User", "UserFavoriteCarpark"]
