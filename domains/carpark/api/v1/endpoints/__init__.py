"""Carpark API endpoint modules."""

from . import carparks, health  # noqa: F401

__all__ = ["carparks", "health"]
