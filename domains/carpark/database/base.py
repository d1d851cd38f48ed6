"""SQLAlchemy declarative base for Carpark service."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all Carpark service ORM models."""

    pass
