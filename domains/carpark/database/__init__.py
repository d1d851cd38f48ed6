"""Carpark persistence helpers."""

from domains.carpark.database.base import Base
from domains.carpark.database.session import async_session_factory, engine, get_db_session

__all__ = ["Base", "async_session_factory", "engine", "get_db_session"]
