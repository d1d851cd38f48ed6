"""SQLAlchemy transaction manager.

Explicit commit/rollback handle passed to units of work that own their
transaction boundary (e.g. CSV ingestion).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class SqlaTransactionManager:
    """Commit or roll back the session's current transaction."""

    def __init__(self, session: "AsyncSession") -> None:
        self._session = session

    @property
    def session(self) -> "AsyncSession":
        return self._session

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()
