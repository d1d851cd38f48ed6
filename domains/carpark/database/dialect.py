"""Dialect-specific INSERT constructs.

Conflict clauses (ON CONFLICT DO NOTHING / DO UPDATE) only exist on the
PostgreSQL and SQLite insert constructs, so statements are built for the
dialect the session is bound to.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

class UnsupportedDialectError(ValueError):
    """The bound database has no INSERT ... ON CONFLICT construct here."""


_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def upsert_insert(session: AsyncSession, table: Any):
    """Return an INSERT supporting conflict clauses for the session's dialect."""
    dialect_name = session.get_bind().dialect.name
    try:
        factory = _INSERT_BY_DIALECT[dialect_name]
    except KeyError:
        raise UnsupportedDialectError(f"Unsupported database dialect for upsert: {dialect_name}") from None
    return factory(table)
