"""Ingestion errors.

Every error aborts the running transaction and reaches the caller unchanged.
"""

from __future__ import annotations


class IngestionError(Exception):
    """Base class for car park CSV ingestion failures."""

    def __init__(
        self,
        reason: str,
        *,
        line: int | None = None,
        column: str | None = None,
    ) -> None:
        self.reason = reason
        self.line = line
        self.column = column
        super().__init__(self._format(reason, line, column))

    @staticmethod
    def _format(reason: str, line: int | None, column: str | None) -> str:
        location = []
        if line is not None:
            location.append(f"line {line}")
        if column is not None:
            location.append(f"column '{column}'")
        if not location:
            return reason
        return f"{reason} ({', '.join(location)})"


class StreamError(IngestionError):
    """Source missing, unreadable or not decodable."""


class ParseError(IngestionError):
    """Malformed CSV or a row missing a required column."""


class RowValidationError(IngestionError):
    """A numeric field holds a value that is not a finite number."""

    def __init__(self, column: str, value: str | None, *, line: int | None = None) -> None:
        self.value = value
        super().__init__(f"Invalid numeric value {value!r}", line=line, column=column)


ValidationError = RowValidationError


class ConstraintError(IngestionError):
    """Integrity violation not absorbed by find-or-create."""


class TransactionError(IngestionError):
    """Commit, rollback or another database failure."""


__all__ = [
    "IngestionError",
    "StreamError",
    "ParseError",
    "RowValidationError",
    "ValidationError",
    "ConstraintError",
    "TransactionError",
]
