"""Service errors, repository contracts and transaction handling shared by services."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


class ServiceError(Exception):
    """An error a service reports to its caller, carrying a client-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.message == other.message  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class BadRequestError(ServiceError):
    """The request refers to data that is invalid or does not exist."""


class NotFoundError(ServiceError):
    """The requested resource does not exist."""


class RecordNotFoundError(LookupError):
    """Raised by a repository when a looked-up row does not exist."""


@contextmanager
def transaction(db: Any) -> Iterator[Any]:
    """Run a block in a transaction: commit on success, roll back and re-raise on error.

    ``db`` either offers ``begin()`` returning a transaction with ``commit()`` and
    ``rollback()``, or is itself a connection with ``commit()`` and ``rollback()``.
    The transaction handle is yielded to the block.
    """
    begin = getattr(db, "begin", None)
    tx = begin() if callable(begin) else db
    try:
        yield tx
    except BaseException:
        tx.rollback()
        raise
    tx.commit()