"""
Error types shared by the parser, the dispatcher and the genome store.

Every error carries an ``ErrorKind`` so the HTTP layer can pick a status
without inspecting messages.
"""

from __future__ import annotations

from typing import Dict

from genoquery.models.enums import ErrorKind


class GenoQueryError(Exception):
    """Base class for every failure the API reports to a client."""

    kind: ErrorKind = ErrorKind.STORE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"message": self.message, "kind": self.kind.value}


class ValidationError(GenoQueryError):
    """Malformed, contradictory or missing query parameters."""
    kind = ErrorKind.VALIDATION


class ParseError(GenoQueryError):
    """A non-numeric identifier or coordinate."""
    kind = ErrorKind.PARSE


class StoreError(GenoQueryError):
    """Any failure reported by the genome store."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.STORE):
        super().__init__(message)
        self.kind = kind


class NotFoundError(StoreError):
    """The store has no record with the requested id."""

    def __init__(self, message: str):
        super().__init__(message, kind=ErrorKind.NOT_FOUND)


class RequestCancelled(GenoQueryError):
    """The client went away before the store was called."""
    kind = ErrorKind.CANCELLED


# Status used for each kind when distinct statuses are enabled.
_DISTINCT_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.PARSE: 400,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CANCELLED: 499,
    ErrorKind.STORE: 500,
}


def status_for(kind: ErrorKind, distinct: bool = False) -> int:
    """
    HTTP status for an error kind.

    With ``distinct`` off every failure is a 400, which is what existing
    clients of the API expect.
    """
    if not distinct:
        return 400
    return _DISTINCT_STATUS.get(kind, 500)
