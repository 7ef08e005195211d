"""Exception hierarchy for scouting statistics."""

from __future__ import annotations


class ScoutingError(Exception):
    """Base class for all scouting errors."""


class InvalidInputError(ScoutingError, ValueError):
    """Raised before any I/O when identifiers or match fields are invalid."""


class StoreUnavailableError(ScoutingError):
    """Raised when the record store cannot complete a read or write."""


class RecordConflictError(StoreUnavailableError):
    """Raised when a write violates a unique or check constraint."""


class RecordNotFoundError(ScoutingError, LookupError):
    """Raised when a record addressed by id does not exist."""


__all__ = [
    "InvalidInputError",
    "RecordConflictError",
    "RecordNotFoundError",
    "ScoutingError",
    "StoreUnavailableError",
]
