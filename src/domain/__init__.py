"""Scouting domain modules."""

from domain.common import EndgameClimb, MatchObservation, StartingPosition
from domain.errors import (
    InvalidInputError,
    RecordConflictError,
    RecordNotFoundError,
    ScoutingError,
    StoreUnavailableError,
)

__all__ = [
    "EndgameClimb",
    "InvalidInputError",
    "MatchObservation",
    "RecordConflictError",
    "RecordNotFoundError",
    "ScoutingError",
    "StartingPosition",
    "StoreUnavailableError",
]
