"""Shared types for match scouting data."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

from domain.errors import InvalidInputError


class StartingPosition(str, Enum):
    """Where the robot starts before autonomous."""

    AMP = "Amp"
    MIDDLE = "Middle"
    SOURCE = "Source"


class EndgameClimb(str, Enum):
    """End-of-match state, ordered from lowest to highest value."""

    NOTHING = "Nothing"
    PARK = "Park"
    SINGLE_CLIMB = "Single Climb"
    DOUBLE_CLIMB = "Double Climb"
    TRIPLE_CLIMB = "Triple Climb"


AUTO_POSITIONS = ("m1", "m2", "m3", "m4", "m5", "s1", "s2", "s3", "r")

CLIMB_KEYS = {
    EndgameClimb.NOTHING: "nothing",
    EndgameClimb.PARK: "park",
    EndgameClimb.SINGLE_CLIMB: "single_climb",
    EndgameClimb.DOUBLE_CLIMB: "double_climb",
    EndgameClimb.TRIPLE_CLIMB: "triple_climb",
}

TRAP_COUNTS = (0, 1, 2, 3)
MAX_TRAP_COUNT = TRAP_COUNTS[-1]
MIN_DRIVER_RATING = 1
MAX_DRIVER_RATING = 5
MAX_COMMENT_LENGTH = 500

COUNTER_FIELDS = (
    *(f"auto_{position}" for position in AUTO_POSITIONS),
    "teleop_amp_attempts",
    "teleop_amp_scored",
    "teleop_speaker_attempts",
    "teleop_speaker_scored",
    "teleop_ground_intake",
    "teleop_source_intake",
)

BOOLEAN_FIELDS = ("auto_taxi", "robot_disabled", "played_defense")


@dataclass(frozen=True)
class MatchObservation:
    """Canonical match scouting payload used by the statistics calculator."""

    team_id: int
    regional_id: int
    match_number: int
    scouter_name: str | None = None
    starting_position: StartingPosition | None = None
    auto_taxi: bool = False
    auto_m1: int = 0
    auto_m2: int = 0
    auto_m3: int = 0
    auto_m4: int = 0
    auto_m5: int = 0
    auto_s1: int = 0
    auto_s2: int = 0
    auto_s3: int = 0
    auto_r: int = 0
    teleop_amp_attempts: int = 0
    teleop_amp_scored: int = 0
    teleop_speaker_attempts: int = 0
    teleop_speaker_scored: int = 0
    teleop_ground_intake: int = 0
    teleop_source_intake: int = 0
    endgame_climb: EndgameClimb | None = None
    endgame_trap_count: int = 0
    driver_rating: int | None = None
    robot_disabled: bool = False
    played_defense: bool = False
    comments: str | None = None

    def auto_position_count(self, position: str) -> int:
        return getattr(self, f"auto_{position}")


OBSERVATION_FIELDS = tuple(field.name for field in fields(MatchObservation))


def require_identifier(value: Any, label: str) -> int:
    """Return ``value`` as a positive integer id or raise InvalidInputError."""
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"{label} is required")
    try:
        identifier = int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{label} must be an integer, got {value!r}") from exc
    if identifier <= 0:
        raise InvalidInputError(f"{label} must be > 0, got {identifier}")
    return identifier


def _require_int(value: Any, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidInputError(f"{name} must be an integer, got {value!r}")
    return value


def validate_observation(observation: MatchObservation) -> None:
    """Check the per-record invariants of a match observation.

    Fields must already carry their column types; numeric strings are
    rejected here even though ``require_identifier`` accepts them.
    """
    for name in ("team_id", "regional_id", "match_number"):
        require_identifier(_require_int(getattr(observation, name), name), name)

    for name in COUNTER_FIELDS:
        value = _require_int(getattr(observation, name), name)
        if value < 0:
            raise InvalidInputError(f"{name} must be >= 0, got {value}")

    if observation.starting_position is not None and not isinstance(
        observation.starting_position, StartingPosition
    ):
        raise InvalidInputError(f"Unknown starting_position {observation.starting_position!r}")
    if observation.endgame_climb is not None and not isinstance(
        observation.endgame_climb, EndgameClimb
    ):
        raise InvalidInputError(f"Unknown endgame_climb {observation.endgame_climb!r}")

    for name in BOOLEAN_FIELDS:
        if not isinstance(getattr(observation, name), bool):
            raise InvalidInputError(f"{name} must be a boolean, got {getattr(observation, name)!r}")

    if _require_int(observation.endgame_trap_count, "endgame_trap_count") not in TRAP_COUNTS:
        raise InvalidInputError(
            f"endgame_trap_count must be between 0 and {MAX_TRAP_COUNT}, "
            f"got {observation.endgame_trap_count!r}"
        )
    if observation.driver_rating is not None and not (
        MIN_DRIVER_RATING <= _require_int(observation.driver_rating, "driver_rating") <= MAX_DRIVER_RATING
    ):
        raise InvalidInputError(
            f"driver_rating must be between {MIN_DRIVER_RATING} and {MAX_DRIVER_RATING}, "
            f"got {observation.driver_rating}"
        )
    if observation.comments is not None and not isinstance(observation.comments, str):
        raise InvalidInputError(f"comments must be a string, got {observation.comments!r}")
    if observation.comments is not None and len(observation.comments) > MAX_COMMENT_LENGTH:
        raise InvalidInputError(f"comments must be at most {MAX_COMMENT_LENGTH} characters")


def coerce_observation_fields(values: dict[str, Any]) -> dict[str, Any]:
    """Convert raw string enum values into their enum members."""
    coerced = dict(values)
    unknown = sorted(set(coerced) - set(OBSERVATION_FIELDS))
    if unknown:
        raise InvalidInputError(f"Unknown match fields: {unknown}")

    position = coerced.get("starting_position")
    if isinstance(position, str) and not isinstance(position, StartingPosition):
        try:
            coerced["starting_position"] = StartingPosition(position)
        except ValueError as exc:
            raise InvalidInputError(f"Unknown starting_position {position!r}") from exc

    climb = coerced.get("endgame_climb")
    if isinstance(climb, str) and not isinstance(climb, EndgameClimb):
        try:
            coerced["endgame_climb"] = EndgameClimb(climb)
        except ValueError as exc:
            raise InvalidInputError(f"Unknown endgame_climb {climb!r}") from exc

    return coerced


__all__ = [
    "AUTO_POSITIONS",
    "BOOLEAN_FIELDS",
    "CLIMB_KEYS",
    "COUNTER_FIELDS",
    "EndgameClimb",
    "MatchObservation",
    "OBSERVATION_FIELDS",
    "StartingPosition",
    "TRAP_COUNTS",
    "coerce_observation_fields",
    "require_identifier",
    "validate_observation",
]
