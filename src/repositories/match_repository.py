"""Persistence helpers for match scouting records."""

from __future__ import annotations

from dataclasses import asdict
from enum import Enum
from typing import Any

from domain.common import (
    OBSERVATION_FIELDS,
    EndgameClimb,
    MatchObservation,
    StartingPosition,
)
from models import MatchRecord
from repositories.store import RecordStore


def observation_to_values(observation: MatchObservation) -> dict[str, Any]:
    """Column values for a matches row; enum members become their stored strings."""
    return {
        column: value.value if isinstance(value, Enum) else value
        for column, value in asdict(observation).items()
    }


def record_to_observation(record: MatchRecord) -> MatchObservation:
    values = {column: getattr(record, column) for column in OBSERVATION_FIELDS}
    if values["starting_position"] is not None:
        values["starting_position"] = StartingPosition(values["starting_position"])
    if values["endgame_climb"] is not None:
        values["endgame_climb"] = EndgameClimb(values["endgame_climb"])
    return MatchObservation(**values)


def fetch_match_observations(
    store: RecordStore,
    *,
    team_id: int,
    regional_id: int,
) -> list[MatchObservation]:
    """All observations for one (team, regional) pair, in insertion order."""
    records = store.query(MatchRecord, {"team_id": team_id, "regional_id": regional_id})
    return [record_to_observation(record) for record in records]


def insert_match(store: RecordStore, observation: MatchObservation) -> MatchRecord:
    return store.insert(MatchRecord, observation_to_values(observation))


def update_match(
    store: RecordStore,
    match_id: int,
    observation: MatchObservation,
    *,
    updated_at: Any,
) -> MatchRecord | None:
    values = observation_to_values(observation)
    values["updated_at"] = updated_at
    return store.update(MatchRecord, match_id, values)


def get_match(store: RecordStore, match_id: int) -> MatchRecord | None:
    return store.get(MatchRecord, match_id)


def delete_match(store: RecordStore, match_id: int) -> bool:
    return store.delete(MatchRecord, match_id)


def count_matches(store: RecordStore, *, regional_id: int | None = None) -> int:
    filters = None if regional_id is None else {"regional_id": regional_id}
    return store.count(MatchRecord, filters)


__all__ = [
    "count_matches",
    "delete_match",
    "fetch_match_observations",
    "get_match",
    "insert_match",
    "observation_to_values",
    "record_to_observation",
    "update_match",
]
