"""Get-or-create helpers for seasons, regionals, teams and registrations."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from models import Regional, Season, Team, TeamRegionalParticipation
from repositories.store import RecordStore


def _without_none(values: dict[str, Any]) -> dict[str, Any]:
    # Optional columns are only written when given, so an existing value is kept.
    return {column: value for column, value in values.items() if value is not None}


def ensure_season(
    store: RecordStore,
    *,
    season_year: int,
    season_name: str | None = None,
    game_name: str | None = None,
) -> Season:
    existing = store.query(Season, {"season_year": season_year})
    values = _without_none({"season_year": season_year, "season_name": season_name, "game_name": game_name})
    if not existing and "season_name" not in values:
        values["season_name"] = f"{season_year} Season"
    return store.upsert(Season, values, ("season_year",))


def ensure_regional(
    store: RecordStore,
    *,
    season_id: int,
    regional_name: str,
    regional_code: str | None = None,
) -> Regional:
    values = _without_none(
        {"season_id": season_id, "regional_name": regional_name, "regional_code": regional_code}
    )
    return store.upsert(Regional, values, ("season_id", "regional_name"))


def ensure_team(
    store: RecordStore,
    *,
    team_number: int,
    team_name: str | None = None,
) -> Team:
    if team_number <= 0:
        raise ValueError(f"team_number must be > 0, got {team_number}")
    existing = store.query(Team, {"team_number": team_number})
    values = _without_none({"team_number": team_number, "team_name": team_name})
    if not existing and "team_name" not in values:
        values["team_name"] = f"Team {team_number}"
    return store.upsert(Team, values, ("team_number",))


def register_team(store: RecordStore, *, team_id: int, regional_id: int) -> TeamRegionalParticipation:
    return store.upsert(
        TeamRegionalParticipation,
        {"team_id": team_id, "regional_id": regional_id},
        ("team_id", "regional_id"),
    )


def registered_team_ids(store: RecordStore, *, regional_id: int) -> list[int]:
    """Teams registered for a regional, in registration order."""
    rows = store.query(TeamRegionalParticipation, {"regional_id": regional_id})
    return [row.team_id for row in rows]


def team_numbers_by_id(store: RecordStore, team_ids: Iterable[int]) -> dict[int, int]:
    numbers: dict[int, int] = {}
    for team_id in team_ids:
        team = store.get(Team, team_id)
        if team is not None:
            numbers[team_id] = team.team_number
    return numbers


__all__ = [
    "ensure_regional",
    "ensure_season",
    "ensure_team",
    "register_team",
    "registered_team_ids",
    "team_numbers_by_id",
]
