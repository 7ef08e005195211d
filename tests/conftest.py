"""Shared fixtures for store-backed tests."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy.orm import Session, sessionmaker

from db import create_db_engine, create_session_factory, ensure_schema
from domain.statistics.aggregator import StatisticsAggregator
from domain.statistics.weights import ScoringWeights
from repositories.roster_repository import ensure_regional, ensure_season, ensure_team, register_team
from repositories.store import SqlAlchemyRecordStore

FIXED_NOW = datetime(2024, 3, 16, 12, 0, 0)


@dataclass(frozen=True)
class Roster:
    regional_id: int
    other_regional_id: int
    team_ids: tuple[int, ...]


@pytest.fixture
def session_factory(tmp_path: Path) -> Iterator[sessionmaker[Session]]:
    engine = create_db_engine(f"sqlite:///{tmp_path / 'scouting.db'}")
    ensure_schema(engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture
def roster(session_factory: sessionmaker[Session]) -> Roster:
    """One season, two regionals and four teams registered for the first regional."""
    with session_factory() as session:
        store = SqlAlchemyRecordStore(session)
        with store.transaction():
            season = ensure_season(store, season_year=2024, game_name="Crescendo")
            regional = ensure_regional(store, season_id=season.id, regional_name="Silicon Valley")
            other = ensure_regional(store, season_id=season.id, regional_name="Central Valley")
            team_ids = []
            for team_number in (254, 1678, 971, 604):
                team = ensure_team(store, team_number=team_number)
                register_team(store, team_id=team.id, regional_id=regional.id)
                team_ids.append(team.id)
            return Roster(
                regional_id=regional.id,
                other_regional_id=other.id,
                team_ids=tuple(team_ids),
            )


@pytest.fixture
def aggregator(session_factory: sessionmaker[Session]) -> StatisticsAggregator:
    return StatisticsAggregator(
        session_factory=session_factory,
        weights=ScoringWeights(),
        clock=lambda: FIXED_NOW,
    )
