"""Tests for the store activity feed."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session, sessionmaker

from domain.common import MatchObservation
from domain.statistics.aggregator import StatisticsAggregator
from domain.statistics.weights import ScoringWeights
from repositories.activity import ActivityFeed, ObservedRecordStore, observed_store_factory
from repositories.match_repository import count_matches, insert_match
from repositories.store import RecordStore

from conftest import Roster


def test_feed_is_bounded_and_newest_first() -> None:
    feed = ActivityFeed(max_entries=3)
    for number in range(5):
        feed.record("job", f"step {number}")

    assert len(feed) == 3
    assert [entry.message for entry in feed.recent()] == ["step 4", "step 3", "step 2"]
    assert [entry.message for entry in feed.recent(limit=1)] == ["step 4"]

    feed.clear()
    assert len(feed) == 0


def test_feed_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError, match="max_entries"):
        ActivityFeed(max_entries=0)


def test_observed_store_records_every_access(
    session_factory: sessionmaker[Session],
    roster: Roster,
) -> None:
    feed = ActivityFeed()
    aggregator = StatisticsAggregator(
        session_factory=session_factory,
        weights=ScoringWeights(),
        store_factory=observed_store_factory(feed),
    )

    aggregator.recompute(roster.team_ids[0], roster.regional_id)

    messages = [entry.message for entry in reversed(feed.recent())]
    assert messages == [
        "SELECT from matches",
        "UPSERT into team_stats_percentage",
        "UPSERT into team_stats_fraction",
        "UPSERT into team_rankings",
    ]
    assert all(entry.source == "store" for entry in feed.recent())
    assert feed.recent()[-1].details["filters"] == {
        "team_id": roster.team_ids[0],
        "regional_id": roster.regional_id,
    }


def test_observed_store_delegates_writes(
    session_factory: sessionmaker[Session],
    roster: Roster,
) -> None:
    feed = ActivityFeed()
    with session_factory() as session:
        store = observed_store_factory(feed)(session)
        assert isinstance(store, ObservedRecordStore)
        assert isinstance(store, RecordStore)
        with store.transaction():
            insert_match(
                store,
                MatchObservation(team_id=roster.team_ids[0], regional_id=roster.regional_id, match_number=1),
            )
            assert count_matches(store, regional_id=roster.regional_id) == 1

    assert [entry.message for entry in feed.recent()] == ["COUNT from matches", "INSERT into matches"]
