"""Store-backed tests for match writes and the recompute they trigger."""

from __future__ import annotations

import logging

import pytest
from sqlalchemy.orm import Session, sessionmaker

from domain.common import EndgameClimb, MatchObservation, StartingPosition
from domain.errors import (
    InvalidInputError,
    RecordConflictError,
    RecordNotFoundError,
    StoreUnavailableError,
)
from domain.matches import MatchLedger
from domain.statistics.aggregator import StatisticsAggregator
from repositories.statistics_repository import fetch_team_stats
from repositories.store import SqlAlchemyRecordStore

from conftest import Roster


@pytest.fixture
def ledger(session_factory: sessionmaker[Session], aggregator: StatisticsAggregator) -> MatchLedger:
    return MatchLedger(session_factory=session_factory, aggregator=aggregator)


def _overall_score(session_factory: sessionmaker[Session], team_id: int, regional_id: int) -> float | None:
    with session_factory() as session:
        _, _, ranking = fetch_team_stats(SqlAlchemyRecordStore(session), team_id=team_id, regional_id=regional_id)
    return None if ranking is None else ranking.overall_score


def test_create_match_recomputes_team(
    session_factory: sessionmaker[Session],
    roster: Roster,
    ledger: MatchLedger,
) -> None:
    team_id = roster.team_ids[0]
    match_id = ledger.create_match(
        MatchObservation(
            team_id=team_id,
            regional_id=roster.regional_id,
            match_number=12,
            scouter_name="Avery",
            starting_position=StartingPosition.MIDDLE,
            auto_taxi=True,
            teleop_amp_scored=4,
            endgame_climb=EndgameClimb.SINGLE_CLIMB,
            driver_rating=3,
        )
    )

    stored = ledger.get_match(match_id)
    assert stored.starting_position is StartingPosition.MIDDLE
    assert stored.endgame_climb is EndgameClimb.SINGLE_CLIMB
    assert stored.scouter_name == "Avery"
    # taxi 2 + amp 4 + single climb 3
    assert _overall_score(session_factory, team_id, roster.regional_id) == pytest.approx(9.0)


def test_update_match_merges_changes_and_recomputes(
    session_factory: sessionmaker[Session],
    roster: Roster,
    ledger: MatchLedger,
) -> None:
    team_id = roster.team_ids[0]
    match_id = ledger.create_match(
        MatchObservation(team_id=team_id, regional_id=roster.regional_id, match_number=3, teleop_speaker_scored=2)
    )

    updated = ledger.update_match(match_id, {"teleop_speaker_scored": 5, "endgame_climb": "Park"})

    assert updated.teleop_speaker_scored == 5
    assert updated.endgame_climb is EndgameClimb.PARK
    assert updated.match_number == 3
    assert _overall_score(session_factory, team_id, roster.regional_id) == pytest.approx(10.0)


def test_moving_a_match_recomputes_both_pairs(
    session_factory: sessionmaker[Session],
    roster: Roster,
    ledger: MatchLedger,
) -> None:
    source_team, target_team = roster.team_ids[:2]
    match_id = ledger.create_match(
        MatchObservation(team_id=source_team, regional_id=roster.regional_id, match_number=7, auto_s3=2)
    )
    assert _overall_score(session_factory, source_team, roster.regional_id) == pytest.approx(10.0)

    ledger.update_match(match_id, {"team_id": target_team})

    assert _overall_score(session_factory, source_team, roster.regional_id) == pytest.approx(0.0)
    assert _overall_score(session_factory, target_team, roster.regional_id) == pytest.approx(10.0)
    assert len(ledger.list_matches(target_team, roster.regional_id)) == 1
    assert ledger.list_matches(source_team, roster.regional_id) == []


def test_delete_match_recomputes_to_zero_state(
    session_factory: sessionmaker[Session],
    roster: Roster,
    ledger: MatchLedger,
) -> None:
    team_id = roster.team_ids[3]
    match_id = ledger.create_match(
        MatchObservation(team_id=team_id, regional_id=roster.regional_id, match_number=1, auto_r=1)
    )

    removed = ledger.delete_match(match_id)

    assert removed.auto_r == 1
    assert _overall_score(session_factory, team_id, roster.regional_id) == pytest.approx(0.0)
    with pytest.raises(RecordNotFoundError):
        ledger.get_match(match_id)


def test_unknown_match_ids_raise_not_found(roster: Roster, ledger: MatchLedger) -> None:
    with pytest.raises(RecordNotFoundError):
        ledger.get_match(999)
    with pytest.raises(RecordNotFoundError):
        ledger.update_match(999, {"auto_m1": 1})
    with pytest.raises(RecordNotFoundError):
        ledger.delete_match(999)


def test_invalid_observation_is_rejected(roster: Roster, ledger: MatchLedger) -> None:
    with pytest.raises(InvalidInputError, match="endgame_trap_count"):
        ledger.create_match(
            MatchObservation(
                team_id=roster.team_ids[0],
                regional_id=roster.regional_id,
                match_number=1,
                endgame_trap_count=4,
            )
        )
    assert ledger.list_matches(roster.team_ids[0], roster.regional_id) == []


def test_invalid_update_leaves_record_unchanged(roster: Roster, ledger: MatchLedger) -> None:
    match_id = ledger.create_match(
        MatchObservation(team_id=roster.team_ids[0], regional_id=roster.regional_id, match_number=2, driver_rating=4)
    )

    with pytest.raises(InvalidInputError, match="driver_rating"):
        ledger.update_match(match_id, {"driver_rating": 9})
    with pytest.raises(InvalidInputError, match="Unknown match fields"):
        ledger.update_match(match_id, {"auto_m9": 1})
    with pytest.raises(InvalidInputError, match="driver_rating must be an integer"):
        ledger.update_match(match_id, {"driver_rating": "4"})
    with pytest.raises(InvalidInputError, match="match_number must be an integer"):
        ledger.update_match(match_id, {"match_number": "7"})

    stored = ledger.get_match(match_id)
    assert stored.driver_rating == 4
    assert stored.match_number == 2


def test_duplicate_match_number_is_a_conflict(roster: Roster, ledger: MatchLedger) -> None:
    observation = MatchObservation(team_id=roster.team_ids[1], regional_id=roster.regional_id, match_number=5)
    ledger.create_match(observation)

    with pytest.raises(RecordConflictError):
        ledger.create_match(observation)
    assert issubclass(RecordConflictError, StoreUnavailableError)


def test_recompute_failure_does_not_undo_the_write(
    session_factory: sessionmaker[Session],
    roster: Roster,
    caplog: pytest.LogCaptureFixture,
) -> None:
    class BrokenAggregator:
        def recompute(self, team_id: int, regional_id: int) -> None:
            raise StoreUnavailableError("aggregate tables locked")

    ledger = MatchLedger(session_factory=session_factory, aggregator=BrokenAggregator())  # type: ignore[arg-type]

    with caplog.at_level(logging.ERROR, logger="domain.matches"):
        match_id = ledger.create_match(
            MatchObservation(team_id=roster.team_ids[2], regional_id=roster.regional_id, match_number=8)
        )

    assert ledger.get_match(match_id).match_number == 8
    assert "recompute failed" in caplog.text
