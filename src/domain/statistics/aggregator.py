"""Recompute and rank per-team aggregate statistics for a regional."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.orm import Session, sessionmaker

from domain.common import require_identifier
from domain.statistics.calculator import TeamStatistics, calculate_team_statistics
from domain.statistics.ranking import RankedTeam, rank_phases, rank_teams
from domain.statistics.weights import ScoringWeights
from repositories.match_repository import fetch_match_observations
from repositories.roster_repository import registered_team_ids
from repositories.statistics_repository import (
    fetch_team_score_summaries,
    store_phase_ranks,
    upsert_team_ranking,
    upsert_team_stats_fraction,
    upsert_team_stats_percentage,
)
from repositories.store import RecordStore, SqlAlchemyRecordStore

logger = logging.getLogger(__name__)

StoreFactory = Callable[[Session], RecordStore]

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class RecomputeResult:
    """Outcome for one team inside a regional-wide recompute."""

    team_id: int
    status: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_SUCCESS


@dataclass(frozen=True)
class RecomputeReport:
    regional_id: int
    results: tuple[RecomputeResult, ...]

    @property
    def succeeded(self) -> list[int]:
        return [result.team_id for result in self.results if result.ok]

    @property
    def failed(self) -> list[RecomputeResult]:
        return [result for result in self.results if not result.ok]


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class StatisticsAggregator:
    """Sole writer of team_stats_percentage, team_stats_fraction and team_rankings."""

    def __init__(
        self,
        *,
        session_factory: sessionmaker[Session],
        weights: ScoringWeights,
        store_factory: StoreFactory = SqlAlchemyRecordStore,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.session_factory = session_factory
        self.weights = weights
        self.store_factory = store_factory
        self.clock = clock

    def recompute(self, team_id: int, regional_id: int) -> TeamStatistics:
        """Rebuild the three aggregate rows for one (team, regional) pair.

        The read and the three upserts share one transaction, so a store
        failure leaves the previous aggregate rows untouched.
        """
        team_id = require_identifier(team_id, "team_id")
        regional_id = require_identifier(regional_id, "regional_id")

        with self.session_factory() as session:
            store = self.store_factory(session)
            with store.transaction():
                matches = fetch_match_observations(store, team_id=team_id, regional_id=regional_id)
                statistics = calculate_team_statistics(matches, self.weights)
                calculated_at = self.clock()

                upsert_team_stats_percentage(
                    store,
                    team_id=team_id,
                    regional_id=regional_id,
                    percentages=statistics.percentages,
                    total_matches=statistics.matches_played,
                    calculated_at=calculated_at,
                )
                upsert_team_stats_fraction(
                    store,
                    team_id=team_id,
                    regional_id=regional_id,
                    fractions=statistics.fractions,
                    total_matches=statistics.matches_played,
                    calculated_at=calculated_at,
                )
                upsert_team_ranking(
                    store,
                    team_id=team_id,
                    regional_id=regional_id,
                    scores=statistics.scores,
                    matches_played=statistics.matches_played,
                    calculated_at=calculated_at,
                )

        logger.info(
            "statistics updated team_id=%s regional_id=%s matches=%s overall_score=%.2f",
            team_id,
            regional_id,
            statistics.matches_played,
            statistics.scores.overall_score,
        )
        return statistics

    def recompute_all(self, regional_id: int) -> RecomputeReport:
        """Recompute every registered team; one team's failure never stops the rest."""
        regional_id = require_identifier(regional_id, "regional_id")

        with self.session_factory() as session:
            store = self.store_factory(session)
            with store.transaction():
                team_ids = registered_team_ids(store, regional_id=regional_id)

        results: list[RecomputeResult] = []
        for team_id in team_ids:
            try:
                self.recompute(team_id, regional_id)
            except Exception as exc:
                logger.warning(
                    "statistics failed team_id=%s regional_id=%s: %s",
                    team_id,
                    regional_id,
                    exc,
                    exc_info=True,
                )
                results.append(RecomputeResult(team_id=team_id, status=STATUS_ERROR, error=str(exc)))
            else:
                results.append(RecomputeResult(team_id=team_id, status=STATUS_SUCCESS))

        report = RecomputeReport(regional_id=regional_id, results=tuple(results))
        logger.info(
            "regional recompute regional_id=%s teams=%s failed=%s",
            regional_id,
            len(results),
            len(report.failed),
        )
        return report

    def rankings(self, regional_id: int) -> list[RankedTeam]:
        """Leaderboard by overall score; ties keep retrieval order."""
        regional_id = require_identifier(regional_id, "regional_id")

        with self.session_factory() as session:
            store = self.store_factory(session)
            with store.transaction():
                summaries = fetch_team_score_summaries(store, regional_id=regional_id)
        return rank_teams(summaries)

    def persist_rankings(self, regional_id: int) -> list[RankedTeam]:
        """Write overall and per-phase ranks onto team_rankings and return the leaderboard."""
        regional_id = require_identifier(regional_id, "regional_id")

        with self.session_factory() as session:
            store = self.store_factory(session)
            with store.transaction():
                summaries = fetch_team_score_summaries(store, regional_id=regional_id)
                store_phase_ranks(store, regional_id=regional_id, ranks=rank_phases(summaries))
        return rank_teams(summaries)


__all__ = [
    "RecomputeReport",
    "RecomputeResult",
    "StatisticsAggregator",
    "StoreFactory",
]
