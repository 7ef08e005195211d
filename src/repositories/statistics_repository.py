"""Persistence helpers for the per-(team, regional) aggregate tables."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from domain.statistics.calculator import TeamScores
from domain.statistics.ranking import PhaseRanks, TeamScoreSummary
from models import TeamRanking, TeamStatsFraction, TeamStatsPercentage
from repositories.store import RecordStore

TEAM_REGIONAL_KEY = ("team_id", "regional_id")


def upsert_team_stats_percentage(
    store: RecordStore,
    *,
    team_id: int,
    regional_id: int,
    percentages: Mapping[str, float],
    total_matches: int,
    calculated_at: datetime,
) -> TeamStatsPercentage:
    return store.upsert(
        TeamStatsPercentage,
        {
            "team_id": team_id,
            "regional_id": regional_id,
            **percentages,
            "total_matches": total_matches,
            "last_calculated": calculated_at,
        },
        TEAM_REGIONAL_KEY,
    )


def upsert_team_stats_fraction(
    store: RecordStore,
    *,
    team_id: int,
    regional_id: int,
    fractions: Mapping[str, str | int],
    total_matches: int,
    calculated_at: datetime,
) -> TeamStatsFraction:
    return store.upsert(
        TeamStatsFraction,
        {
            "team_id": team_id,
            "regional_id": regional_id,
            **fractions,
            "total_matches": total_matches,
            "last_calculated": calculated_at,
        },
        TEAM_REGIONAL_KEY,
    )


def upsert_team_ranking(
    store: RecordStore,
    *,
    team_id: int,
    regional_id: int,
    scores: TeamScores,
    matches_played: int,
    calculated_at: datetime,
) -> TeamRanking:
    """Write scores only; persisted rank columns are left as they are."""
    return store.upsert(
        TeamRanking,
        {
            "team_id": team_id,
            "regional_id": regional_id,
            "overall_score": scores.overall_score,
            "auto_score": scores.auto_score,
            "teleop_score": scores.teleop_score,
            "endgame_score": scores.endgame_score,
            "matches_played": matches_played,
            "last_calculated": calculated_at,
        },
        TEAM_REGIONAL_KEY,
    )


def fetch_team_score_summaries(store: RecordStore, *, regional_id: int) -> list[TeamScoreSummary]:
    """team_rankings rows for one regional, in retrieval order."""
    return [
        TeamScoreSummary(
            team_id=row.team_id,
            overall_score=float(row.overall_score),
            auto_score=float(row.auto_score),
            teleop_score=float(row.teleop_score),
            endgame_score=float(row.endgame_score),
            matches_played=int(row.matches_played),
        )
        for row in store.query(TeamRanking, {"regional_id": regional_id})
    ]


def store_phase_ranks(
    store: RecordStore,
    *,
    regional_id: int,
    ranks: Mapping[int, PhaseRanks],
) -> None:
    for team_id, phase_ranks in ranks.items():
        store.upsert(
            TeamRanking,
            {
                "team_id": team_id,
                "regional_id": regional_id,
                "overall_rank": phase_ranks.overall_rank,
                "auto_rank": phase_ranks.auto_rank,
                "teleop_rank": phase_ranks.teleop_rank,
                "endgame_rank": phase_ranks.endgame_rank,
            },
            TEAM_REGIONAL_KEY,
        )


def fetch_team_stats(
    store: RecordStore,
    *,
    team_id: int,
    regional_id: int,
) -> tuple[TeamStatsPercentage | None, TeamStatsFraction | None, TeamRanking | None]:
    """The three aggregate rows for one pair; missing rows come back as None."""
    key = {"team_id": team_id, "regional_id": regional_id}
    percentages = store.query(TeamStatsPercentage, key)
    fractions = store.query(TeamStatsFraction, key)
    rankings = store.query(TeamRanking, key)
    return (
        percentages[0] if percentages else None,
        fractions[0] if fractions else None,
        rankings[0] if rankings else None,
    )


__all__ = [
    "TEAM_REGIONAL_KEY",
    "fetch_team_score_summaries",
    "fetch_team_stats",
    "store_phase_ranks",
    "upsert_team_ranking",
    "upsert_team_stats_fraction",
    "upsert_team_stats_percentage",
]
