"""Leaderboard ordering for composite team scores."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class TeamScoreSummary:
    """One team_rankings row as read back from the store."""

    team_id: int
    overall_score: float
    auto_score: float
    teleop_score: float
    endgame_score: float
    matches_played: int


@dataclass(frozen=True)
class RankedTeam:
    rank: int
    team_id: int
    overall_score: float
    auto_score: float
    teleop_score: float
    endgame_score: float
    matches_played: int


@dataclass(frozen=True)
class PhaseRanks:
    overall_rank: int
    auto_rank: int
    teleop_rank: int
    endgame_rank: int


def _rank_positions(
    summaries: Sequence[TeamScoreSummary],
    score: Callable[[TeamScoreSummary], float],
) -> list[tuple[int, TeamScoreSummary]]:
    # sorted() is stable with reverse=True, so ties keep retrieval order.
    ordered = sorted(summaries, key=score, reverse=True)
    return list(enumerate(ordered, start=1))


def rank_teams(summaries: Sequence[TeamScoreSummary]) -> list[RankedTeam]:
    """Order by overall score descending and assign ranks 1..N by position."""
    return [
        RankedTeam(
            rank=rank,
            team_id=summary.team_id,
            overall_score=summary.overall_score,
            auto_score=summary.auto_score,
            teleop_score=summary.teleop_score,
            endgame_score=summary.endgame_score,
            matches_played=summary.matches_played,
        )
        for rank, summary in _rank_positions(summaries, lambda item: item.overall_score)
    ]


def rank_phases(summaries: Sequence[TeamScoreSummary]) -> dict[int, PhaseRanks]:
    """Overall and per-phase ranks keyed by team id."""
    columns: dict[str, dict[int, int]] = {}
    for column, score in (
        ("overall_rank", lambda item: item.overall_score),
        ("auto_rank", lambda item: item.auto_score),
        ("teleop_rank", lambda item: item.teleop_score),
        ("endgame_rank", lambda item: item.endgame_score),
    ):
        columns[column] = {
            summary.team_id: rank for rank, summary in _rank_positions(summaries, score)
        }

    return {
        summary.team_id: PhaseRanks(
            overall_rank=columns["overall_rank"][summary.team_id],
            auto_rank=columns["auto_rank"][summary.team_id],
            teleop_rank=columns["teleop_rank"][summary.team_id],
            endgame_rank=columns["endgame_rank"][summary.team_id],
        )
        for summary in summaries
    }


__all__ = ["PhaseRanks", "RankedTeam", "TeamScoreSummary", "rank_phases", "rank_teams"]
