"""Unit tests for leaderboard ordering."""

from __future__ import annotations

from domain.statistics.ranking import TeamScoreSummary, rank_phases, rank_teams


def _summary(team_id: int, overall: float, auto: float = 0.0, teleop: float = 0.0, endgame: float = 0.0) -> TeamScoreSummary:
    return TeamScoreSummary(
        team_id=team_id,
        overall_score=overall,
        auto_score=auto,
        teleop_score=teleop,
        endgame_score=endgame,
        matches_played=3,
    )


def test_rank_teams_orders_by_overall_score_with_stable_ties() -> None:
    summaries = [_summary(10, 50.0), _summary(20, 80.0), _summary(30, 80.0), _summary(40, 30.0)]

    ranked = rank_teams(summaries)

    assert [(team.team_id, team.rank) for team in ranked] == [(20, 1), (30, 2), (10, 3), (40, 4)]


def test_rank_teams_tie_order_follows_input_order() -> None:
    ranked = rank_teams([_summary(30, 80.0), _summary(20, 80.0)])
    assert [team.team_id for team in ranked] == [30, 20]


def test_rank_teams_empty_input() -> None:
    assert rank_teams([]) == []


def test_rank_teams_carries_phase_scores() -> None:
    ranked = rank_teams([_summary(7, 42.0, auto=12.0, teleop=20.0, endgame=10.0)])

    team = ranked[0]
    assert team.rank == 1
    assert team.auto_score == 12.0
    assert team.teleop_score == 20.0
    assert team.endgame_score == 10.0
    assert team.matches_played == 3


def test_rank_phases_ranks_each_phase_independently() -> None:
    summaries = [
        _summary(1, 60.0, auto=30.0, teleop=10.0, endgame=20.0),
        _summary(2, 70.0, auto=10.0, teleop=40.0, endgame=20.0),
        _summary(3, 20.0, auto=20.0, teleop=0.0, endgame=0.0),
    ]

    ranks = rank_phases(summaries)

    assert ranks[1].overall_rank == 2
    assert ranks[2].overall_rank == 1
    assert ranks[3].overall_rank == 3
    assert [ranks[team_id].auto_rank for team_id in (1, 2, 3)] == [1, 3, 2]
    assert [ranks[team_id].teleop_rank for team_id in (1, 2, 3)] == [2, 1, 3]
    assert [ranks[team_id].endgame_rank for team_id in (1, 2, 3)] == [1, 2, 3]
