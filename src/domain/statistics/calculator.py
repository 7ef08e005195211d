"""Fold a team's match observations into percentage, fraction and score summaries."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from domain.common import (
    AUTO_POSITIONS,
    CLIMB_KEYS,
    TRAP_COUNTS,
    EndgameClimb,
    MatchObservation,
    StartingPosition,
)
from domain.statistics.weights import ScoringWeights

MAX_PERCENT = 100.0


@dataclass
class StatisticsCounters:
    """Running sums for one (team, regional) pair, filled in one pass."""

    matches: int = 0
    starting_positions: Counter[StartingPosition] = field(default_factory=Counter)
    auto_taxi: int = 0
    auto_positions: Counter[str] = field(default_factory=Counter)
    teleop_amp_attempts: int = 0
    teleop_amp_scored: int = 0
    teleop_speaker_attempts: int = 0
    teleop_speaker_scored: int = 0
    teleop_ground_intake: int = 0
    teleop_source_intake: int = 0
    endgame_climbs: Counter[EndgameClimb] = field(default_factory=Counter)
    endgame_traps: Counter[int] = field(default_factory=Counter)
    endgame_trap_sum: int = 0
    driver_rating_sum: int = 0
    robot_disabled: int = 0
    played_defense: int = 0

    def add(self, match: MatchObservation) -> None:
        self.matches += 1

        if match.starting_position is not None:
            self.starting_positions[match.starting_position] += 1

        if match.auto_taxi:
            self.auto_taxi += 1
        for position in AUTO_POSITIONS:
            self.auto_positions[position] += match.auto_position_count(position)

        self.teleop_amp_attempts += match.teleop_amp_attempts
        self.teleop_amp_scored += match.teleop_amp_scored
        self.teleop_speaker_attempts += match.teleop_speaker_attempts
        self.teleop_speaker_scored += match.teleop_speaker_scored
        self.teleop_ground_intake += match.teleop_ground_intake
        self.teleop_source_intake += match.teleop_source_intake

        if match.endgame_climb is not None:
            self.endgame_climbs[match.endgame_climb] += 1
        self.endgame_traps[match.endgame_trap_count] += 1
        self.endgame_trap_sum += match.endgame_trap_count

        self.driver_rating_sum += match.driver_rating or 0
        if match.robot_disabled:
            self.robot_disabled += 1
        if match.played_defense:
            self.played_defense += 1

    @property
    def auto_position_total(self) -> int:
        return sum(self.auto_positions[position] for position in AUTO_POSITIONS)


@dataclass(frozen=True)
class TeamScores:
    auto_score: float
    teleop_score: float
    endgame_score: float
    overall_score: float


@dataclass(frozen=True)
class TeamStatistics:
    """Everything one recompute writes for a (team, regional) pair."""

    matches_played: int
    percentages: dict[str, float]
    fractions: dict[str, str | int]
    scores: TeamScores


def occurrence_percent(count: int, total_matches: int) -> float:
    """Share of matches, capped at 100 because a counter can exceed one per match."""
    if total_matches <= 0:
        return 0.0
    return min(MAX_PERCENT * count / total_matches, MAX_PERCENT)


def per_match_percent(count: int, total_matches: int) -> float:
    """Count per match as a percentage; intakes can happen several times a match."""
    if total_matches <= 0:
        return 0.0
    return MAX_PERCENT * count / total_matches


def accuracy_percent(scored: int, attempts: int) -> float:
    """Scored over attempted; values above 100 point at bad upstream data and are kept."""
    if attempts <= 0:
        return 0.0
    return MAX_PERCENT * scored / attempts


def format_fraction(numerator: int, denominator: int) -> str:
    return f"{numerator}/{denominator}"


def accumulate(matches: Iterable[MatchObservation]) -> StatisticsCounters:
    counters = StatisticsCounters()
    for match in matches:
        counters.add(match)
    return counters


def calculate_percentages(counters: StatisticsCounters) -> dict[str, float]:
    total = counters.matches
    percentages: dict[str, float] = {}

    for position in StartingPosition:
        key = position.value.lower()
        percentages[f"pregame_{key}_percent"] = occurrence_percent(
            counters.starting_positions[position], total
        )

    percentages["auto_taxi_percent"] = occurrence_percent(counters.auto_taxi, total)
    for position in AUTO_POSITIONS:
        percentages[f"auto_{position}_percent"] = occurrence_percent(
            counters.auto_positions[position], total
        )

    percentages["teleop_amp_percent"] = accuracy_percent(
        counters.teleop_amp_scored, counters.teleop_amp_attempts
    )
    percentages["teleop_speaker_percent"] = accuracy_percent(
        counters.teleop_speaker_scored, counters.teleop_speaker_attempts
    )
    percentages["teleop_ground_intake_percent"] = per_match_percent(
        counters.teleop_ground_intake, total
    )
    percentages["teleop_source_intake_percent"] = per_match_percent(
        counters.teleop_source_intake, total
    )

    for climb, key in CLIMB_KEYS.items():
        percentages[f"endgame_{key}_percent"] = occurrence_percent(
            counters.endgame_climbs[climb], total
        )
    for trap_count in TRAP_COUNTS:
        percentages[f"endgame_{trap_count}_trap_percent"] = occurrence_percent(
            counters.endgame_traps[trap_count], total
        )

    percentages["postgame_driver_rating_avg"] = (
        counters.driver_rating_sum / total if total > 0 else 0.0
    )
    percentages["postgame_disabled_percent"] = occurrence_percent(counters.robot_disabled, total)
    percentages["postgame_defense_percent"] = occurrence_percent(counters.played_defense, total)
    return percentages


def calculate_fractions(counters: StatisticsCounters) -> dict[str, str | int]:
    total = counters.matches
    fractions: dict[str, str | int] = {}

    for position in StartingPosition:
        key = position.value.lower()
        fractions[f"pregame_{key}_fraction"] = format_fraction(
            counters.starting_positions[position], total
        )
    fractions["pregame_total"] = total

    fractions["auto_taxi_fraction"] = format_fraction(counters.auto_taxi, total)
    for position in AUTO_POSITIONS:
        fractions[f"auto_{position}_fraction"] = format_fraction(
            counters.auto_positions[position], total
        )
    fractions["auto_total"] = counters.auto_position_total

    fractions["teleop_amp_fraction"] = format_fraction(
        counters.teleop_amp_scored, counters.teleop_amp_attempts
    )
    fractions["teleop_speaker_fraction"] = format_fraction(
        counters.teleop_speaker_scored, counters.teleop_speaker_attempts
    )
    fractions["teleop_ground_intake_fraction"] = format_fraction(
        counters.teleop_ground_intake, total
    )
    fractions["teleop_source_intake_fraction"] = format_fraction(
        counters.teleop_source_intake, total
    )
    fractions["teleop_amp_total"] = counters.teleop_amp_scored
    fractions["teleop_speaker_total"] = counters.teleop_speaker_scored
    fractions["teleop_intake_total"] = counters.teleop_ground_intake + counters.teleop_source_intake

    for climb, key in CLIMB_KEYS.items():
        fractions[f"endgame_{key}_fraction"] = format_fraction(counters.endgame_climbs[climb], total)
    for trap_count in TRAP_COUNTS:
        fractions[f"endgame_{trap_count}_trap_fraction"] = format_fraction(
            counters.endgame_traps[trap_count], total
        )
    fractions["endgame_total"] = total
    fractions["endgame_trap_total"] = counters.endgame_trap_sum

    fractions["postgame_disabled_fraction"] = format_fraction(counters.robot_disabled, total)
    fractions["postgame_defense_fraction"] = format_fraction(counters.played_defense, total)
    fractions["postgame_total"] = total
    return fractions


def calculate_scores(counters: StatisticsCounters, weights: ScoringWeights) -> TeamScores:
    auto_score = counters.auto_taxi * weights.auto_taxi + sum(
        counters.auto_positions[position] * weights.auto_position(position)
        for position in AUTO_POSITIONS
    )
    teleop_score = (
        counters.teleop_amp_scored * weights.teleop_amp
        + counters.teleop_speaker_scored * weights.teleop_speaker
    )
    endgame_score = sum(
        counters.endgame_climbs[climb] * weights.climb(climb) for climb in EndgameClimb
    ) + sum(counters.endgame_traps[trap_count] * weights.trap(trap_count) for trap_count in TRAP_COUNTS)

    return TeamScores(
        auto_score=auto_score,
        teleop_score=teleop_score,
        endgame_score=endgame_score,
        overall_score=auto_score + teleop_score + endgame_score,
    )


def calculate_team_statistics(
    matches: Iterable[MatchObservation],
    weights: ScoringWeights,
) -> TeamStatistics:
    """Derive all aggregates for one team; an empty input yields the zero state."""
    counters = accumulate(matches)
    return TeamStatistics(
        matches_played=counters.matches,
        percentages=calculate_percentages(counters),
        fractions=calculate_fractions(counters),
        scores=calculate_scores(counters, weights),
    )


__all__ = [
    "StatisticsCounters",
    "TeamScores",
    "TeamStatistics",
    "accumulate",
    "accuracy_percent",
    "calculate_fractions",
    "calculate_percentages",
    "calculate_scores",
    "calculate_team_statistics",
    "format_fraction",
    "occurrence_percent",
    "per_match_percent",
]
