"""team_stats_percentage, team_stats_fraction and team_rankings table models."""

from __future__ import annotations

from sqlalchemy import Float, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.mixins import MatchTotalMixin, TeamRegionalAggregateMixin


def _percent() -> Mapped[float]:
    return mapped_column(Float, nullable=False, default=0.0)


def _fraction() -> Mapped[str]:
    return mapped_column(String(32), nullable=False, default="0/0")


def _total() -> Mapped[int]:
    return mapped_column(Integer, nullable=False, default=0)


class TeamStatsPercentage(TeamRegionalAggregateMixin, MatchTotalMixin, Base):
    """Derived per-team percentages for one regional."""

    __tablename__ = "team_stats_percentage"
    __table_args__ = (
        UniqueConstraint("team_id", "regional_id", name="uq_team_stats_percentage_team_regional"),
        Index("idx_stats_percentage_team_regional", "team_id", "regional_id"),
    )

    pregame_amp_percent: Mapped[float] = _percent()
    pregame_middle_percent: Mapped[float] = _percent()
    pregame_source_percent: Mapped[float] = _percent()

    auto_taxi_percent: Mapped[float] = _percent()
    auto_m1_percent: Mapped[float] = _percent()
    auto_m2_percent: Mapped[float] = _percent()
    auto_m3_percent: Mapped[float] = _percent()
    auto_m4_percent: Mapped[float] = _percent()
    auto_m5_percent: Mapped[float] = _percent()
    auto_s1_percent: Mapped[float] = _percent()
    auto_s2_percent: Mapped[float] = _percent()
    auto_s3_percent: Mapped[float] = _percent()
    auto_r_percent: Mapped[float] = _percent()

    teleop_amp_percent: Mapped[float] = _percent()
    teleop_speaker_percent: Mapped[float] = _percent()
    teleop_ground_intake_percent: Mapped[float] = _percent()
    teleop_source_intake_percent: Mapped[float] = _percent()

    endgame_nothing_percent: Mapped[float] = _percent()
    endgame_park_percent: Mapped[float] = _percent()
    endgame_single_climb_percent: Mapped[float] = _percent()
    endgame_double_climb_percent: Mapped[float] = _percent()
    endgame_triple_climb_percent: Mapped[float] = _percent()
    endgame_0_trap_percent: Mapped[float] = _percent()
    endgame_1_trap_percent: Mapped[float] = _percent()
    endgame_2_trap_percent: Mapped[float] = _percent()
    endgame_3_trap_percent: Mapped[float] = _percent()

    postgame_driver_rating_avg: Mapped[float] = _percent()
    postgame_disabled_percent: Mapped[float] = _percent()
    postgame_defense_percent: Mapped[float] = _percent()


class TeamStatsFraction(TeamRegionalAggregateMixin, MatchTotalMixin, Base):
    """Derived per-team "numerator/denominator" display strings for one regional."""

    __tablename__ = "team_stats_fraction"
    __table_args__ = (
        UniqueConstraint("team_id", "regional_id", name="uq_team_stats_fraction_team_regional"),
        Index("idx_stats_fraction_team_regional", "team_id", "regional_id"),
    )

    pregame_amp_fraction: Mapped[str] = _fraction()
    pregame_middle_fraction: Mapped[str] = _fraction()
    pregame_source_fraction: Mapped[str] = _fraction()
    pregame_total: Mapped[int] = _total()

    auto_taxi_fraction: Mapped[str] = _fraction()
    auto_m1_fraction: Mapped[str] = _fraction()
    auto_m2_fraction: Mapped[str] = _fraction()
    auto_m3_fraction: Mapped[str] = _fraction()
    auto_m4_fraction: Mapped[str] = _fraction()
    auto_m5_fraction: Mapped[str] = _fraction()
    auto_s1_fraction: Mapped[str] = _fraction()
    auto_s2_fraction: Mapped[str] = _fraction()
    auto_s3_fraction: Mapped[str] = _fraction()
    auto_r_fraction: Mapped[str] = _fraction()
    auto_total: Mapped[int] = _total()

    teleop_amp_fraction: Mapped[str] = _fraction()
    teleop_speaker_fraction: Mapped[str] = _fraction()
    teleop_ground_intake_fraction: Mapped[str] = _fraction()
    teleop_source_intake_fraction: Mapped[str] = _fraction()
    teleop_amp_total: Mapped[int] = _total()
    teleop_speaker_total: Mapped[int] = _total()
    teleop_intake_total: Mapped[int] = _total()

    endgame_nothing_fraction: Mapped[str] = _fraction()
    endgame_park_fraction: Mapped[str] = _fraction()
    endgame_single_climb_fraction: Mapped[str] = _fraction()
    endgame_double_climb_fraction: Mapped[str] = _fraction()
    endgame_triple_climb_fraction: Mapped[str] = _fraction()
    endgame_0_trap_fraction: Mapped[str] = _fraction()
    endgame_1_trap_fraction: Mapped[str] = _fraction()
    endgame_2_trap_fraction: Mapped[str] = _fraction()
    endgame_3_trap_fraction: Mapped[str] = _fraction()
    endgame_total: Mapped[int] = _total()
    endgame_trap_total: Mapped[int] = _total()

    postgame_disabled_fraction: Mapped[str] = _fraction()
    postgame_defense_fraction: Mapped[str] = _fraction()
    postgame_total: Mapped[int] = _total()


class TeamRanking(TeamRegionalAggregateMixin, Base):
    """Composite score per team and regional, plus the last persisted ranks."""

    __tablename__ = "team_rankings"
    __table_args__ = (
        UniqueConstraint("team_id", "regional_id", name="uq_team_rankings_team_regional"),
        Index("idx_rankings_team_regional", "team_id", "regional_id"),
        Index("idx_rankings_overall_rank", "regional_id", "overall_rank"),
    )

    overall_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    auto_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    teleop_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    endgame_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)

    overall_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    auto_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    teleop_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    endgame_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    matches_played: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
