"""matches table model (one scouting observation of one team in one match)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base

_COUNTER_COLUMNS = (
    "auto_m1",
    "auto_m2",
    "auto_m3",
    "auto_m4",
    "auto_m5",
    "auto_s1",
    "auto_s2",
    "auto_s3",
    "auto_r",
    "teleop_amp_attempts",
    "teleop_amp_scored",
    "teleop_speaker_attempts",
    "teleop_speaker_scored",
    "teleop_ground_intake",
    "teleop_source_intake",
)


class MatchRecord(Base):
    """Per-team match scouting data, grouped by pregame/auto/teleop/endgame/postgame."""

    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint(
            "team_id",
            "regional_id",
            "match_number",
            name="uq_matches_team_regional_match",
        ),
        CheckConstraint("match_number > 0", name="ck_matches_match_number"),
        CheckConstraint(
            "starting_position IN ('Amp', 'Middle', 'Source')",
            name="ck_matches_starting_position",
        ),
        CheckConstraint(
            "endgame_climb IN ('Nothing', 'Park', 'Single Climb', 'Double Climb', 'Triple Climb')",
            name="ck_matches_endgame_climb",
        ),
        CheckConstraint(
            "endgame_trap_count >= 0 AND endgame_trap_count <= 3",
            name="ck_matches_endgame_trap_count",
        ),
        CheckConstraint(
            "driver_rating >= 1 AND driver_rating <= 5",
            name="ck_matches_driver_rating",
        ),
        *(
            CheckConstraint(f"{column} >= 0", name=f"ck_matches_{column}")
            for column in _COUNTER_COLUMNS
        ),
        Index("idx_matches_team_regional", "team_id", "regional_id"),
        Index("idx_matches_match_number", "match_number"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), nullable=False)
    regional_id: Mapped[int] = mapped_column(
        ForeignKey("regionals.id", ondelete="CASCADE"),
        nullable=False,
    )
    match_number: Mapped[int] = mapped_column(Integer, nullable=False)
    scouter_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    starting_position: Mapped[str | None] = mapped_column(String(16), nullable=True)

    auto_taxi: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    auto_m1: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    auto_m2: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    auto_m3: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    auto_m4: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    auto_m5: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    auto_s1: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    auto_s2: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    auto_s3: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    auto_r: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    teleop_amp_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    teleop_amp_scored: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    teleop_speaker_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    teleop_speaker_scored: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    teleop_ground_intake: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    teleop_source_intake: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    endgame_climb: Mapped[str | None] = mapped_column(String(16), nullable=True)
    endgame_trap_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    driver_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    robot_disabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    played_defense: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
