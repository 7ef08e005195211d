"""seasons, regionals, teams and team_regional_participation table models."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Season(Base):
    """One competition season (for example 2024 Crescendo)."""

    __tablename__ = "seasons"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    season_year: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)
    season_name: Mapped[str] = mapped_column(String(128), nullable=False)
    game_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class Regional(Base):
    """A regional event inside a season; scopes matches and aggregates."""

    __tablename__ = "regionals"
    __table_args__ = (
        UniqueConstraint("season_id", "regional_name", name="uq_regionals_season_name"),
        Index("idx_regionals_season", "season_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    season_id: Mapped[int] = mapped_column(
        ForeignKey("seasons.id", ondelete="CASCADE"),
        nullable=False,
    )
    regional_name: Mapped[str] = mapped_column(String(128), nullable=False)
    regional_code: Mapped[str | None] = mapped_column(String(16), nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class Team(Base):
    """An FRC team, identified by its team number across seasons."""

    __tablename__ = "teams"
    __table_args__ = (
        CheckConstraint("team_number > 0", name="ck_teams_team_number"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    team_number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)
    team_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    organization: Mapped[str | None] = mapped_column(String(256), nullable=True)
    city: Mapped[str | None] = mapped_column(String(128), nullable=True)
    state: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class TeamRegionalParticipation(Base):
    """Registration of one team at one regional."""

    __tablename__ = "team_regional_participation"
    __table_args__ = (
        UniqueConstraint("team_id", "regional_id", name="uq_team_regional_participation"),
        Index("idx_team_participation_regional", "regional_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), nullable=False)
    regional_id: Mapped[int] = mapped_column(
        ForeignKey("regionals.id", ondelete="CASCADE"),
        nullable=False,
    )
    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
