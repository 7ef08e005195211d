"""SQLAlchemy mixins for per-(team, regional) aggregate tables."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class TeamRegionalAggregateMixin:
    """Key and bookkeeping columns shared by the three aggregate tables."""

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), nullable=False)
    regional_id: Mapped[int] = mapped_column(
        ForeignKey("regionals.id", ondelete="CASCADE"),
        nullable=False,
    )
    last_calculated: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class MatchTotalMixin:
    """Number of matches folded into a percentage or fraction row."""

    total_matches: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
