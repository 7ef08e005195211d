"""ORM models."""

from models.base import Base
from models.match import MatchRecord
from models.roster import Regional, Season, Team, TeamRegionalParticipation
from models.statistics import TeamRanking, TeamStatsFraction, TeamStatsPercentage

__all__ = [
    "Base",
    "MatchRecord",
    "Regional",
    "Season",
    "Team",
    "TeamRanking",
    "TeamRegionalParticipation",
    "TeamStatsFraction",
    "TeamStatsPercentage",
]
