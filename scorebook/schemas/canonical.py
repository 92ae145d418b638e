"""
Canonical Data Schemas - Record Shapes Served by the Scorebook Backend

Each model kind maps to exactly one record dataclass. Records are frozen:
a collection handed to one consumer can never be mutated through another.

Every field is Optional and defaults to None. None means "unset" - the
backend row did not carry the field - and is never replaced by a default.
"""
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional, Dict, Any, List


# ============================================================================
# MODEL KINDS
# ============================================================================

class ModelKind(Enum):
    """Closed set of record shapes the client can fetch."""
    OVERALL_SCORER = "overall_scorer"
    TEAM_WEEK_SCORER = "team_week_scorer"
    TEAM = "team"


# ============================================================================
# RECORDS
# ============================================================================

@dataclass(frozen=True)
class OverallScorer:
    """Season-long scoring line for one player."""
    id: Optional[int] = None
    name: Optional[str] = None
    team: Optional[str] = None
    goals: Optional[int] = None
    appearances: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "team": self.team,
            "goals": self.goals,
            "appearances": self.appearances,
        }


@dataclass(frozen=True)
class TeamWeekScorer:
    """Goals scored by one player for one team in one match week."""
    id: Optional[int] = None
    name: Optional[str] = None
    team: Optional[str] = None
    week: Optional[int] = None
    goals: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "team": self.team,
            "week": self.week,
            "goals": self.goals,
        }


@dataclass(frozen=True)
class Team:
    """Team reference data (stable for the lifetime of a session)."""
    id: Optional[int] = None
    name: Optional[str] = None
    short_name: Optional[str] = None
    crest_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "short_name": self.short_name,
            "crest_url": self.crest_url,
        }


def record_field_names(record_type: type) -> List[str]:
    """Declared field names of a record type, in declaration order."""
    return [f.name for f in fields(record_type)]


# ============================================================================
# PAGES AND COMPOUND RESULTS
# ============================================================================

@dataclass
class Page:
    """
    One decoded HTTP response.

    A page without an offset is the terminal page of a fetch.
    """
    records: List[Any] = field(default_factory=list)
    offset: Optional[str] = None
    skipped_rows: int = 0

    @property
    def is_terminal(self) -> bool:
        return self.offset is None


@dataclass
class ScoreboardSnapshot:
    """Overall and per-week scorer collections fetched together."""
    overall_scorers: List[OverallScorer] = field(default_factory=list)
    team_week_scorers: List[TeamWeekScorer] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_scorers": [r.to_dict() for r in self.overall_scorers],
            "team_week_scorers": [r.to_dict() for r in self.team_week_scorers],
        }
