# Canonical record shapes for every model kind
from .canonical import (
    ModelKind,
    # Records
    OverallScorer,
    TeamWeekScorer,
    Team,
    # Pages and compound results
    Page,
    ScoreboardSnapshot,
    record_field_names,
)

__all__ = [
    "ModelKind",
    # Records
    "OverallScorer",
    "TeamWeekScorer",
    "Team",
    # Pages and compound results
    "Page",
    "ScoreboardSnapshot",
    "record_field_names",
]
