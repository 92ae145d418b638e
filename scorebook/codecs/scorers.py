"""
Scorer Codecs - overall and per-week scoring tables.

Backend field names match the table columns exactly, including case.
"""
from typing import Optional

from scorebook.codecs.base import FieldSpec, RecordCodec, abbreviate_name
from scorebook.schemas.canonical import ModelKind, OverallScorer, TeamWeekScorer


class OverallScorerCodec(RecordCodec[OverallScorer]):
    """Codec for the season-long scorers table."""

    kind = ModelKind.OVERALL_SCORER
    record_type = OverallScorer
    field_specs = (
        FieldSpec("id", "ID", int),
        FieldSpec("name", "Name", str),
        FieldSpec("team", "Team", str),
        FieldSpec("goals", "Goals", int),
        FieldSpec("appearances", "Appearances", int),
    )

    @staticmethod
    def short_name(record: OverallScorer) -> Optional[str]:
        return abbreviate_name(record.name)

    @staticmethod
    def goals_per_appearance(record: OverallScorer) -> Optional[float]:
        """Scoring rate, or None when either count is unset or no appearances."""
        if record.goals is None or not record.appearances:
            return None
        return round(record.goals / record.appearances, 2)


class TeamWeekScorerCodec(RecordCodec[TeamWeekScorer]):
    """Codec for the scorers-by-team-per-week table."""

    kind = ModelKind.TEAM_WEEK_SCORER
    record_type = TeamWeekScorer
    field_specs = (
        FieldSpec("id", "ID", int),
        FieldSpec("name", "Name", str),
        FieldSpec("team", "Team", str),
        FieldSpec("week", "Week", int),
        FieldSpec("goals", "Goals", int),
    )

    @staticmethod
    def short_name(record: TeamWeekScorer) -> Optional[str]:
        return abbreviate_name(record.name)
