"""Team Codec - team reference data."""
from typing import Optional

from scorebook.codecs.base import FieldSpec, RecordCodec
from scorebook.schemas.canonical import ModelKind, Team


class TeamCodec(RecordCodec[Team]):
    """Codec for the teams table."""

    kind = ModelKind.TEAM
    record_type = Team
    field_specs = (
        FieldSpec("id", "ID", int),
        FieldSpec("name", "Name", str),
        FieldSpec("short_name", "Short Name", str),
        FieldSpec("crest_url", "Crest", str),
    )

    @staticmethod
    def display_name(record: Team) -> Optional[str]:
        # Short name wins when the row carries one
        return record.short_name or record.name
