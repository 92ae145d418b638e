"""
Unit tests for scorebook.codecs.

Tests decoding of present, absent and null fields, type rejection,
encoding of unset fields, explicit clears and derived accessors.
"""

from dataclasses import FrozenInstanceError

import pytest

from scorebook.codecs import (
    FieldSpec,
    OverallScorerCodec,
    RecordCodec,
    TeamCodec,
    TeamWeekScorerCodec,
    abbreviate_name,
)
from scorebook.errors import MalformedRecordError
from scorebook.schemas.canonical import ModelKind, OverallScorer, Team, TeamWeekScorer


@pytest.fixture
def scorer_codec():
    return OverallScorerCodec()


class TestDecode:
    """Raw field mapping -> record."""

    def test_decode_all_fields(self, scorer_codec):
        record = scorer_codec.decode({
            "ID": 7,
            "Name": "Jane Doe",
            "Team": "Rovers",
            "Goals": 12,
            "Appearances": 20,
        })
        assert record == OverallScorer(
            id=7, name="Jane Doe", team="Rovers", goals=12, appearances=20
        )

    def test_absent_fields_are_unset(self, scorer_codec):
        record = scorer_codec.decode({"ID": 1})
        assert record.id == 1
        assert record.name is None
        assert record.goals is None

    def test_null_fields_are_unset(self, scorer_codec):
        record = scorer_codec.decode({"ID": 1, "Goals": None})
        assert record.goals is None

    def test_empty_mapping_decodes(self, scorer_codec):
        assert scorer_codec.decode({}) == OverallScorer()

    def test_unknown_backend_fields_are_ignored(self, scorer_codec):
        record = scorer_codec.decode({"ID": 1, "Nickname": "JD"})
        assert not hasattr(record, "nickname")

    def test_integral_float_accepted(self, scorer_codec):
        assert scorer_codec.decode({"Goals": 3.0}).goals == 3

    @pytest.mark.parametrize("bad", ["three", "3", 2.5, True, [3]])
    def test_incompatible_int_rejected(self, scorer_codec, bad):
        with pytest.raises(MalformedRecordError) as exc_info:
            scorer_codec.decode({"Goals": bad})
        assert exc_info.value.field == "Goals"
        assert exc_info.value.kind == "overall_scorer"

    def test_incompatible_str_rejected(self, scorer_codec):
        with pytest.raises(MalformedRecordError):
            scorer_codec.decode({"Name": 42})

    def test_decode_is_idempotent(self, scorer_codec):
        raw = {"ID": 3, "Name": "Ann Lee", "Goals": 4}
        assert scorer_codec.decode(raw) == scorer_codec.decode(raw)

    def test_records_are_frozen(self, scorer_codec):
        record = scorer_codec.decode({"ID": 3})
        with pytest.raises(FrozenInstanceError):
            record.goals = 10

    def test_backend_name_with_space(self):
        team = TeamCodec().decode({"ID": 2, "Name": "City Rovers", "Short Name": "CRO"})
        assert team == Team(id=2, name="City Rovers", short_name="CRO")


class TestEncode:
    """Record -> raw field mapping."""

    def test_encode_omits_unset(self, scorer_codec):
        raw = scorer_codec.encode(OverallScorer(id=1, name="Jane Doe"))
        assert raw == {"ID": 1, "Name": "Jane Doe"}

    def test_round_trip_preserves_present_fields(self):
        codec = TeamWeekScorerCodec()
        raw = {"ID": 9, "Name": "Sam Roe", "Team": "United", "Week": 4, "Goals": 2}
        assert codec.encode(codec.decode(raw)) == raw

    def test_round_trip_drops_absent_fields_only(self):
        codec = TeamWeekScorerCodec()
        raw = {"ID": 9, "Week": 4}
        assert codec.encode(codec.decode(raw)) == raw

    def test_clear_fields_emits_nulls(self, scorer_codec):
        assert scorer_codec.clear_fields("goals", "team") == {"Goals": None, "Team": None}

    def test_clear_unknown_field(self, scorer_codec):
        with pytest.raises(KeyError):
            scorer_codec.clear_fields("nickname")


class TestDerivedAccessors:
    """Pure helpers over decoded fields."""

    @pytest.mark.parametrize(
        "full_name, expected",
        [
            ("Jane Doe", "J. Doe"),
            ("Jane Q Doe", "J. Doe"),
            ("  Jane   Doe ", "J. Doe"),
            ("Pele", "Pele"),
            ("", ""),
            (None, None),
        ],
    )
    def test_abbreviate_name(self, full_name, expected):
        assert abbreviate_name(full_name) == expected

    def test_scorer_short_name(self):
        record = TeamWeekScorer(name="Sam Roe")
        assert TeamWeekScorerCodec.short_name(record) == "S. Roe"

    def test_goals_per_appearance(self):
        assert OverallScorerCodec.goals_per_appearance(OverallScorer(goals=5, appearances=10)) == 0.5
        assert OverallScorerCodec.goals_per_appearance(OverallScorer(goals=5, appearances=0)) is None
        assert OverallScorerCodec.goals_per_appearance(OverallScorer(goals=None, appearances=3)) is None

    def test_team_display_name(self):
        assert TeamCodec.display_name(Team(name="City Rovers", short_name="CRO")) == "CRO"
        assert TeamCodec.display_name(Team(name="City Rovers")) == "City Rovers"


class TestCodecDeclaration:
    """Field specs must cover the record exactly."""

    def test_mismatched_specs_rejected(self):
        class BrokenCodec(RecordCodec[Team]):
            kind = ModelKind.TEAM
            record_type = Team
            field_specs = (FieldSpec("id", "ID", int),)

        with pytest.raises(TypeError):
            BrokenCodec()

    def test_backend_names(self, scorer_codec):
        assert scorer_codec.backend_names() == ("ID", "Name", "Team", "Goals", "Appearances")
