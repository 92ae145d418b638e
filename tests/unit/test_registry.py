"""
Unit tests for scorebook.adapters.registry.ModelRegistry.

Tests codec registration, lookup, exhaustiveness and export.
"""

import pytest

from scorebook.adapters.registry import ModelRegistry, build_default_registry
from scorebook.codecs import OverallScorerCodec, TeamCodec, TeamWeekScorerCodec
from scorebook.errors import UnknownModelKindError
from scorebook.schemas.canonical import ModelKind


class TestModelRegistry:
    """Test suite for ModelRegistry."""

    def test_default_registry_covers_every_kind(self):
        registry = build_default_registry()
        assert set(registry.list_kinds()) == set(ModelKind)

    def test_get_returns_matching_codec(self):
        registry = build_default_registry()
        assert isinstance(registry.get(ModelKind.OVERALL_SCORER), OverallScorerCodec)
        assert isinstance(registry.get(ModelKind.TEAM_WEEK_SCORER), TeamWeekScorerCodec)
        assert isinstance(registry.get(ModelKind.TEAM), TeamCodec)

    def test_get_unknown_kind(self):
        registry = ModelRegistry()
        with pytest.raises(UnknownModelKindError):
            registry.get(ModelKind.TEAM)

    def test_get_non_kind_value(self):
        registry = build_default_registry()
        with pytest.raises(UnknownModelKindError):
            registry.get("team")

    def test_validate_exhaustive_reports_missing_kind(self):
        registry = ModelRegistry()
        registry.register(OverallScorerCodec())
        with pytest.raises(UnknownModelKindError) as exc_info:
            registry.validate_exhaustive()
        assert exc_info.value.kind == ModelKind.TEAM_WEEK_SCORER

    def test_duplicate_registration_rejected(self):
        registry = ModelRegistry()
        registry.register(TeamCodec())
        with pytest.raises(ValueError):
            registry.register(TeamCodec())

    def test_default_display_name(self):
        registry = ModelRegistry()
        registry.register(TeamWeekScorerCodec())
        assert registry.get_info(ModelKind.TEAM_WEEK_SCORER).display_name == "Team Week Scorer"

    def test_to_dict(self):
        exported = build_default_registry().to_dict()
        kinds = {model["kind"] for model in exported["models"]}
        assert kinds == {"overall_scorer", "team_week_scorer", "team"}
        team = next(m for m in exported["models"] if m["kind"] == "team")
        assert team["fields"] == ["ID", "Name", "Short Name", "Crest"]
        assert team["record_type"] == "Team"

    def test_info_exports_every_field(self):
        info = build_default_registry().get_info(ModelKind.TEAM)
        assert set(info.to_dict()) == {"kind", "display_name", "description", "record_type", "fields"}
        assert not hasattr(info, "registered_at")
