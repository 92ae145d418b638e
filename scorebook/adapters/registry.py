"""
Model Registry - Enum-Keyed Codec Dispatch

The registry maps every ModelKind to exactly one codec instance. The
fetcher never branches on record types; it looks the kind up here.

Usage:
    registry = build_default_registry()
    codec = registry.get(ModelKind.OVERALL_SCORER)
    record = codec.decode({"ID": 1, "Name": "Jane Doe"})
"""
from typing import Dict, List, Optional, Any
from dataclasses import dataclass
import logging

from scorebook.codecs import (
    OverallScorerCodec,
    RecordCodec,
    TeamCodec,
    TeamWeekScorerCodec,
)
from scorebook.errors import UnknownModelKindError
from scorebook.schemas.canonical import ModelKind

logger = logging.getLogger(__name__)


@dataclass
class ModelInfo:
    """Metadata about a registered model kind."""
    kind: ModelKind
    codec: RecordCodec
    display_name: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "display_name": self.display_name,
            "description": self.description,
            "record_type": self.codec.record_type.__name__,
            "fields": list(self.codec.backend_names()),
        }


class ModelRegistry:
    """
    Registry of codecs by model kind.

    - Register one codec per kind
    - Look codecs up without knowing concrete record types
    - Verify that every ModelKind member is covered
    """

    def __init__(self):
        self._models: Dict[ModelKind, ModelInfo] = {}

    def register(
        self,
        codec: RecordCodec,
        display_name: Optional[str] = None,
        description: str = "",
    ) -> None:
        """
        Register the codec for its kind.

        Raises:
            ValueError: If the kind already has a codec
        """
        kind = codec.kind
        if kind in self._models:
            raise ValueError(f"Model kind already registered: {kind.value}")

        self._models[kind] = ModelInfo(
            kind=kind,
            codec=codec,
            display_name=display_name or kind.value.replace("_", " ").title(),
            description=description,
        )
        logger.debug(f"Registered codec: {kind.value} -> {type(codec).__name__}")

    def get(self, kind: ModelKind) -> RecordCodec:
        """
        Get the codec for a model kind.

        Raises:
            UnknownModelKindError: If the kind has no codec
        """
        info = self._models.get(kind)
        if info is None:
            raise UnknownModelKindError(kind)
        return info.codec

    def get_info(self, kind: ModelKind) -> ModelInfo:
        """Get full model info including metadata."""
        if kind not in self._models:
            raise UnknownModelKindError(kind)
        return self._models[kind]

    def has_kind(self, kind: ModelKind) -> bool:
        return kind in self._models

    def list_kinds(self) -> List[ModelKind]:
        return list(self._models.keys())

    def validate_exhaustive(self) -> None:
        """
        Ensure every ModelKind member has a codec.

        Raises:
            UnknownModelKindError: For the first kind left unmapped
        """
        for kind in ModelKind:
            if kind not in self._models:
                raise UnknownModelKindError(kind)

    def to_dict(self) -> Dict[str, Any]:
        """Export registry state as dict (for CLI listing)."""
        return {"models": [info.to_dict() for info in self._models.values()]}


def build_default_registry() -> ModelRegistry:
    """Registry covering every ModelKind, validated before it is returned."""
    registry = ModelRegistry()
    registry.register(
        OverallScorerCodec(),
        display_name="Overall Scorers",
        description="Season-long goals and appearances per player",
    )
    registry.register(
        TeamWeekScorerCodec(),
        display_name="Scorers by Team per Week",
        description="Goals per player, team and match week",
    )
    registry.register(
        TeamCodec(),
        display_name="Teams",
        description="Team names and crests",
    )
    registry.validate_exhaustive()
    return registry
