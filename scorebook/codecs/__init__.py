# Record codecs - one per model kind
from .base import FieldSpec, RecordCodec, abbreviate_name
from .scorers import OverallScorerCodec, TeamWeekScorerCodec
from .teams import TeamCodec

__all__ = [
    "FieldSpec",
    "RecordCodec",
    "abbreviate_name",
    "OverallScorerCodec",
    "TeamWeekScorerCodec",
    "TeamCodec",
]
