"""
Base Record Codec - Declarative Field Mapping

A codec translates between a raw backend field mapping (string keys to
loosely-typed JSON values) and one frozen record dataclass.

Key principles:
- Codecs are stateless: decode() and encode() are pure functions
- Fields are declared once as FieldSpec tuples, never branched on at runtime
- Absent fields decode to None; only type-incompatible values are errors
"""
from abc import ABC
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, Tuple, Type, TypeVar

from scorebook.errors import MalformedRecordError
from scorebook.schemas.canonical import ModelKind, record_field_names


# Generic type for the record produced by a codec (e.g., OverallScorer)
T = TypeVar('T')


@dataclass(frozen=True)
class FieldSpec:
    """Binding of one record attribute to its backend field name and scalar type."""
    attr: str
    backend_name: str
    scalar_type: type  # int or str


def _coerce_int(value: Any) -> Optional[int]:
    # bool is an int subclass in Python but never a valid numeric cell
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _coerce_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    return None


_COERCERS = {
    int: _coerce_int,
    str: _coerce_str,
}


class RecordCodec(ABC, Generic[T]):
    """
    Abstract base class for per-kind record codecs.

    Subclasses declare `kind`, `record_type` and `field_specs`; the
    decode/encode contract is shared. Kind-specific derived accessors
    live on the subclasses.
    """

    kind: ModelKind
    record_type: Type[T]
    field_specs: Tuple[FieldSpec, ...] = ()

    def __init__(self):
        declared = sorted(record_field_names(self.record_type))
        mapped = sorted(spec.attr for spec in self.field_specs)
        if declared != mapped:
            raise TypeError(
                f"{type(self).__name__} field specs {mapped} do not match "
                f"{self.record_type.__name__} fields {declared}"
            )
        self._by_attr = {spec.attr: spec for spec in self.field_specs}

    def decode(self, raw_fields: Dict[str, Any]) -> T:
        """
        Build a record from a raw backend field mapping.

        Absent and null fields become unset (None).

        Raises:
            MalformedRecordError: If a present value has an incompatible type
        """
        values: Dict[str, Any] = {}
        for spec in self.field_specs:
            raw_value = raw_fields.get(spec.backend_name)
            if raw_value is None:
                continue
            value = _COERCERS[spec.scalar_type](raw_value)
            if value is None:
                raise MalformedRecordError(self.kind.value, spec.backend_name, raw_value)
            values[spec.attr] = value
        return self.record_type(**values)

    def encode(self, record: T) -> Dict[str, Any]:
        """Map a record back to backend field names, omitting unset fields."""
        raw: Dict[str, Any] = {}
        for spec in self.field_specs:
            value = getattr(record, spec.attr)
            if value is not None:
                raw[spec.backend_name] = value
        return raw

    def clear_fields(self, *attrs: str) -> Dict[str, Any]:
        """
        Build an explicit-null payload for deleting fields on the backend.

        This is the only codec operation that emits nulls.
        """
        payload: Dict[str, Any] = {}
        for attr in attrs:
            spec = self._by_attr.get(attr)
            if spec is None:
                raise KeyError(f"{self.record_type.__name__} has no field {attr!r}")
            payload[spec.backend_name] = None
        return payload

    def backend_names(self) -> Tuple[str, ...]:
        return tuple(spec.backend_name for spec in self.field_specs)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} kind={self.kind.value}>"


def abbreviate_name(full_name: Optional[str]) -> Optional[str]:
    """
    Shorten "Jane Q Doe" to "J. Doe".

    Names with fewer than two tokens come back unmodified.
    """
    if not full_name:
        return full_name
    tokens = full_name.split()
    if len(tokens) < 2:
        return full_name
    return f"{tokens[0][0]}. {tokens[-1]}"
