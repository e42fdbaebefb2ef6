"""Scalar document fields and their wire codec.

A field holds exactly one str, int or float. The service enforces that a
field keeps one type across a collection; the client does not re-check.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from vectordb_sdk.exceptions import FieldTypeError

WireScalar = str | int | float


class FieldKind(str, Enum):
    """Runtime tag of a field value."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"


class FieldType(str, Enum):
    """Declared field type used in collection metadata."""

    STRING = "string"
    UINT64 = "uint64"


def _is_scalar(value: Any) -> bool:
    # bool is an int subclass but not a field type
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


class DocumentField(BaseModel):
    """A single scalar value stored on a document.

    Attributes:
        value: The str, int or float value.
    """

    model_config = ConfigDict(frozen=True)

    value: WireScalar

    @field_validator("value", mode="before")
    @classmethod
    def _check_scalar(cls, value: Any) -> Any:
        if not _is_scalar(value):
            raise FieldTypeError(
                f"Unsupported field value type: {type(value).__name__}",
                details={"type": type(value).__name__},
            )
        return value

    @classmethod
    def of(cls, value: WireScalar) -> "DocumentField":
        """Wrap a raw scalar."""
        return cls(value=value)

    @property
    def kind(self) -> FieldKind:
        """Tag derived from the held value."""
        if isinstance(self.value, str):
            return FieldKind.STRING
        if isinstance(self.value, int):
            return FieldKind.INTEGER
        return FieldKind.FLOAT

    def as_str(self) -> str:
        """Render the value as text."""
        return str(self.value)

    def as_int(self) -> int:
        """Numeric value truncated to an integer; strings are parsed."""
        return int(self.value)

    def as_float(self) -> float:
        """Numeric value as float; strings are parsed."""
        return float(self.value)


def encode_field(field: DocumentField) -> WireScalar:
    """Convert a field to its wire value.

    Strings pass through. Numbers are sent as JSON numbers with the
    precision they hold.
    """
    if field.kind == FieldKind.STRING:
        return field.value
    if field.kind == FieldKind.INTEGER:
        return int(field.value)
    return float(field.value)


def decode_field(value: Any) -> DocumentField:
    """Tag a wire value by its runtime type.

    Raises:
        FieldTypeError: If the value is not a str, int or float.
    """
    return DocumentField(value=value)


def encode_fields(fields: Mapping[str, DocumentField]) -> dict[str, WireScalar]:
    """Encode every field of a mapping."""
    return {name: encode_field(field) for name, field in fields.items()}


def decode_fields(
    raw: Mapping[str, Any],
) -> tuple[dict[str, DocumentField], dict[str, Any]]:
    """Split a wire mapping into scalar fields and opaque extras.

    Values that are not str/int/float (arrays, objects, booleans, null)
    are returned untouched in the second mapping.
    """
    fields: dict[str, DocumentField] = {}
    extras: dict[str, Any] = {}
    for name, value in raw.items():
        if _is_scalar(value):
            fields[name] = decode_field(value)
        else:
            extras[name] = value
    return fields, extras


def infer_type(field: DocumentField) -> FieldType:
    """Infer the declared type of a field from its value.

    Every numeric value, including negative and fractional ones, is
    reported as UINT64. The tag does not carry sign or fraction.
    """
    if field.kind == FieldKind.STRING:
        return FieldType.STRING
    return FieldType.UINT64


def field_info(field: DocumentField) -> tuple[str, FieldType]:
    """Return the text rendering and inferred type of a field.

    Numbers are rendered as integer text, so ``2.7`` becomes ``"2"``.
    """
    field_type = infer_type(field)
    if field_type == FieldType.STRING:
        return field.as_str(), field_type
    return str(field.as_int()), field_type
