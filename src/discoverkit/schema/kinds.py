"""The closed set of type kinds and the per-kind ``format`` vocabularies."""

from __future__ import annotations

import enum
from typing import Optional


class TypeKind(str, enum.Enum):
    """The eight kinds a resolved schema node can have.

    The value is the JSON ``type`` string that selects the kind.
    """

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"
    ANY = "any"

    @classmethod
    def from_json_type(cls, json_type: Optional[str]) -> Optional[TypeKind]:
        """Map a JSON ``type`` string to its kind, or ``None`` if unrecognised."""
        if json_type is None:
            return None
        try:
            return cls(json_type)
        except ValueError:
            return None


class StringFormat(str, enum.Enum):
    """Recognised ``format`` values for string types."""

    BYTE = "byte"
    DATE = "date"
    DATE_TIME = "date-time"
    INT64 = "int64"
    UINT64 = "uint64"


class NumberFormat(str, enum.Enum):
    """Recognised ``format`` values for number types."""

    DOUBLE = "double"
    FLOAT = "float"


class IntegerFormat(str, enum.Enum):
    """Recognised ``format`` values for integer types."""

    INT32 = "int32"
    UINT32 = "uint32"


def parse_format(enum_cls, value: Optional[str]):  # noqa: ANN001, ANN201
    """Look *value* up in *enum_cls*; absent or unrecognised values give ``None``."""
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None
