"""Schema type resolution -- turn raw schema nodes into kind-tagged types.

Sub-modules:

* :mod:`~discoverkit.schema.kinds` -- the closed :class:`TypeKind` set and
  the per-kind ``format`` enums.
* :mod:`~discoverkit.schema.resolved` -- :class:`ResolvedType` and its kind
  views.
* :mod:`~discoverkit.schema.resolver` -- :func:`resolve_type`, which
  dereferences ``$ref`` chains and tags the result.
"""

from discoverkit.schema.kinds import IntegerFormat, NumberFormat, StringFormat, TypeKind
from discoverkit.schema.resolved import (
    AnyType,
    ArrayType,
    BooleanType,
    IntegerType,
    NullType,
    NumberType,
    ObjectType,
    ResolvedType,
    StringType,
    TypeView,
)
from discoverkit.schema.resolver import (
    NamedSchemas,
    dereference,
    named_schema_view,
    resolve_schema_map,
    resolve_type,
)

__all__ = [
    "AnyType",
    "ArrayType",
    "BooleanType",
    "IntegerFormat",
    "IntegerType",
    "NamedSchemas",
    "NullType",
    "NumberFormat",
    "NumberType",
    "ObjectType",
    "ResolvedType",
    "StringFormat",
    "StringType",
    "TypeKind",
    "TypeView",
    "dereference",
    "named_schema_view",
    "resolve_schema_map",
    "resolve_type",
]
