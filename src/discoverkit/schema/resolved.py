"""Resolved types: one tagged value plus a typed view per kind.

A :class:`ResolvedType` is what :func:`~discoverkit.schema.resolver.resolve_type`
returns. It carries the dereferenced node, its :class:`~discoverkit.schema.kinds.TypeKind`
tag and a read-only reference to the document's named schemas. The
kind-specific accessors live on small view classes, obtained through the
``as_<kind>()`` methods::

    resolved = resolve_type(node, schemas)
    if resolved.kind is TypeKind.INTEGER:
        limits = resolved.as_integer().minimum, resolved.as_integer().maximum

Asking for the wrong view raises :class:`~discoverkit.exceptions.WrongTypeKindError`
rather than returning ``None``. :meth:`ResolvedType.view` returns the matching
view directly, which suits ``match`` statements over the closed set of view
classes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional, TypeVar, Union

from discoverkit.exceptions import SchemaTypeError, SchemaValueError, WrongTypeKindError
from discoverkit.schema.kinds import (
    IntegerFormat,
    NumberFormat,
    StringFormat,
    TypeKind,
    parse_format,
)

if TYPE_CHECKING:
    from discoverkit.models import SchemaNode

_T = TypeVar("_T")


@dataclass(frozen=True)
class ResolvedType:
    """A dereferenced schema node tagged with its kind.

    Instances are cheap to build and never change. Two resolved types are
    equal when their nodes, kinds and named-schema maps are equal.

    Attributes:
        node: The dereferenced schema node (never a ``$ref``).
        kind: The kind tag.
        named_schemas: Read-only map of the document's top-level schemas,
            used to resolve nested fields on demand.
    """

    node: SchemaNode
    kind: TypeKind
    named_schemas: Mapping[str, SchemaNode] = field(repr=False, hash=False)

    @property
    def id(self) -> Optional[str]:
        return self.node.id

    @property
    def description(self) -> Optional[str]:
        return self.node.description

    @property
    def required(self) -> Optional[bool]:
        """``True``/``False`` when the document says so, ``None`` when unspecified."""
        return self.node.required

    def view(self) -> TypeView:
        """Return the view matching :attr:`kind`."""
        return _VIEW_CLASSES[self.kind](self)

    def as_string(self) -> StringType:
        return self._view_as(TypeKind.STRING)

    def as_number(self) -> NumberType:
        return self._view_as(TypeKind.NUMBER)

    def as_integer(self) -> IntegerType:
        return self._view_as(TypeKind.INTEGER)

    def as_boolean(self) -> BooleanType:
        return self._view_as(TypeKind.BOOLEAN)

    def as_object(self) -> ObjectType:
        return self._view_as(TypeKind.OBJECT)

    def as_array(self) -> ArrayType:
        return self._view_as(TypeKind.ARRAY)

    def as_null(self) -> NullType:
        return self._view_as(TypeKind.NULL)

    def as_any(self) -> AnyType:
        return self._view_as(TypeKind.ANY)

    def _view_as(self, expected: TypeKind):  # noqa: ANN202
        if self.kind is not expected:
            raise WrongTypeKindError(expected, self.kind)
        return _VIEW_CLASSES[expected](self)

    def _resolve_child(self, child: Optional[SchemaNode]) -> Optional[ResolvedType]:
        # Imported here: the resolver module builds ResolvedType instances.
        from discoverkit.schema.resolver import resolve_type

        return resolve_type(child, self.named_schemas)


@dataclass(frozen=True)
class _KindView:
    """Shared metadata accessors for every kind view."""

    resolved: ResolvedType

    @property
    def kind(self) -> TypeKind:
        return self.resolved.kind

    @property
    def node(self) -> SchemaNode:
        return self.resolved.node

    @property
    def id(self) -> Optional[str]:
        return self.resolved.id

    @property
    def description(self) -> Optional[str]:
        return self.resolved.description

    @property
    def required(self) -> Optional[bool]:
        return self.resolved.required


@dataclass(frozen=True)
class StringType(_KindView):
    """View over a ``string`` node."""

    @property
    def pattern(self) -> Optional[str]:
        return self.node.pattern

    @property
    def is_enum(self) -> bool:
        return self.node.enum_values is not None

    @property
    def enum_values(self) -> Optional[list[str]]:
        values = self.node.enum_values
        return None if values is None else list(values)

    @property
    def enum_descriptions(self) -> Optional[list[Optional[str]]]:
        """Descriptions parallel to :attr:`enum_values`.

        When the document lists values but no descriptions, each entry is
        ``None`` so the two sequences always have the same length.
        """
        values = self.node.enum_values
        if values is None:
            return None
        descriptions = self.node.enum_descriptions
        if descriptions is None:
            return [None] * len(values)
        return list(descriptions)

    @property
    def default(self) -> Optional[str]:
        return self.node.default_value

    @property
    def format(self) -> Optional[StringFormat]:
        return parse_format(StringFormat, self.node.format)


@dataclass(frozen=True)
class NumberType(_KindView):
    """View over a ``number`` node. Limits and default parse as floats."""

    @property
    def minimum(self) -> Optional[float]:
        return _parse_text(self.node.minimum, "minimum", float)

    @property
    def maximum(self) -> Optional[float]:
        return _parse_text(self.node.maximum, "maximum", float)

    @property
    def default(self) -> Optional[float]:
        return _parse_text(self.node.default_value, "default", float)

    @property
    def format(self) -> Optional[NumberFormat]:
        return parse_format(NumberFormat, self.node.format)


@dataclass(frozen=True)
class IntegerType(_KindView):
    """View over an ``integer`` node. Limits and default parse as ints."""

    @property
    def minimum(self) -> Optional[int]:
        return _parse_text(self.node.minimum, "minimum", int)

    @property
    def maximum(self) -> Optional[int]:
        return _parse_text(self.node.maximum, "maximum", int)

    @property
    def default(self) -> Optional[int]:
        return _parse_text(self.node.default_value, "default", int)

    @property
    def format(self) -> Optional[IntegerFormat]:
        return parse_format(IntegerFormat, self.node.format)


@dataclass(frozen=True)
class BooleanType(_KindView):
    """View over a ``boolean`` node."""

    @property
    def default(self) -> Optional[bool]:
        """The default value; only case-insensitive ``"true"`` parses as ``True``."""
        text = self.node.default_value
        if text is None:
            return None
        return text.strip().lower() == "true"


@dataclass(frozen=True)
class ObjectType(_KindView):
    """View over an ``object`` node.

    A fixed-shape object declares ``properties``; a map-like object declares
    only ``additionalProperties`` (the value type). :attr:`properties` is
    ``None`` for the latter, which is not the same as an empty mapping.
    """

    @property
    def properties(self) -> Optional[dict[str, ResolvedType]]:
        props = self.node.properties
        if props is None:
            return None
        return {name: self.resolved._resolve_child(child) for name, child in props.items()}

    @property
    def additional_property_type(self) -> Optional[ResolvedType]:
        return self.resolved._resolve_child(self.node.additional_properties)


@dataclass(frozen=True)
class ArrayType(_KindView):
    """View over an ``array`` node."""

    @property
    def element_type(self) -> ResolvedType:
        """The resolved ``items`` type.

        Raises:
            SchemaTypeError: If the array node declares no ``items``.
        """
        items = self.node.items
        if items is None:
            label = f" '{self.id}'" if self.id else ""
            raise SchemaTypeError(f"array type{label} declares no items")
        return self.resolved._resolve_child(items)


@dataclass(frozen=True)
class NullType(_KindView):
    """View over a ``null`` node."""


@dataclass(frozen=True)
class AnyType(_KindView):
    """View over an ``any`` node."""


TypeView = Union[
    StringType,
    NumberType,
    IntegerType,
    BooleanType,
    ObjectType,
    ArrayType,
    NullType,
    AnyType,
]

_VIEW_CLASSES: dict[TypeKind, type] = {
    TypeKind.STRING: StringType,
    TypeKind.NUMBER: NumberType,
    TypeKind.INTEGER: IntegerType,
    TypeKind.BOOLEAN: BooleanType,
    TypeKind.OBJECT: ObjectType,
    TypeKind.ARRAY: ArrayType,
    TypeKind.NULL: NullType,
    TypeKind.ANY: AnyType,
}


def _parse_text(text: Optional[str], field_name: str, parse: Callable[[str], _T]) -> Optional[_T]:
    """Parse a textual limit or default, mapping failures to :class:`SchemaValueError`."""
    if text is None:
        return None
    try:
        return parse(text.strip())
    except ValueError as exc:
        raise SchemaValueError(
            f"cannot parse {field_name} {text!r} as {parse.__name__}"
        ) from exc
