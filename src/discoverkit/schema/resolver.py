"""Resolve schema nodes into typed, kind-tagged views.

Discovery documents describe every type-bearing field (a parameter, a
property, a method's return value) with a :class:`~discoverkit.models.SchemaNode`.
A node is either an inline definition with a ``type`` or a ``$ref`` naming
one of the document's top-level schemas, which may itself be another
reference.

:func:`resolve_type` follows the reference chain, maps the final node's
``type`` string to a :class:`~discoverkit.schema.kinds.TypeKind`, and wraps
the result in a :class:`~discoverkit.schema.resolved.ResolvedType`. Nested
fields (object properties, array items, map values) are **not** resolved
here; the kind views resolve them lazily against the same named-schema map.
That laziness is what lets a schema refer to itself through a property
without looping.

Both functions are pure: equal inputs always give equal outputs, and
nothing is cached or mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional

from discoverkit.exceptions import (
    SchemaReferenceCycleError,
    SchemaTypeError,
    UnknownSchemaReferenceError,
)
from discoverkit.models import SchemaNode
from discoverkit.schema.kinds import TypeKind
from discoverkit.schema.resolved import ResolvedType

NamedSchemas = Mapping[str, SchemaNode]

_NO_SCHEMAS: NamedSchemas = MappingProxyType({})


def dereference(node: SchemaNode, named_schemas: NamedSchemas) -> SchemaNode:
    """Follow ``$ref`` pointers from *node* until reaching an inline definition.

    Args:
        node: The node to dereference. Returned unchanged if it has no ``ref``.
        named_schemas: The document's top-level schemas, keyed by name.

    Returns:
        The first node along the chain that is not itself a reference.

    Raises:
        UnknownSchemaReferenceError: If a ``ref`` names a schema missing from
            *named_schemas*.
        SchemaReferenceCycleError: If the chain revisits a name, e.g.
            ``A -> B -> A``.
    """
    chain: list[str] = []
    current = node
    while current.ref is not None:
        name = current.ref
        if name in chain:
            raise SchemaReferenceCycleError(chain + [name])
        chain.append(name)
        try:
            current = named_schemas[name]
        except KeyError:
            raise UnknownSchemaReferenceError(name) from None
    return current


def resolve_type(
    node: Optional[SchemaNode],
    named_schemas: Optional[NamedSchemas],
) -> Optional[ResolvedType]:
    """Resolve *node* into a :class:`~discoverkit.schema.resolved.ResolvedType`.

    Args:
        node: The schema node to resolve. ``None`` is a valid input and
            means the field is absent (no return type, no request body).
        named_schemas: The document's top-level schemas. ``None`` is treated
            as an empty map. The map is kept by reference, read-only, on the
            result so that nested fields can be resolved later.

    Returns:
        The resolved type, or ``None`` when *node* is ``None``.

    Raises:
        UnknownSchemaReferenceError: A ``$ref`` names an unknown schema.
        SchemaReferenceCycleError: The ``$ref`` chain loops.
        SchemaTypeError: The dereferenced node has no recognised ``type``.

    Example::

        schemas = {"Url": SchemaNode(type="object", id="Url")}
        resolved = resolve_type(SchemaNode(ref="Url"), schemas)
        assert resolved.kind is TypeKind.OBJECT
    """
    if node is None:
        return None

    schemas = named_schema_view(named_schemas)
    real = dereference(node, schemas)
    kind = TypeKind.from_json_type(real.type)
    if kind is None:
        label = f" '{real.id}'" if real.id else ""
        raise SchemaTypeError(
            f"schema node{label} has no resolvable type identifier "
            f"(type={real.type!r})"
        )
    return ResolvedType(node=real, kind=kind, named_schemas=schemas)


def resolve_schema_map(
    nodes: Optional[Mapping[str, SchemaNode]],
    named_schemas: Optional[NamedSchemas],
) -> dict[str, ResolvedType]:
    """Resolve every value of *nodes*, returning an empty dict when *nodes* is ``None``."""
    if not nodes:
        return {}
    schemas = named_schema_view(named_schemas)
    return {name: resolve_type(child, schemas) for name, child in nodes.items()}


def named_schema_view(named_schemas: Optional[NamedSchemas]) -> NamedSchemas:
    """Return *named_schemas* as a read-only mapping.

    ``None`` becomes a shared empty mapping; an existing proxy is returned
    as-is so repeated calls do not stack wrappers.
    """
    if named_schemas is None:
        return _NO_SCHEMAS
    if isinstance(named_schemas, MappingProxyType):
        return named_schemas
    return MappingProxyType(named_schemas)
