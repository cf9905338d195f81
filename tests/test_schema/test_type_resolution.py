"""Tests for discoverkit.schema.resolver -- dereferencing and kind tagging."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from discoverkit.exceptions import (
    SchemaError,
    SchemaReferenceCycleError,
    SchemaTypeError,
    UnknownSchemaReferenceError,
    WrongTypeKindError,
)
from discoverkit.models import SchemaNode
from discoverkit.schema import (
    ResolvedType,
    TypeKind,
    dereference,
    named_schema_view,
    resolve_schema_map,
    resolve_type,
)


def _node(**kwargs) -> SchemaNode:
    return SchemaNode.model_validate(kwargs)


# ---------------------------------------------------------------------------
# Kind tagging
# ---------------------------------------------------------------------------


class TestKindTagging:
    """The dereferenced node's ``type`` string selects the kind."""

    @pytest.mark.parametrize(
        "json_type, kind",
        [
            ("string", TypeKind.STRING),
            ("number", TypeKind.NUMBER),
            ("integer", TypeKind.INTEGER),
            ("boolean", TypeKind.BOOLEAN),
            ("object", TypeKind.OBJECT),
            ("array", TypeKind.ARRAY),
            ("null", TypeKind.NULL),
            ("any", TypeKind.ANY),
        ],
    )
    def test_every_type_string_maps_to_its_kind(self, json_type: str, kind: TypeKind) -> None:
        resolved = resolve_type(_node(type=json_type), {})
        assert resolved.kind is kind

    def test_integer_node_gives_integer_view(self) -> None:
        resolved = resolve_type(_node(type="integer", minimum="1"), {})
        assert resolved.kind is TypeKind.INTEGER
        assert resolved.as_integer().minimum == 1

    def test_wrong_kind_access_raises(self) -> None:
        resolved = resolve_type(_node(type="integer"), {})
        with pytest.raises(WrongTypeKindError) as exc_info:
            resolved.as_string()
        assert exc_info.value.expected is TypeKind.STRING
        assert exc_info.value.actual is TypeKind.INTEGER
        assert "expected a string type" in str(exc_info.value)

    def test_view_returns_matching_class(self) -> None:
        from discoverkit.schema import BooleanType

        resolved = resolve_type(_node(type="boolean"), {})
        assert isinstance(resolved.view(), BooleanType)

    def test_unknown_type_string_raises(self) -> None:
        with pytest.raises(SchemaTypeError, match="no resolvable type identifier"):
            resolve_type(_node(type="datetime", id="When"), {})

    def test_missing_type_raises(self) -> None:
        with pytest.raises(SchemaTypeError):
            resolve_type(_node(description="no type at all"), {})

    def test_schema_type_error_is_schema_error(self) -> None:
        with pytest.raises(SchemaError):
            resolve_type(_node(), {})


# ---------------------------------------------------------------------------
# Absent input
# ---------------------------------------------------------------------------


class TestAbsentNode:
    def test_none_node_returns_none(self) -> None:
        assert resolve_type(None, {}) is None

    def test_none_node_with_none_schemas(self) -> None:
        assert resolve_type(None, None) is None

    def test_none_schemas_treated_as_empty(self) -> None:
        resolved = resolve_type(_node(type="string"), None)
        assert resolved.kind is TypeKind.STRING
        assert dict(resolved.named_schemas) == {}


# ---------------------------------------------------------------------------
# Dereferencing
# ---------------------------------------------------------------------------


class TestDereference:
    """``$ref`` chains are followed transparently."""

    def test_ref_resolves_like_target(self) -> None:
        schemas = {"Url": _node(id="Url", type="object", properties={"id": {"type": "string"}})}
        via_ref = resolve_type(_node(**{"$ref": "Url"}), schemas)
        direct = resolve_type(schemas["Url"], schemas)
        assert via_ref == direct
        assert via_ref.id == "Url"

    def test_ref_chain(self) -> None:
        schemas = {
            "A": _node(**{"$ref": "B"}),
            "B": _node(**{"$ref": "C"}),
            "C": _node(id="C", type="number"),
        }
        resolved = resolve_type(_node(**{"$ref": "A"}), schemas)
        assert resolved.kind is TypeKind.NUMBER
        assert resolved.node is schemas["C"]

    def test_dereference_returns_inline_node_unchanged(self) -> None:
        node = _node(type="string")
        assert dereference(node, {}) is node

    def test_unknown_reference_raises(self) -> None:
        with pytest.raises(UnknownSchemaReferenceError) as exc_info:
            resolve_type(_node(**{"$ref": "Missing"}), {"Other": _node(type="string")})
        assert exc_info.value.name == "Missing"
        assert str(exc_info.value) == "unknown schema reference: Missing"

    def test_unknown_reference_deep_in_chain(self) -> None:
        schemas = {"A": _node(**{"$ref": "Gone"})}
        with pytest.raises(UnknownSchemaReferenceError, match="Gone"):
            resolve_type(_node(**{"$ref": "A"}), schemas)

    def test_reference_cycle_raises(self) -> None:
        schemas = {"A": _node(**{"$ref": "B"}), "B": _node(**{"$ref": "A"})}
        with pytest.raises(SchemaReferenceCycleError) as exc_info:
            resolve_type(_node(**{"$ref": "A"}), schemas)
        assert exc_info.value.chain == ["A", "B", "A"]
        assert "A -> B -> A" in str(exc_info.value)

    def test_self_reference_cycle(self) -> None:
        schemas = {"Loop": _node(**{"$ref": "Loop"})}
        with pytest.raises(SchemaReferenceCycleError):
            resolve_type(schemas["Loop"], schemas)

    def test_self_referential_object_is_not_a_cycle(self) -> None:
        schemas = {
            "Node": _node(
                id="Node",
                type="object",
                properties={"next": {"$ref": "Node"}, "value": {"type": "string"}},
            )
        }
        resolved = resolve_type(_node(**{"$ref": "Node"}), schemas)
        nested = resolved.as_object().properties["next"]
        assert nested == resolved
        assert nested.as_object().properties["next"].id == "Node"


# ---------------------------------------------------------------------------
# Purity and immutability
# ---------------------------------------------------------------------------


class TestPurity:
    def test_repeated_resolution_is_value_equal(self) -> None:
        schemas = {"Url": _node(id="Url", type="object")}
        first = resolve_type(schemas["Url"], schemas)
        second = resolve_type(schemas["Url"], schemas)
        assert first == second
        assert hash(first) == hash(second)

    def test_equal_nodes_from_separate_parses(self) -> None:
        a = resolve_type(_node(type="string", enum=["X"]), {})
        b = resolve_type(_node(type="string", enum=["X"]), {})
        assert a == b

    def test_resolved_type_is_frozen(self) -> None:
        resolved = resolve_type(_node(type="string"), {})
        with pytest.raises(AttributeError):
            resolved.kind = TypeKind.NUMBER  # type: ignore[misc]

    def test_named_schemas_are_read_only(self) -> None:
        schemas = {"A": _node(type="string")}
        resolved = resolve_type(schemas["A"], schemas)
        with pytest.raises(TypeError):
            resolved.named_schemas["B"] = _node(type="string")  # type: ignore[index]

    def test_named_schema_view_does_not_rewrap(self) -> None:
        proxy = named_schema_view({"A": _node(type="string")})
        assert isinstance(proxy, MappingProxyType)
        assert named_schema_view(proxy) is proxy


# ---------------------------------------------------------------------------
# resolve_schema_map
# ---------------------------------------------------------------------------


class TestResolveSchemaMap:
    def test_none_gives_empty_dict(self) -> None:
        assert resolve_schema_map(None, {}) == {}

    def test_resolves_every_value(self) -> None:
        schemas = {"Url": _node(id="Url", type="object")}
        resolved = resolve_schema_map(
            {"a": _node(type="string"), "b": _node(**{"$ref": "Url"})}, schemas
        )
        assert set(resolved) == {"a", "b"}
        assert all(isinstance(value, ResolvedType) for value in resolved.values())
        assert resolved["b"].id == "Url"
