"""Tests for the pydantic wire and config models in discoverkit.models."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from discoverkit.models import (
    DEFAULT_DISCOVERY_URL,
    DirectoryList,
    DiscoverkitConfig,
    RestDocument,
    RpcDocument,
    SchemaNode,
)


class TestSchemaNode:
    def test_wire_aliases(self) -> None:
        node = SchemaNode.model_validate(
            {
                "$ref": "Url",
                "additionalProperties": {"type": "string"},
                "enum": ["A"],
                "enumDescriptions": ["a"],
                "default": "A",
            }
        )
        assert node.ref == "Url"
        assert node.additional_properties.type == "string"
        assert node.enum_values == ("A",)
        assert node.enum_descriptions == ("a",)
        assert node.default_value == "A"

    def test_numeric_literals_become_text(self) -> None:
        node = SchemaNode.model_validate({"type": "number", "minimum": 0.5, "default": 3})
        assert node.minimum == "0.5"
        assert node.default_value == "3"

    def test_boolean_literal_becomes_text(self) -> None:
        node = SchemaNode.model_validate({"type": "boolean", "default": False})
        assert node.default_value == "false"

    def test_enum_length_mismatch_rejected(self) -> None:
        with pytest.raises(ValidationError, match="enumDescriptions"):
            SchemaNode.model_validate(
                {"type": "string", "enum": ["A", "B"], "enumDescriptions": ["a"]}
            )

    def test_unknown_keys_ignored(self) -> None:
        node = SchemaNode.model_validate({"type": "string", "annotations": {"required": ["x"]}})
        assert node.type == "string"

    def test_frozen(self) -> None:
        node = SchemaNode(type="string")
        with pytest.raises(ValidationError):
            node.type = "integer"  # type: ignore[misc]


class TestDeepImmutability:
    def test_document_schemas_are_read_only(self, urlshortener_raw: dict[str, Any]) -> None:
        doc = RpcDocument.model_validate(urlshortener_raw)
        with pytest.raises(TypeError):
            doc.schemas["Injected"] = SchemaNode(type="string")  # type: ignore[index]
        assert "Injected" not in doc.schemas

    def test_node_properties_are_read_only(self) -> None:
        node = SchemaNode.model_validate(
            {"type": "object", "properties": {"a": {"type": "string"}}}
        )
        members = {node}
        with pytest.raises(TypeError):
            node.properties["b"] = SchemaNode(type="integer")  # type: ignore[index]
        assert node in members

    def test_sequences_are_tuples(self, urlshortener_raw: dict[str, Any]) -> None:
        doc = RpcDocument.model_validate(urlshortener_raw)
        method = doc.methods["urlshortener.url.get"]
        assert isinstance(doc.labels, tuple)
        assert isinstance(method.parameter_order, tuple)
        assert isinstance(method.parameters["projection"].enum_values, tuple)

    def test_nested_resource_maps_are_read_only(self, tasks_raw: dict[str, Any]) -> None:
        doc = RestDocument.model_validate(tasks_raw)
        with pytest.raises(TypeError):
            doc.resources["tasks"].methods["evil"] = None  # type: ignore[index]

    def test_frozen_maps_still_serialise(self, urlshortener_raw: dict[str, Any]) -> None:
        doc = RpcDocument.model_validate(urlshortener_raw)
        dumped = doc.model_dump(mode="json", by_alias=True, exclude_none=True)
        assert isinstance(dumped["schemas"], dict)
        assert dumped["schemas"]["Url"]["properties"]["analytics"] == {
            "$ref": "AnalyticsSummary",
            "description": "A summary of the click analytics for the short and long URL.",
        }
        assert dumped["labels"] == ["labs"]
        assert RpcDocument.model_validate(dumped) == doc


class TestStructuralEquality:
    def test_equal_documents_hash_equal(self, urlshortener_raw: dict[str, Any]) -> None:
        a = RpcDocument.model_validate(urlshortener_raw)
        b = RpcDocument.model_validate(urlshortener_raw)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_documents_differ(self, urlshortener_raw: dict[str, Any]) -> None:
        changed = dict(urlshortener_raw, version="v2")
        assert RpcDocument.model_validate(urlshortener_raw) != RpcDocument.model_validate(changed)

    def test_canonical_json_uses_wire_names(self) -> None:
        node = SchemaNode.model_validate({"$ref": "Url"})
        assert node.canonical_json() == '{"$ref": "Url"}'


class TestDocuments:
    def test_rest_document_fields(self, tasks_raw: dict[str, Any]) -> None:
        doc = RestDocument.model_validate(tasks_raw)
        assert doc.base_path == "/tasks/v1/"
        assert doc.root_url == "https://www.googleapis.com/"
        assert doc.batch_path == "batch/tasks/v1"
        assert set(doc.resources) == {"tasks", "tasklists"}

    def test_rpc_document_fields(self, urlshortener_raw: dict[str, Any]) -> None:
        doc = RpcDocument.model_validate(urlshortener_raw)
        assert doc.rpc_path == "/rpc"
        assert len(doc.methods) == 3

    def test_directory(self, directory_raw: dict[str, Any]) -> None:
        directory = DirectoryList.model_validate(directory_raw)
        assert len(directory.items) == 3

        first = directory.items[0]
        assert first.id == "adexchangebuyer:v1"
        assert first.name == "adexchangebuyer"
        assert first.version == "v1"
        assert first.title
        assert first.description
        assert first.documentation_link
        assert first.labels == ("labs",)
        assert first.preferred is True

    def test_directory_item_requires_name_and_version(self) -> None:
        with pytest.raises(ValidationError):
            DirectoryList.model_validate({"items": [{"id": "x:v1"}]})


class TestConfigModels:
    def test_defaults(self) -> None:
        config = DiscoverkitConfig()
        assert config.discovery_url == DEFAULT_DISCOVERY_URL
        assert config.request.timeout == 30.0
        assert config.request.verify_ssl is True
        assert config.cache.enabled is True
        assert config.cache.ttl_seconds == 3600
