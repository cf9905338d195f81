"""Tests for discoverkit.parser.documents -- style detection and validation."""

from __future__ import annotations

from typing import Any

import pytest

from discoverkit.discovery import RestDiscovery, RpcDiscovery
from discoverkit.exceptions import DocumentParseError
from discoverkit.parser import (
    DocumentStyle,
    detect_style,
    parse_directory,
    parse_document,
)


class TestDetectStyle:
    def test_rest_kind(self) -> None:
        assert detect_style({"kind": "discovery#restDescription"}) is DocumentStyle.REST

    def test_rpc_kind_wins_over_markers(self) -> None:
        raw = {"kind": "discovery#rpcDescription", "basePath": "/x/"}
        assert detect_style(raw) is DocumentStyle.RPC

    @pytest.mark.parametrize("marker", ["resources", "basePath", "rootUrl", "servicePath", "baseUrl"])
    def test_rest_markers(self, marker: str) -> None:
        assert detect_style({marker: {}}) is DocumentStyle.REST

    def test_defaults_to_rpc(self) -> None:
        assert detect_style({"methods": {}}) is DocumentStyle.RPC


class TestParseDocument:
    def test_rpc_fixture(self, urlshortener_raw: dict[str, Any]) -> None:
        assert isinstance(parse_document(urlshortener_raw), RpcDiscovery)

    def test_rest_fixture(self, tasks_raw: dict[str, Any]) -> None:
        assert isinstance(parse_document(tasks_raw), RestDiscovery)

    def test_forced_style(self, urlshortener_raw: dict[str, Any]) -> None:
        api = parse_document(urlshortener_raw, style=DocumentStyle.REST)
        assert isinstance(api, RestDiscovery)
        assert api.id == "urlshortener:v1"

    def test_non_dict_rejected(self) -> None:
        with pytest.raises(DocumentParseError, match="must be an object"):
            parse_document(["not", "a", "document"])  # type: ignore[arg-type]

    def test_validation_error_mapped(self) -> None:
        with pytest.raises(DocumentParseError, match="RpcDocument"):
            parse_document({"schemas": {"A": {"type": "string", "enum": ["x"], "enumDescriptions": []}}})

    def test_wrong_field_shape_mapped(self) -> None:
        with pytest.raises(DocumentParseError):
            parse_document({"kind": "discovery#restDescription", "resources": []})

    def test_parse_does_not_mutate_input(self, urlshortener_raw: dict[str, Any]) -> None:
        import copy

        before = copy.deepcopy(urlshortener_raw)
        parse_document(urlshortener_raw)
        assert urlshortener_raw == before


class TestParseDirectory:
    def test_items(self, directory_raw: dict[str, Any]) -> None:
        directory = parse_directory(directory_raw)
        assert [item.name for item in directory.items] == ["adexchangebuyer", "tasks", "urlshortener"]
        assert directory.discovery_version == "v1"

    def test_invalid_directory(self) -> None:
        with pytest.raises(DocumentParseError, match="DirectoryList"):
            parse_directory({"items": [{"name": "missing-version"}]})

    def test_empty_directory(self) -> None:
        assert parse_directory({}).items == ()
