"""Turn raw document dicts into typed discovery views.

A discovery document arrives either RPC-style (a flat ``methods`` map and an
``rpcPath``) or REST-style (a ``resources`` tree and ``basePath``/``rootUrl``).
This module detects the shape, validates the dict into the matching frozen
wire model from :mod:`discoverkit.models`, and wraps it in the corresponding
view from :mod:`discoverkit.discovery`.

Every call works on its own input and returns a fresh value; no parser state
is shared between calls.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import ValidationError

from discoverkit.discovery import AnyDiscovery, RestDiscovery, RpcDiscovery
from discoverkit.exceptions import DocumentParseError
from discoverkit.models import DirectoryList, RestDocument, RpcDocument

_REST_KIND = "discovery#restDescription"
_RPC_KIND = "discovery#rpcDescription"
_REST_MARKERS = ("resources", "basePath", "rootUrl", "servicePath", "baseUrl")


class DocumentStyle(str, enum.Enum):
    """The two discovery document shapes."""

    RPC = "rpc"
    REST = "rest"


def detect_style(raw: dict[str, Any]) -> DocumentStyle:
    """Decide whether *raw* is an RPC-style or REST-style document.

    The ``kind`` field wins when present. Otherwise any REST-only key
    (``resources``, ``basePath``, ``rootUrl``, ...) marks the document as
    REST, and everything else is treated as RPC.

    Args:
        raw: The parsed JSON/YAML document.

    Returns:
        The detected :class:`DocumentStyle`.
    """
    kind = raw.get("kind")
    if kind == _REST_KIND:
        return DocumentStyle.REST
    if kind == _RPC_KIND:
        return DocumentStyle.RPC
    if any(key in raw for key in _REST_MARKERS):
        return DocumentStyle.REST
    return DocumentStyle.RPC


def parse_rpc_document(raw: dict[str, Any]) -> RpcDiscovery:
    """Validate *raw* as an RPC-style document and wrap it.

    Raises:
        DocumentParseError: If *raw* does not fit the RPC document shape.
    """
    return RpcDiscovery(_validate(RpcDocument, raw))


def parse_rest_document(raw: dict[str, Any]) -> RestDiscovery:
    """Validate *raw* as a REST-style document and wrap it.

    Raises:
        DocumentParseError: If *raw* does not fit the REST document shape.
    """
    return RestDiscovery(_validate(RestDocument, raw))


def parse_document(
    raw: dict[str, Any],
    style: Optional[DocumentStyle] = None,
) -> AnyDiscovery:
    """Parse *raw* into an :class:`RpcDiscovery` or :class:`RestDiscovery`.

    Args:
        raw: The parsed JSON/YAML document.
        style: Force a document style instead of detecting it.

    Returns:
        The typed discovery view.

    Raises:
        DocumentParseError: If *raw* is not a dict or fails validation.

    Example::

        raw = load_document("urlshortener-v1-rpc.json")
        api = parse_document(raw)
        for name, method in api.methods.items():
            print(name, [p.name for p in method.required_parameters()])
    """
    if not isinstance(raw, dict):
        raise DocumentParseError(
            f"Discovery document must be an object (got {type(raw).__name__})"
        )
    if style is None:
        style = detect_style(raw)
    if style is DocumentStyle.REST:
        return parse_rest_document(raw)
    return parse_rpc_document(raw)


def parse_directory(raw: dict[str, Any]) -> DirectoryList:
    """Validate a directory listing document.

    Raises:
        DocumentParseError: If *raw* does not fit the directory shape.
    """
    return _validate(DirectoryList, raw)


def _validate(model, raw: dict[str, Any]):  # noqa: ANN001, ANN202
    """Validate *raw* into *model*, mapping pydantic errors to :class:`DocumentParseError`."""
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise DocumentParseError(
            f"Invalid {model.__name__}: {exc.error_count()} problem(s)\n{exc}"
        ) from exc
