"""Load discovery documents from a URL, local file, or stdin.

This module handles all I/O for reading raw discovery documents and
converting them into Python dictionaries. It supports both JSON and YAML
with automatic format detection.

The public functions are:

* :func:`load_document` -- Load and parse a document from any supported source.
* :func:`load_discovery` -- Load a document and wrap it in a typed view via
  :func:`~discoverkit.parser.documents.parse_document`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from discoverkit.discovery import AnyDiscovery
from discoverkit.exceptions import DocumentParseError, FetchError
from discoverkit.parser.documents import DocumentStyle, parse_document

logger = logging.getLogger(__name__)


def load_document(source: str, timeout: float = 30.0) -> dict[str, Any]:
    """Load a discovery document from URL, file path, or stdin ('-').

    Supports JSON and YAML formats and auto-detects the format from the
    content type or file extension.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        timeout: Request timeout in seconds for URL sources.

    Returns:
        The parsed document as a dictionary.

    Raises:
        FetchError: If a URL cannot be fetched.
        DocumentParseError: If a file cannot be read or the content cannot
            be parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source, timeout)
    else:
        return _load_from_file(source)


def load_discovery(
    source: str,
    style: Optional[DocumentStyle] = None,
    timeout: float = 30.0,
) -> AnyDiscovery:
    """Load *source* and return its typed discovery view.

    Args:
        source: A URL, file path, or '-' for stdin.
        style: Force RPC or REST parsing instead of detecting the shape.
        timeout: Request timeout in seconds for URL sources.
    """
    return parse_document(load_document(source, timeout=timeout), style=style)


def _load_from_stdin() -> dict[str, Any]:
    """Read a document from stdin, trying JSON and then YAML."""
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise DocumentParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise DocumentParseError("No input received from stdin")

    return parse_content(content, hint="stdin")


def _load_from_url(url: str, timeout: float) -> dict[str, Any]:
    """Fetch a document from *url*, using the content type as a parsing hint."""
    logger.debug("Fetching discovery document from %s", url)
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise FetchError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise FetchError(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local ``.json``, ``.yaml`` or ``.yml`` file."""
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentParseError(f"Document file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentParseError(f"Failed to read document file {path}: {exc}") from exc

    if not content.strip():
        raise DocumentParseError(f"Document file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return parse_content(content, hint=hint)


def parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Valid JSON is also valid YAML, but JSON parsing is stricter and faster.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        DocumentParseError: If the content cannot be parsed as either format,
            or does not contain an object at the top level.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise DocumentParseError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_object(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    else:
        return _require_object(result)

    msg = "Failed to parse document as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise DocumentParseError(msg)


def _require_object(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise DocumentParseError(f"Document must be a JSON/YAML object (got {kind})")
    return result
