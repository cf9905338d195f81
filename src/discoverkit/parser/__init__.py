"""Discovery document parser -- load raw documents and wrap them in typed views.

This sub-package is the outer layer in front of the resolution core: it
turns a raw discovery document (JSON or YAML, local file, remote URL or
stdin) into an :class:`~discoverkit.discovery.RpcDiscovery` or
:class:`~discoverkit.discovery.RestDiscovery`.

Typical usage::

    from discoverkit.parser import load_discovery

    api = load_discovery("https://www.googleapis.com/discovery/v1/apis/urlshortener/v1/rest")
    print(sorted(api.all_methods()))

Sub-modules:

* :mod:`~discoverkit.parser.loader` -- I/O layer (URL, file, stdin) plus
  format detection.
* :mod:`~discoverkit.parser.documents` -- document style detection and
  validation into the frozen wire models.
"""

from discoverkit.parser.documents import (
    DocumentStyle,
    detect_style,
    parse_directory,
    parse_document,
    parse_rest_document,
    parse_rpc_document,
)
from discoverkit.parser.loader import load_discovery, load_document, parse_content

__all__ = [
    "DocumentStyle",
    "detect_style",
    "load_discovery",
    "load_document",
    "parse_content",
    "parse_directory",
    "parse_document",
    "parse_rest_document",
    "parse_rpc_document",
]
