"""Top-level views of a discovery document.

:class:`BaseDiscovery` exposes everything the two document shapes share:
identity and documentation metadata, the named schemas, the API-wide common
parameters and the OAuth 2.0 scopes. Two thin adapters add the
shape-specific parts:

* :class:`RpcDiscovery` -- a flat ``methods`` map and the ``rpcPath``.
* :class:`RestDiscovery` -- the ``resources`` tree and the transport paths.

Both resolve every type through the same
:func:`~discoverkit.schema.resolver.resolve_type` core. Views are immutable
and built lazily from the backing document; two views are equal when their
documents are structurally equal, so the same API loaded from two sources
deduplicates cleanly.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

from discoverkit.methods import (
    OAuth2Scope,
    RestMethod,
    RestResource,
    RpcMethod,
    rest_methods,
    rest_resources,
)
from discoverkit.models import DiscoveryDocumentNode, RestDocument, RpcDocument
from discoverkit.schema.resolved import ResolvedType
from discoverkit.schema.resolver import NamedSchemas, named_schema_view, resolve_schema_map


class IconSize(str, enum.Enum):
    """Icon sizes published in the ``icons`` block."""

    X16 = "x16"
    X32 = "x32"


@dataclass(frozen=True)
class IconDescription:
    """One icon URL together with its size."""

    size: IconSize
    url: str


class BaseDiscovery:
    """Common read-only view over a parsed discovery document.

    Args:
        document: The parsed wire document. It is kept by reference and
            never modified.
    """

    def __init__(self, document: DiscoveryDocumentNode) -> None:
        self._document = document
        self._named_schemas = named_schema_view(document.schemas or {})

    @property
    def document(self) -> DiscoveryDocumentNode:
        return self._document

    @property
    def named_schemas(self) -> NamedSchemas:
        """The raw named top-level schemas, read-only."""
        return self._named_schemas

    # --- Passthrough metadata ---

    @property
    def id(self) -> Optional[str]:
        """The document id, conventionally ``<name>:<version>``."""
        return self._document.id

    @property
    def name(self) -> Optional[str]:
        return self._document.name

    @property
    def version(self) -> Optional[str]:
        return self._document.version

    @property
    def title(self) -> Optional[str]:
        return self._document.title

    @property
    def description(self) -> Optional[str]:
        return self._document.description

    @property
    def documentation_link(self) -> Optional[str]:
        return self._document.documentation_link

    @property
    def labels(self) -> list[str]:
        return list(self._document.labels or [])

    @property
    def features(self) -> list[str]:
        return list(self._document.features or [])

    @property
    def icons(self) -> dict[str, str]:
        """Icon URLs keyed by size name (``x16``, ``x32``)."""
        return dict(self._document.icons or {})

    def icon_descriptions(self) -> list[IconDescription]:
        """Return the icons of known size, smallest first."""
        icons = self._document.icons or {}
        return [
            IconDescription(size=size, url=icons[size.value])
            for size in IconSize
            if icons.get(size.value)
        ]

    # --- Resolved views ---

    @property
    def schemas(self) -> dict[str, ResolvedType]:
        """Every named top-level schema, resolved against the named schemas."""
        return resolve_schema_map(self._document.schemas, self._named_schemas)

    @property
    def parameters(self) -> dict[str, ResolvedType]:
        """The API-wide common parameters; empty when the document declares none."""
        return resolve_schema_map(self._document.parameters, self._named_schemas)

    @property
    def oauth2_scopes(self) -> dict[str, OAuth2Scope]:
        """OAuth 2.0 scopes by name; empty when any level of ``auth.oauth2.scopes`` is absent."""
        auth = self._document.auth
        if auth is None or auth.oauth2 is None or auth.oauth2.scopes is None:
            return {}
        return {
            name: OAuth2Scope(name=name, description=scope.description)
            for name, scope in auth.oauth2.scopes.items()
        }

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._document == other._document

    def __hash__(self) -> int:
        return hash(self._document)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


class RpcDiscovery(BaseDiscovery):
    """View over an RPC-style discovery document."""

    _document: RpcDocument

    def __init__(self, document: RpcDocument) -> None:
        super().__init__(document)

    @property
    def rpc_path(self) -> Optional[str]:
        return self._document.rpc_path

    @property
    def methods(self) -> dict[str, RpcMethod]:
        """Methods keyed by their full name (e.g. ``urlshortener.url.get``)."""
        return {
            name: RpcMethod(node, self._named_schemas)
            for name, node in (self._document.methods or {}).items()
        }


class RestDiscovery(BaseDiscovery):
    """View over a REST-style discovery document."""

    _document: RestDocument

    def __init__(self, document: RestDocument) -> None:
        super().__init__(document)

    @property
    def base_path(self) -> Optional[str]:
        return self._document.base_path

    @property
    def root_url(self) -> Optional[str]:
        return self._document.root_url

    @property
    def service_path(self) -> Optional[str]:
        return self._document.service_path

    @property
    def base_url(self) -> Optional[str]:
        return self._document.base_url

    @property
    def methods(self) -> dict[str, RestMethod]:
        """Methods declared directly on the document; usually empty."""
        return rest_methods(self._document.methods, self._named_schemas)

    @property
    def resources(self) -> dict[str, RestResource]:
        return rest_resources(self._document.resources, self._named_schemas)

    def all_methods(self) -> dict[str, RestMethod]:
        """Flatten the resource tree into methods keyed by method id.

        Methods without an id fall back to their dotted resource path
        (``resource.sub.method``).
        """
        flat: dict[str, RestMethod] = {}

        def _collect(prefix: str, methods: dict[str, RestMethod], resources: dict[str, RestResource]) -> None:
            for name, method in methods.items():
                flat[method.id or f"{prefix}{name}"] = method
            for name, resource in resources.items():
                _collect(f"{prefix}{name}.", resource.methods(), resource.resources())

        _collect("", self.methods, self.resources)
        return flat


AnyDiscovery = Union[RpcDiscovery, RestDiscovery]
