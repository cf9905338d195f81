"""Canonical Pydantic models shared across all discoverkit modules.

This is the single source of truth for data shapes in the project. The models
fall into two groups:

**Wire models** -- the parsed, immutable form of a discovery document:
    :class:`SchemaNode`, :class:`RpcMethodNode`, :class:`RestMethodNode`,
    :class:`RestResourceNode`, :class:`AuthNode`, :class:`RpcDocument`,
    :class:`RestDocument`, :class:`DirectoryItem` and :class:`DirectoryList`.
    Field names follow Python conventions; the document's camelCase keys
    (and ``$ref``, ``enum``, ``default``) are accepted through aliases.

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`RequestConfig`, :class:`CacheConfig` and
    :class:`DiscoverkitConfig`.

Wire models are frozen all the way down: mapping fields hold read-only
proxies and sequence fields hold tuples. Equality is structural, and hashing
uses a canonical sorted-key JSON rendering so that equal documents hash
equally whatever the insertion order of their mappings.
"""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Annotated, Any, Mapping, Optional, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    WrapSerializer,
    field_validator,
    model_validator,
)


# --- Wire models ---

_V = TypeVar("_V")


def _freeze_map(value: dict[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(value)


def _thaw_map(value: Mapping[str, Any], handler: Any) -> Any:
    return handler(dict(value))


# Read-only after validation; serialises like a plain dict.
FrozenMap = Annotated[dict[str, _V], AfterValidator(_freeze_map), WrapSerializer(_thaw_map)]


class DocumentNode(BaseModel):
    """Base class for every frozen node of a parsed discovery document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def canonical_json(self) -> str:
        """Return a sorted-key JSON rendering of this node using wire names."""
        return json.dumps(
            self.model_dump(mode="json", by_alias=True, exclude_none=True),
            sort_keys=True,
        )

    def __hash__(self) -> int:
        return hash(self.canonical_json())


class SchemaNode(DocumentNode):
    """A single JSON-Schema-flavoured node of a discovery document.

    A node is either a pointer to a named top-level schema (``ref``) or an
    inline definition carrying a ``type``. Numeric limits and defaults are
    kept as text, exactly as discovery documents publish them; the typed
    accessors in :mod:`discoverkit.schema.resolved` parse them on demand.

    ``location`` and ``repeated`` only appear on REST method parameters.
    """

    ref: Optional[str] = Field(default=None, alias="$ref")
    type: Optional[str] = None
    id: Optional[str] = None
    description: Optional[str] = None
    items: Optional[SchemaNode] = None
    properties: Optional[FrozenMap[SchemaNode]] = None
    additional_properties: Optional[SchemaNode] = Field(
        default=None, alias="additionalProperties"
    )
    enum_values: Optional[tuple[str, ...]] = Field(default=None, alias="enum")
    enum_descriptions: Optional[tuple[str, ...]] = Field(
        default=None, alias="enumDescriptions"
    )
    format: Optional[str] = None
    pattern: Optional[str] = None
    minimum: Optional[str] = None
    maximum: Optional[str] = None
    default_value: Optional[str] = Field(default=None, alias="default")
    required: Optional[bool] = None
    location: Optional[str] = None
    repeated: Optional[bool] = None

    @field_validator("minimum", "maximum", "default_value", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Any:
        """Normalise JSON literals to the text form discovery documents use."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, (dict, list)):
            return json.dumps(value, sort_keys=True)
        return value

    @model_validator(mode="after")
    def _check_enum_lengths(self) -> SchemaNode:
        if (
            self.enum_values is not None
            and self.enum_descriptions is not None
            and len(self.enum_values) != len(self.enum_descriptions)
        ):
            raise ValueError(
                f"enum has {len(self.enum_values)} values but "
                f"{len(self.enum_descriptions)} enumDescriptions"
            )
        return self


class RpcMethodNode(DocumentNode):
    """A method entry of an RPC-style document's flat ``methods`` map."""

    id: Optional[str] = None
    description: Optional[str] = None
    returns: Optional[SchemaNode] = None
    parameters: Optional[FrozenMap[SchemaNode]] = None
    parameter_order: Optional[tuple[str, ...]] = Field(default=None, alias="parameterOrder")
    scopes: Optional[tuple[str, ...]] = None


class RestMethodNode(DocumentNode):
    """A method entry of a REST-style document (top level or inside a resource)."""

    id: Optional[str] = None
    description: Optional[str] = None
    http_method: Optional[str] = Field(default=None, alias="httpMethod")
    path: Optional[str] = None
    parameters: Optional[FrozenMap[SchemaNode]] = None
    parameter_order: Optional[tuple[str, ...]] = Field(default=None, alias="parameterOrder")
    request: Optional[SchemaNode] = None
    response: Optional[SchemaNode] = None
    scopes: Optional[tuple[str, ...]] = None


class RestResourceNode(DocumentNode):
    """A named grouping of REST methods and nested sub-resources."""

    methods: Optional[FrozenMap[RestMethodNode]] = None
    resources: Optional[FrozenMap[RestResourceNode]] = None


class OAuth2ScopeNode(DocumentNode):
    """Wire form of one OAuth 2.0 scope entry."""

    description: Optional[str] = None


class OAuth2Node(DocumentNode):
    """The ``auth.oauth2`` block."""

    scopes: Optional[FrozenMap[OAuth2ScopeNode]] = None


class AuthNode(DocumentNode):
    """The ``auth`` block."""

    oauth2: Optional[OAuth2Node] = None


class DiscoveryDocumentNode(DocumentNode):
    """Fields shared by the RPC-style and REST-style document shapes."""

    kind: Optional[str] = None
    id: Optional[str] = None
    name: Optional[str] = None
    version: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    documentation_link: Optional[str] = Field(default=None, alias="documentationLink")
    icons: Optional[FrozenMap[str]] = None
    labels: Optional[tuple[str, ...]] = None
    features: Optional[tuple[str, ...]] = None
    schemas: Optional[FrozenMap[SchemaNode]] = None
    parameters: Optional[FrozenMap[SchemaNode]] = None
    auth: Optional[AuthNode] = None


class RpcDocument(DiscoveryDocumentNode):
    """An RPC-style discovery document: a flat ``methods`` map plus ``rpcPath``."""

    methods: Optional[FrozenMap[RpcMethodNode]] = None
    rpc_path: Optional[str] = Field(default=None, alias="rpcPath")


class RestDocument(DiscoveryDocumentNode):
    """A REST-style discovery document: a ``resources`` tree plus transport paths."""

    methods: Optional[FrozenMap[RestMethodNode]] = None
    resources: Optional[FrozenMap[RestResourceNode]] = None
    protocol: Optional[str] = None
    root_url: Optional[str] = Field(default=None, alias="rootUrl")
    service_path: Optional[str] = Field(default=None, alias="servicePath")
    base_path: Optional[str] = Field(default=None, alias="basePath")
    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    batch_path: Optional[str] = Field(default=None, alias="batchPath")


class DirectoryItem(DocumentNode):
    """One API entry of the discovery directory listing."""

    id: Optional[str] = None
    name: str
    version: str
    title: Optional[str] = None
    description: Optional[str] = None
    discovery_rest_url: Optional[str] = Field(default=None, alias="discoveryRestUrl")
    discovery_link: Optional[str] = Field(default=None, alias="discoveryLink")
    documentation_link: Optional[str] = Field(default=None, alias="documentationLink")
    icons: Optional[FrozenMap[str]] = None
    labels: Optional[tuple[str, ...]] = None
    preferred: Optional[bool] = None


class DirectoryList(DocumentNode):
    """The discovery directory: every API the service knows about."""

    kind: Optional[str] = None
    discovery_version: Optional[str] = Field(default=None, alias="discoveryVersion")
    items: tuple[DirectoryItem, ...] = Field(default_factory=tuple)


# --- Configuration models ---


DEFAULT_DISCOVERY_URL = "https://www.googleapis.com/discovery/v1/apis"


class RequestConfig(BaseModel):
    """HTTP settings used when fetching directory and discovery documents."""

    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class CacheConfig(BaseModel):
    """Document cache settings stored in :class:`DiscoverkitConfig`."""

    enabled: bool = Field(default=True, description="Enable document caching")
    ttl_seconds: int = Field(default=3600, description="Cache TTL in seconds")


class DiscoverkitConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/discoverkit/config.json``.

    Loaded by :func:`~discoverkit.config.load_config`, which layers
    environment variables and explicit overrides on top of the file. See
    :func:`~discoverkit.config.resolve_config` for the precedence chain.
    """

    discovery_url: str = Field(
        default=DEFAULT_DISCOVERY_URL,
        description="Base URL of the discovery service (directory endpoint)",
    )
    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
