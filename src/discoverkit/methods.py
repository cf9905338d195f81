"""Method and resource views over a parsed discovery document.

Each view wraps one wire node plus a read-only reference to the document's
named schemas, and resolves types through
:func:`~discoverkit.schema.resolver.resolve_type` only when asked. Views
hold no other state and are rebuilt on every access of their parent.

* :class:`RpcMethod` -- an entry of an RPC-style document's ``methods`` map.
* :class:`RestMethod` -- a REST method, adding the HTTP binding and the
  request/response bodies.
* :class:`RestResource` -- a node of the REST resource tree.

Parameters are partitioned the way discovery documents describe them:
``parameterOrder`` lists the required parameters in call order, and every
other declared parameter is optional.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional, Union

from discoverkit.exceptions import DocumentStructureError
from discoverkit.models import RestMethodNode, RestResourceNode, RpcMethodNode, SchemaNode
from discoverkit.schema.resolved import ResolvedType
from discoverkit.schema.resolver import NamedSchemas, named_schema_view, resolve_type


class ParameterLocation(str, enum.Enum):
    """Where a REST parameter travels, per the parameter's ``location`` field."""

    PATH = "path"
    QUERY = "query"


@dataclass(frozen=True)
class Parameter:
    """A named method parameter and its resolved type.

    ``location`` and ``repeated`` are only populated for REST methods.
    """

    name: str
    type: ResolvedType
    location: Optional[ParameterLocation] = None
    repeated: Optional[bool] = None


@dataclass(frozen=True)
class OAuth2Scope:
    """An OAuth 2.0 scope declared in the document's ``auth`` block."""

    name: str
    description: Optional[str] = None


class _MethodView:
    """Parameter partitioning and scopes shared by RPC and REST methods."""

    def __init__(
        self,
        node: Union[RpcMethodNode, RestMethodNode],
        named_schemas: Optional[NamedSchemas],
    ) -> None:
        self._node = node
        self._named_schemas = named_schema_view(named_schemas)

    @property
    def node(self) -> Union[RpcMethodNode, RestMethodNode]:
        return self._node

    @property
    def id(self) -> Optional[str]:
        return self._node.id

    @property
    def description(self) -> Optional[str]:
        return self._node.description

    def required_parameters(self) -> list[Parameter]:
        """Return the required parameters in ``parameterOrder`` order.

        Raises:
            DocumentStructureError: If ``parameterOrder`` names a parameter the
                method does not declare.
        """
        declared = self._node.parameters or {}
        params: list[Parameter] = []
        for name in self._required_names():
            if name not in declared:
                raise DocumentStructureError(
                    f"method '{self.id}' lists undeclared parameter '{name}' "
                    "in parameterOrder"
                )
            params.append(self._make_parameter(name, declared[name]))
        return params

    def optional_parameters(self) -> list[Parameter]:
        """Return every declared parameter not listed in ``parameterOrder``.

        The result follows declaration order, but callers should treat it as
        unordered.
        """
        required = set(self._required_names())
        declared = self._node.parameters or {}
        return [
            self._make_parameter(name, node)
            for name, node in declared.items()
            if name not in required
        ]

    def scopes(self) -> list[str]:
        """Return the OAuth 2.0 scopes this method requires (empty if none)."""
        return list(self._node.scopes or [])

    def _required_names(self) -> list[str]:
        # dict.fromkeys drops repeated names while keeping their first position
        return list(dict.fromkeys(self._node.parameter_order or []))

    def _make_parameter(self, name: str, node: SchemaNode) -> Parameter:
        location = None
        if node.location is not None:
            try:
                location = ParameterLocation(node.location)
            except ValueError:
                location = None
        return Parameter(
            name=name,
            type=resolve_type(node, self._named_schemas),
            location=location,
            repeated=node.repeated,
        )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._node == other._node and self._named_schemas == other._named_schemas

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._node))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


class RpcMethod(_MethodView):
    """A method of an RPC-style discovery document."""

    _node: RpcMethodNode

    def __init__(self, node: RpcMethodNode, named_schemas: Optional[NamedSchemas]) -> None:
        super().__init__(node, named_schemas)

    def return_type(self) -> Optional[ResolvedType]:
        """The resolved ``returns`` schema, or ``None`` if the method returns nothing."""
        return resolve_type(self._node.returns, self._named_schemas)


class RestMethod(_MethodView):
    """A method of a REST-style discovery document."""

    _node: RestMethodNode

    def __init__(self, node: RestMethodNode, named_schemas: Optional[NamedSchemas]) -> None:
        super().__init__(node, named_schemas)

    @property
    def http_method(self) -> Optional[str]:
        return self._node.http_method

    @property
    def path(self) -> Optional[str]:
        return self._node.path

    def request_type(self) -> Optional[ResolvedType]:
        """The resolved request body schema, or ``None`` when there is no body."""
        return resolve_type(self._node.request, self._named_schemas)

    def response_type(self) -> Optional[ResolvedType]:
        """The resolved response schema, or ``None`` when nothing is returned."""
        return resolve_type(self._node.response, self._named_schemas)


class RestResource:
    """A node of a REST document's resource tree.

    Carries the document's named schemas down to every nested method and
    sub-resource.
    """

    def __init__(self, node: RestResourceNode, named_schemas: Optional[NamedSchemas]) -> None:
        self._node = node
        self._named_schemas = named_schema_view(named_schemas)

    @property
    def node(self) -> RestResourceNode:
        return self._node

    def methods(self) -> dict[str, RestMethod]:
        return rest_methods(self._node.methods, self._named_schemas)

    def resources(self) -> dict[str, RestResource]:
        return rest_resources(self._node.resources, self._named_schemas)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RestResource):
            return NotImplemented
        return self._node == other._node and self._named_schemas == other._named_schemas

    def __hash__(self) -> int:
        return hash(self._node)

    def __repr__(self) -> str:
        return (
            f"RestResource(methods={sorted(self._node.methods or {})!r}, "
            f"resources={sorted(self._node.resources or {})!r})"
        )


def rest_methods(
    nodes: Optional[Mapping[str, RestMethodNode]],
    named_schemas: NamedSchemas,
) -> dict[str, RestMethod]:
    """Wrap each REST method node; ``None`` gives an empty dict."""
    return {name: RestMethod(node, named_schemas) for name, node in (nodes or {}).items()}


def rest_resources(
    nodes: Optional[Mapping[str, RestResourceNode]],
    named_schemas: NamedSchemas,
) -> dict[str, RestResource]:
    """Wrap each REST resource node; ``None`` gives an empty dict."""
    return {name: RestResource(node, named_schemas) for name, node in (nodes or {}).items()}
