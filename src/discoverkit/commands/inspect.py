"""Inspect commands -- examine a discovery document.

Provides the ``discoverkit inspect`` sub-command group. Every command takes
a SOURCE (file path, URL, or ``-`` for stdin), loads it through
:func:`~discoverkit.parser.load_discovery`, and prints tables or structured
data through :mod:`discoverkit.output`.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from discoverkit.discovery import AnyDiscovery, RestDiscovery
from discoverkit.exceptions import DiscoverkitError, InvalidUsageError
from discoverkit.output import debug, error, format_response, info, print_table
from discoverkit.parser.documents import DocumentStyle
from discoverkit.schema import ResolvedType, TypeKind, resolve_type

inspect_app = typer.Typer(no_args_is_help=True)

_SOURCE_HELP = "Discovery document: file path, URL, or '-' for stdin."
_STYLE_HELP = "Force RPC or REST parsing instead of detecting it."


def _fail(exc: DiscoverkitError) -> typer.Exit:
    error(str(exc))
    return typer.Exit(code=exc.exit_code)


def _load(source: str, style: Optional[DocumentStyle]) -> AnyDiscovery:
    """Resolve config, then load and parse *source*.

    Raises:
        typer.Exit: With the error's exit code when loading fails.
    """
    from discoverkit.config import resolve_config
    from discoverkit.parser import load_discovery

    try:
        config = resolve_config()
        debug(f"Loading discovery document from {source}")
        return load_discovery(source, style=style, timeout=config.request.timeout)
    except DiscoverkitError as exc:
        raise _fail(exc) from None


def _type_label(resolved: Optional[ResolvedType]) -> str:
    """Short label for a type: its schema id when named, otherwise its kind."""
    if resolved is None:
        return "-"
    if resolved.id:
        return resolved.id
    if resolved.kind is TypeKind.ARRAY and resolved.node.items is not None:
        return f"array<{_type_label(resolved.as_array().element_type)}>"
    return resolved.kind.value


def describe_type(resolved: ResolvedType) -> dict[str, Any]:
    """Build a JSON-friendly summary of one resolved type.

    Nested types (properties, array items, map values) are described one
    level deep by label only, so self-referential schemas terminate.
    """
    data: dict[str, Any] = {"kind": resolved.kind.value}
    if resolved.id:
        data["id"] = resolved.id
    if resolved.description:
        data["description"] = resolved.description
    if resolved.required is not None:
        data["required"] = resolved.required

    view = resolved.view()
    if resolved.kind is TypeKind.STRING:
        if view.format is not None:
            data["format"] = view.format.value
        if view.pattern is not None:
            data["pattern"] = view.pattern
        if view.default is not None:
            data["default"] = view.default
        if view.is_enum:
            data["enum"] = dict(zip(view.enum_values, view.enum_descriptions))
    elif resolved.kind in (TypeKind.INTEGER, TypeKind.NUMBER):
        for key, value in (
            ("format", view.format.value if view.format else None),
            ("minimum", view.minimum),
            ("maximum", view.maximum),
            ("default", view.default),
        ):
            if value is not None:
                data[key] = value
    elif resolved.kind is TypeKind.BOOLEAN:
        if view.default is not None:
            data["default"] = view.default
    elif resolved.kind is TypeKind.OBJECT:
        properties = view.properties
        if properties is not None:
            data["properties"] = {name: _type_label(t) for name, t in properties.items()}
        additional = view.additional_property_type
        if additional is not None:
            data["additionalProperties"] = _type_label(additional)
    elif resolved.kind is TypeKind.ARRAY:
        data["items"] = _type_label(view.element_type)
    return data


@inspect_app.command("info")
def inspect_info(
    source: str = typer.Argument(..., help=_SOURCE_HELP),
    style: Optional[DocumentStyle] = typer.Option(None, "--style", help=_STYLE_HELP),
) -> None:
    """Show API metadata (id, title, version, paths, counts).

    Example::

        discoverkit inspect info urlshortener-v1-rpc.json
    """
    api = _load(source, style)

    data: dict[str, Any] = {
        "id": api.id,
        "name": api.name,
        "version": api.version,
        "title": api.title,
        "description": api.description or "-",
        "style": "rest" if isinstance(api, RestDiscovery) else "rpc",
        "documentation_link": api.documentation_link,
        "labels": api.labels,
        "features": api.features,
        "icons": {icon.size.value: icon.url for icon in api.icon_descriptions()},
        "schemas": len(api.named_schemas),
        "parameters": len(api.parameters),
        "scopes": len(api.oauth2_scopes),
    }
    if isinstance(api, RestDiscovery):
        data["root_url"] = api.root_url
        data["service_path"] = api.service_path
        data["base_path"] = api.base_path
        data["methods"] = len(api.all_methods())
    else:
        data["rpc_path"] = api.rpc_path
        data["methods"] = len(api.methods)

    format_response({k: v for k, v in data.items() if v is not None})


@inspect_app.command("methods")
def inspect_methods(
    source: str = typer.Argument(..., help=_SOURCE_HELP),
    style: Optional[DocumentStyle] = typer.Option(None, "--style", help=_STYLE_HELP),
) -> None:
    """List every method with its required and optional parameters.

    Example::

        discoverkit inspect methods urlshortener-v1-rpc.json
    """
    api = _load(source, style)

    try:
        if isinstance(api, RestDiscovery):
            headers = ["Method", "HTTP", "Path", "Required", "Optional", "Response"]
            rows = [
                [
                    name,
                    method.http_method or "-",
                    method.path or "-",
                    ", ".join(p.name for p in method.required_parameters()),
                    ", ".join(sorted(p.name for p in method.optional_parameters())),
                    _type_label(method.response_type()),
                ]
                for name, method in sorted(api.all_methods().items())
            ]
        else:
            headers = ["Method", "Required", "Optional", "Returns"]
            rows = [
                [
                    name,
                    ", ".join(p.name for p in method.required_parameters()),
                    ", ".join(sorted(p.name for p in method.optional_parameters())),
                    _type_label(method.return_type()),
                ]
                for name, method in sorted(api.methods.items())
            ]
    except DiscoverkitError as exc:
        raise _fail(exc) from None

    if not rows:
        info("No methods defined in this document.")
        return
    print_table(headers, rows, title=f"{api.title or api.id} -- Methods ({len(rows)})")


@inspect_app.command("schemas")
def inspect_schemas(
    source: str = typer.Argument(..., help=_SOURCE_HELP),
    style: Optional[DocumentStyle] = typer.Option(None, "--style", help=_STYLE_HELP),
) -> None:
    """List the named top-level schemas with their kind.

    Example::

        discoverkit inspect schemas urlshortener-v1-rpc.json
    """
    api = _load(source, style)

    try:
        schemas = api.schemas
    except DiscoverkitError as exc:
        raise _fail(exc) from None

    if not schemas:
        info("No schemas defined in this document.")
        return

    headers = ["Schema", "Kind", "Properties"]
    rows: list[list[str]] = []
    for name, resolved in sorted(schemas.items()):
        props = ""
        if resolved.kind is TypeKind.OBJECT:
            prop_names = sorted(resolved.node.properties or {})
            props = ", ".join(prop_names[:5])
            if len(prop_names) > 5:
                props += "..."
        rows.append([name, resolved.kind.value, props])

    print_table(headers, rows, title=f"Schemas ({len(rows)})")


@inspect_app.command("scopes")
def inspect_scopes(
    source: str = typer.Argument(..., help=_SOURCE_HELP),
    style: Optional[DocumentStyle] = typer.Option(None, "--style", help=_STYLE_HELP),
) -> None:
    """Show the OAuth 2.0 scopes declared by the document.

    Example::

        discoverkit inspect scopes urlshortener-v1-rpc.json
    """
    api = _load(source, style)

    scopes = api.oauth2_scopes
    if not scopes:
        info("No OAuth 2.0 scopes declared.")
        return

    rows = [[name, scope.description or "-"] for name, scope in sorted(scopes.items())]
    print_table(["Scope", "Description"], rows, title="OAuth 2.0 Scopes")


@inspect_app.command("type")
def inspect_type(
    source: str = typer.Argument(..., help=_SOURCE_HELP),
    schema: str = typer.Argument(..., help="Name of a top-level schema."),
    style: Optional[DocumentStyle] = typer.Option(None, "--style", help=_STYLE_HELP),
) -> None:
    """Resolve one named schema and describe its type.

    Example::

        discoverkit --json inspect type urlshortener-v1-rpc.json Url
    """
    api = _load(source, style)

    try:
        if schema not in api.named_schemas:
            raise InvalidUsageError(
                f"Unknown schema '{schema}'. Available: "
                f"{', '.join(sorted(api.named_schemas)) or '(none)'}"
            )
        resolved = resolve_type(api.named_schemas[schema], api.named_schemas)
        format_response(describe_type(resolved))
    except DiscoverkitError as exc:
        raise _fail(exc) from None
