"""discoverkit -- typed views over API discovery documents.

A discovery document describes an API: its methods, their parameters, the
named data schemas they exchange and the OAuth 2.0 scopes they require.
discoverkit parses such documents (RPC-style or REST-style) and resolves
every schema node, including ``$ref`` chains, into a kind-tagged type with a
typed view per kind.

Typical usage::

    from discoverkit.parser import load_discovery

    api = load_discovery("urlshortener-v1-rpc.json")
    method = api.methods["urlshortener.url.get"]
    print([p.name for p in method.required_parameters()])
    print(method.return_type().as_object().properties.keys())

Modules:
    schema: Type kinds, the resolver and the per-kind views.
    methods: Method and resource views with parameter partitioning.
    discovery: Document-level views (RPC and REST).
    parser: Loading raw documents from files, URLs and stdin.
    directory: Client for the discovery directory service.
    models: Pydantic wire and config models.
    config: XDG-aware configuration resolution.
    cache: Disk cache for fetched documents.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer CLI entry point.
"""

__version__ = "0.1.0"
