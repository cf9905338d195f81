"""Client for the discovery directory service.

:class:`DiscoveryClient` wraps :class:`httpx.Client` and knows the URL
layout of a discovery service:

- ``<discovery_url>`` -- the directory listing of every published API.
- ``<discovery_url>/<name>/<version>/rest`` -- a REST-style document.
- ``<discovery_url>/<name>/<version>/rpc`` -- an RPC-style document.

Raw documents can be cached on disk through
:class:`~discoverkit.cache.DocumentCache`. Bulk fetching of every API in the
directory reports per-API outcomes as :class:`FetchSucceeded` or
:class:`FetchFailed` values rather than dropping failures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar, Union

import httpx

from discoverkit.discovery import AnyDiscovery
from discoverkit.exceptions import DiscoverkitError, DocumentParseError, FetchError
from discoverkit.models import DirectoryList, DiscoverkitConfig
from discoverkit.parser.documents import DocumentStyle, parse_directory, parse_document
from discoverkit.parser.loader import parse_content

if TYPE_CHECKING:
    from discoverkit.cache import DocumentCache

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


@dataclass(frozen=True)
class FetchSucceeded:
    """An API from the directory whose document was fetched and parsed."""

    name: str
    version: str
    discovery: AnyDiscovery


@dataclass(frozen=True)
class FetchFailed:
    """An API from the directory whose document could not be obtained."""

    name: str
    version: str
    error: str


FetchResult = Union[FetchSucceeded, FetchFailed]


class DiscoveryClient:
    """Fetch directory listings and discovery documents.

    Must be used as a context manager so that the underlying
    :class:`httpx.Client` is opened and closed properly.

    Args:
        config: Effective configuration; defaults to
            :class:`~discoverkit.models.DiscoverkitConfig` defaults.
        cache: Optional disk cache for raw documents.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.

    Example::

        with DiscoveryClient(config) as client:
            api = client.get_discovery("urlshortener", "v1")
            print(api.title)
    """

    def __init__(
        self,
        config: Optional[DiscoverkitConfig] = None,
        cache: Optional[DocumentCache] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or DiscoverkitConfig()
        self._cache = cache
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> DiscoveryClient:
        request = self._config.request
        self._client = httpx.Client(
            timeout=request.timeout,
            verify=request.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    @property
    def base_url(self) -> str:
        return self._config.discovery_url.rstrip("/")

    def discovery_url_for(
        self, name: str, version: str, style: DocumentStyle = DocumentStyle.REST
    ) -> str:
        """Return the document URL for *name*/*version* in the given style."""
        return "/".join((self.base_url, name, version, DocumentStyle(style).value))

    def get_directory(self) -> DirectoryList:
        """Fetch the directory listing.

        Raises:
            FetchError: On HTTP or network failure.
            DocumentParseError: If the listing is malformed.
        """
        return self._get_parsed(self.base_url, parse_directory)

    def get_discovery(
        self, name: str, version: str, style: DocumentStyle = DocumentStyle.REST
    ) -> AnyDiscovery:
        """Fetch and parse the discovery document for one API.

        Args:
            name: API name, e.g. ``"urlshortener"``.
            version: API version, e.g. ``"v1"``.
            style: Which document shape to request.

        Returns:
            A :class:`~discoverkit.discovery.RestDiscovery` or
            :class:`~discoverkit.discovery.RpcDiscovery`, matching *style*.

        Raises:
            FetchError: On HTTP or network failure.
            DocumentParseError: If the document is malformed.
        """
        style = DocumentStyle(style)
        return self._get_parsed(
            self.discovery_url_for(name, version, style),
            lambda raw: parse_document(raw, style=style),
        )

    def fetch_directory_apis(
        self, style: DocumentStyle = DocumentStyle.REST
    ) -> list[FetchResult]:
        """Fetch every API listed in the directory, in directory order.

        A failure to fetch or parse one API is recorded as a
        :class:`FetchFailed` entry and does not stop the others. A failure to
        fetch the directory itself propagates.
        """
        directory = self.get_directory()
        results: list[FetchResult] = []
        for item in directory.items:
            try:
                discovery = self.get_discovery(item.name, item.version, style)
            except DiscoverkitError as exc:
                logger.warning("Skipping %s %s: %s", item.name, item.version, exc)
                results.append(FetchFailed(item.name, item.version, str(exc)))
            else:
                results.append(FetchSucceeded(item.name, item.version, discovery))
        return results

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _get_parsed(self, url: str, parse: Callable[[dict[str, Any]], _T]) -> _T:
        """GET *url* and run *parse* on the JSON body.

        The raw body is cached only once *parse* accepts it. A cached body
        that no longer parses is dropped and fetched again.
        """
        if self._cache is not None:
            cached = self._cache.get(url)
            if cached is not None:
                try:
                    return parse(cached)
                except DocumentParseError:
                    logger.debug("Discarding unparseable cache entry for %s", url)
                    self._cache.invalidate(url)

        if self._client is None:
            raise RuntimeError("DiscoveryClient must be used as a context manager")

        logger.debug("GET %s", url)
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"HTTP {exc.response.status_code} fetching {url}"
            ) from exc
        except httpx.RequestError as exc:
            raise FetchError(f"Failed to fetch {url}: {exc}") from exc

        document = parse_content(response.text, hint="json")
        result = parse(document)
        if self._cache is not None:
            self._cache.set(url, document)
        return result
