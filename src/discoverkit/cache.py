"""Disk-based caching of fetched discovery documents.

Uses :mod:`diskcache` to persist raw document dicts on the filesystem with a
configurable time-to-live (TTL). Discovery documents change rarely and can be
large, so :class:`~discoverkit.directory.DiscoveryClient` consults this cache
before going to the network.

Cache keys are SHA-256 hashes of the document URL.

See Also:
    :class:`~discoverkit.models.CacheConfig` -- the Pydantic model that
    controls ``enabled`` and ``ttl_seconds``.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Any, Optional

import diskcache

from discoverkit.models import CacheConfig

logger = logging.getLogger(__name__)


class DocumentCache:
    """Disk-backed cache for raw discovery and directory documents.

    Args:
        cache_dir: Root directory for the cache. A ``documents/``
            subdirectory is created inside it.
        config: Cache configuration (``enabled`` flag and ``ttl_seconds``).

    Example::

        cache = DocumentCache("/tmp/discoverkit", CacheConfig(ttl_seconds=600))
        cache.set("https://example.com/discovery/v1/apis", {"items": []})
        hit = cache.get("https://example.com/discovery/v1/apis")
    """

    def __init__(self, cache_dir: str | Path, config: CacheConfig) -> None:
        self._config = config
        self._cache: Optional[diskcache.Cache] = None
        self._cache_dir = Path(cache_dir)
        if config.enabled:
            self._cache = diskcache.Cache(str(self._cache_dir / "documents"))

    @property
    def enabled(self) -> bool:
        return self._cache is not None

    def get(self, url: str) -> Optional[dict[str, Any]]:
        """Return the cached document for *url*, or ``None`` on a miss or when disabled."""
        if self._cache is None:
            return None
        document = self._cache.get(self._make_key(url))
        if document is not None:
            logger.debug("Cache hit for %s", url)
        return document

    def set(self, url: str, document: dict[str, Any]) -> None:
        """Store *document* under *url*; a no-op when caching is disabled."""
        if self._cache is None:
            return
        self._cache.set(self._make_key(url), document, expire=self._config.ttl_seconds)

    def invalidate(self, url: str) -> None:
        """Remove the entry for *url*, if any."""
        if self._cache is None:
            return
        self._cache.delete(self._make_key(url))

    def clear(self) -> None:
        """Remove all entries from the cache."""
        if self._cache is not None:
            self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Return ``enabled`` plus, when enabled, ``size``, ``directory`` and ``ttl_seconds``."""
        if self._cache is None:
            return {"enabled": False}
        return {
            "enabled": True,
            "size": len(self._cache),
            "directory": str(self._cache_dir / "documents"),
            "ttl_seconds": self._config.ttl_seconds,
        }

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        if self._cache is not None:
            self._cache.close()

    def _make_key(self, url: str) -> str:
        return hashlib.sha256(url.encode()).hexdigest()
