"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles the persistent configuration for discoverkit:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.discoverkit/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_cache_dir`.
* **Config file** -- A single :class:`~discoverkit.models.DiscoverkitConfig`
  JSON file storing the discovery service URL, request settings and cache
  settings.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables and the config file into the effective settings.

Writes use a temp-file-then-rename strategy (:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import logging
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from discoverkit.exceptions import ConfigError
from discoverkit.models import DiscoverkitConfig

logger = logging.getLogger(__name__)

_APP_NAME = "discoverkit"
_CONFIG_FILENAME = "config.json"

ENV_DISCOVERY_URL = "DISCOVERKIT_DISCOVERY_URL"
ENV_TIMEOUT = "DISCOVERKIT_TIMEOUT"
ENV_NO_CACHE = "DISCOVERKIT_NO_CACHE"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/discoverkit/`` (default ``~/.config/discoverkit/``).
    On macOS/Windows: ``~/.discoverkit/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_dir() -> Path:
    """Return the cache directory used for fetched documents, creating it if necessary.

    On Linux/BSD: ``$XDG_CACHE_HOME/discoverkit/`` (default ``~/.cache/discoverkit/``).
    On macOS/Windows: ``~/.discoverkit/cache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Config file ---


def config_path() -> Path:
    """Path to the config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_config() -> DiscoverkitConfig:
    """Load the configuration file from the config directory.

    Returns:
        The deserialised :class:`~discoverkit.models.DiscoverkitConfig`, or a
        default instance when the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = config_path()
    if not path.is_file():
        return DiscoverkitConfig()
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        return DiscoverkitConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_config(config: DiscoverkitConfig) -> None:
    """Persist the configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def resolve_config(
    cli_discovery_url: Optional[str] = None,
    cli_timeout: Optional[float] = None,
    cli_no_cache: bool = False,
) -> DiscoverkitConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``cli_discovery_url``, ``cli_timeout``, ``cli_no_cache``)
        2. Environment variables (``DISCOVERKIT_DISCOVERY_URL``,
           ``DISCOVERKIT_TIMEOUT``, ``DISCOVERKIT_NO_CACHE``)
        3. User config (``~/.config/discoverkit/config.json``)
        4. Defaults

    Returns:
        A new :class:`~discoverkit.models.DiscoverkitConfig`.

    Raises:
        ConfigError: If the config file is invalid or ``DISCOVERKIT_TIMEOUT``
            is not a number.
    """
    config = load_config()
    discovery_url = config.discovery_url
    timeout = config.request.timeout
    cache_enabled = config.cache.enabled

    env_url = os.environ.get(ENV_DISCOVERY_URL)
    if env_url:
        discovery_url = env_url
    env_timeout = os.environ.get(ENV_TIMEOUT)
    if env_timeout:
        try:
            timeout = float(env_timeout)
        except ValueError as exc:
            raise ConfigError(
                f"{ENV_TIMEOUT} must be a number of seconds, got {env_timeout!r}"
            ) from exc
    if os.environ.get(ENV_NO_CACHE):
        cache_enabled = False

    if cli_discovery_url is not None:
        discovery_url = cli_discovery_url
    if cli_timeout is not None:
        timeout = cli_timeout
    if cli_no_cache:
        cache_enabled = False

    logger.debug(
        "Resolved config: discovery_url=%s timeout=%s cache=%s",
        discovery_url,
        timeout,
        cache_enabled,
    )
    return config.model_copy(
        update={
            "discovery_url": discovery_url,
            "request": config.request.model_copy(update={"timeout": timeout}),
            "cache": config.cache.model_copy(update={"enabled": cache_enabled}),
        }
    )
