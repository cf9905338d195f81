"""Typer application and CLI entry point for discoverkit.

This module builds the root Typer application, registers the ``inspect``
sub-command group and the ``directory`` command, and initialises output and
logging from the global flags.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It maps :class:`~discoverkit.exceptions.DiscoverkitError`
to the error's exit code.

See Also:
    :mod:`discoverkit.config`: Configuration resolution.
    :mod:`discoverkit.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any, Optional

import typer

from discoverkit import __version__
from discoverkit.commands.inspect import inspect_app
from discoverkit.exceptions import DiscoverkitError
from discoverkit.parser.documents import DocumentStyle

app = typer.Typer(
    name="discoverkit",
    help="Explore discovery documents: methods, schemas, scopes and types.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)
app.add_typer(inspect_app, name="inspect", help="Inspect a discovery document.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"discoverkit {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool) -> None:
    """Configure logging for the ``discoverkit`` logger tree.

    Warnings are shown by default; ``--verbose`` lowers the level to DEBUG.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(format="%(name)s - %(levelname)s - %(message)s")
    logging.getLogger("discoverkit").setLevel(level)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~discoverkit.output.OutputManager` and sets
    up logging from the CLI flags.
    """
    from discoverkit.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    )
    setup_logging(verbose)


@app.command("directory")
def directory_command(
    fetch: bool = typer.Option(
        False, "--fetch", help="Fetch every listed API and report per-API results."
    ),
    style: DocumentStyle = typer.Option(
        DocumentStyle.REST, "--style", help="Document style to fetch with --fetch."
    ),
    discovery_url: Optional[str] = typer.Option(
        None, "--discovery-url", help="Base URL of the discovery service."
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the document cache."),
) -> None:
    """List the APIs published by the discovery service.

    With ``--fetch``, every listed API's document is fetched and parsed; APIs
    that fail are reported with their error instead of being skipped.

    Example::

        discoverkit directory
        discoverkit --json directory --fetch
    """
    from discoverkit.cache import DocumentCache
    from discoverkit.config import get_cache_dir, resolve_config
    from discoverkit.directory import DiscoveryClient, FetchSucceeded
    from discoverkit.output import error, info, print_table

    try:
        config = resolve_config(cli_discovery_url=discovery_url, cli_no_cache=no_cache)
        cache = DocumentCache(get_cache_dir(), config.cache)
        try:
            with DiscoveryClient(config, cache=cache) as client:
                if not fetch:
                    directory = client.get_directory()
                    rows = [
                        [
                            item.name,
                            item.version,
                            item.title or "-",
                            "yes" if item.preferred else "",
                        ]
                        for item in directory.items
                    ]
                    print_table(
                        ["Name", "Version", "Title", "Preferred"],
                        rows,
                        title=f"Directory ({len(rows)})",
                    )
                    return

                results = client.fetch_directory_apis(style)
        finally:
            cache.close()
    except DiscoverkitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    rows = []
    failed = 0
    for result in results:
        if isinstance(result, FetchSucceeded):
            rows.append([result.name, result.version, "ok", result.discovery.title or "-"])
        else:
            failed += 1
            rows.append([result.name, result.version, "failed", result.error])
    print_table(["Name", "Version", "Status", "Detail"], rows, title="Fetch results")
    if failed:
        info(f"{failed} of {len(rows)} APIs could not be fetched.")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``discoverkit`` console script.

    Unhandled :class:`~discoverkit.exceptions.DiscoverkitError` instances
    cause a clean exit with the error's ``exit_code``.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except DiscoverkitError as exc:
        from discoverkit.output import error

        error(str(exc))
        sys.exit(exc.exit_code)
