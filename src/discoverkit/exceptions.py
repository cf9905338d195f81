"""Exception hierarchy for discoverkit.

All exceptions inherit from :class:`DiscoverkitError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`discoverkit.exit_codes`.
The top-level error handler in :func:`discoverkit.app.main` catches
``DiscoverkitError`` and exits with the appropriate code.

Subclass hierarchy::

    DiscoverkitError (exit 1)
    +-- InvalidUsageError              (exit 2)
    +-- FetchError                     (exit 6)
    +-- DocumentParseError             (exit 7)
    |   +-- DocumentStructureError     (exit 7)
    +-- SchemaError                    (exit 8)
    |   +-- SchemaTypeError
    |   +-- SchemaValueError
    |   +-- UnknownSchemaReferenceError
    |   +-- SchemaReferenceCycleError
    +-- WrongTypeKindError             (exit 9)
    +-- ConfigError                    (exit 1)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from discoverkit.exit_codes import (
    EXIT_DOCUMENT_PARSE_ERROR,
    EXIT_FETCH_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SCHEMA_ERROR,
    EXIT_WRONG_KIND,
)

if TYPE_CHECKING:
    from discoverkit.schema.kinds import TypeKind


class DiscoverkitError(Exception):
    """Base exception for all discoverkit errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`discoverkit.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(DiscoverkitError):
    """Raised for invalid CLI arguments (e.g. an unknown schema name)."""

    exit_code = EXIT_INVALID_USAGE


class FetchError(DiscoverkitError):
    """Raised when a document cannot be fetched (HTTP error, timeout, DNS failure)."""

    exit_code = EXIT_FETCH_ERROR


class DocumentParseError(DiscoverkitError):
    """Raised when raw input cannot be turned into a discovery document."""

    exit_code = EXIT_DOCUMENT_PARSE_ERROR


class DocumentStructureError(DocumentParseError):
    """Raised when a parsed document is internally inconsistent.

    For example, a method whose ``parameterOrder`` names a parameter that the
    method never declares.
    """


class SchemaError(DiscoverkitError):
    """Base class for failures while resolving a schema node to a type."""

    exit_code = EXIT_SCHEMA_ERROR


class SchemaTypeError(SchemaError):
    """Raised when a dereferenced node carries no resolvable type identifier."""


class SchemaValueError(SchemaError):
    """Raised when a textual ``minimum``/``maximum``/``default`` cannot be parsed."""


class UnknownSchemaReferenceError(SchemaError):
    """Raised when a ``$ref`` names a schema absent from the document.

    Args:
        name: The referenced schema name.
    """

    def __init__(self, name: str):
        super().__init__(f"unknown schema reference: {name}")
        self.name = name


class SchemaReferenceCycleError(SchemaError):
    """Raised when a chain of ``$ref`` pointers leads back to itself.

    Args:
        chain: The reference names in the order they were followed, ending
            with the name that closed the cycle.
    """

    def __init__(self, chain: list[str]):
        super().__init__(f"schema reference cycle: {' -> '.join(chain)}")
        self.chain = chain


class WrongTypeKindError(DiscoverkitError):
    """Raised when a kind-specific view is requested from a type of another kind.

    This is a programming error on the caller's side: check
    :attr:`~discoverkit.schema.resolved.ResolvedType.kind` first, or let the
    exception propagate.

    Args:
        expected: The kind the caller asked for.
        actual: The kind the type really has.
    """

    exit_code = EXIT_WRONG_KIND

    def __init__(self, expected: TypeKind, actual: TypeKind):
        super().__init__(
            f"expected a {expected.value} type, but this type is {actual.value}"
        )
        self.expected = expected
        self.actual = actual


class ConfigError(DiscoverkitError):
    """Raised for configuration problems (unreadable or invalid config file, bad env values)."""

    exit_code = EXIT_GENERIC_FAILURE
