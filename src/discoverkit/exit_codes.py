"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~discoverkit.exceptions.DiscoverkitError` subclass.
Shell wrappers can inspect the exit code to tell a malformed document from
a network failure without parsing stderr.

Example::

    $ discoverkit inspect methods broken.json
    $ echo $?
    8   # EXIT_SCHEMA_ERROR -- a schema node has no usable type
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_FETCH_ERROR = 6
"""A discovery or directory document could not be fetched."""

EXIT_DOCUMENT_PARSE_ERROR = 7
"""The discovery document could not be parsed into a known shape."""

EXIT_SCHEMA_ERROR = 8
"""A schema node could not be resolved to a type."""

EXIT_WRONG_KIND = 9
"""A kind-specific view was requested from a type of another kind."""
