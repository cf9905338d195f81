"""Built-in CLI sub-commands for discoverkit.

* :mod:`~discoverkit.commands.inspect` -- examine the metadata, methods,
  schemas, scopes and individual types of a discovery document.

The ``directory`` command lives on the root app in :mod:`discoverkit.app`.
"""
