"""Numeric process exit codes for the ``httpbutler`` developer CLI.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~httpbutler.exceptions.HttpButlerError` subclass.
Shell wrappers and CI scripts can inspect the exit code to tell a missing
route parameter apart from a malformed template without parsing stderr.

Example::

    $ httpbutler resolve "/users/{userId}"
    $ echo $?
    3   # EXIT_ROUTE_PARAMETER_MISSING -- no value supplied for userId
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_ROUTE_PARAMETER_MISSING = 3
"""A template placeholder had no matching parameter."""

EXIT_MALFORMED_TEMPLATE = 4
"""The route template contains an unterminated placeholder (strict mode only)."""
