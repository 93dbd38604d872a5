"""Exception hierarchy for httpbutler.

All exceptions inherit from :class:`HttpButlerError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`httpbutler.exit_codes`.
Library callers catch :class:`RouteResolveError` (or one of its subclasses);
the CLI entry point in :func:`httpbutler.app.main` catches ``HttpButlerError``
and exits with the matching code.

Subclass hierarchy::

    HttpButlerError (exit 1)
    +-- InvalidUsageError          (exit 2)
    +-- RouteResolveError          (exit 3)
    |   +-- RouteParameterMissing  (exit 3)
    |   +-- MalformedRouteTemplate (exit 4)
    +-- ConfigError                (exit 1)

Resolution errors are deterministic functions of the template and the
parameter-bag shape; retrying them always fails the same way.
"""

from __future__ import annotations

from httpbutler.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MALFORMED_TEMPLATE,
    EXIT_ROUTE_PARAMETER_MISSING,
)


class HttpButlerError(Exception):
    """Base exception for all httpbutler errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(HttpButlerError):
    """Raised for invalid CLI arguments (e.g. a ``-p`` value without ``=``)."""

    exit_code = EXIT_INVALID_USAGE


class RouteResolveError(HttpButlerError):
    """Base class for errors raised while resolving a route template."""

    exit_code = EXIT_ROUTE_PARAMETER_MISSING

    _default_message = "Error resolving HTTP route with the provided parameters."

    def __init__(self, message: str | None = None, exit_code: int | None = None):
        super().__init__(message or self._default_message, exit_code)


class RouteParameterMissing(RouteResolveError):
    """A placeholder in the template has no matching key in the parameter bag.

    Signals a mismatch between the template and the shape of the parameter
    bag, so it is surfaced to the caller and never retried.

    Attributes:
        name: The placeholder name as written in the template.
        template: The raw route template being resolved.
    """

    exit_code = EXIT_ROUTE_PARAMETER_MISSING

    def __init__(self, name: str, template: str):
        self.name = name
        self.template = template
        super().__init__(
            f"Route parameter '{name}' is missing for template '{template}'"
        )


class MalformedRouteTemplate(RouteResolveError):
    """The template has a ``{`` that is never closed.

    Only raised when ``strict_templates`` is enabled; by default the dangling
    text is copied into the output as a literal.

    Attributes:
        template: The raw route template.
        offset: Index of the unterminated ``{``.
    """

    exit_code = EXIT_MALFORMED_TEMPLATE

    def __init__(self, template: str, offset: int):
        self.template = template
        self.offset = offset
        super().__init__(
            f"Unterminated placeholder at offset {offset} in template '{template}'"
        )


class ConfigError(HttpButlerError):
    """Raised for configuration problems (invalid JSON, bad env values)."""

    exit_code = EXIT_GENERIC_FAILURE
