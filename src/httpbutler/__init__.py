"""httpbutler -- route/URI resolution for declarative HTTP clients.

Given a route template with ``{name}`` placeholders and a bag of parameters,
httpbutler builds the request URI: path placeholders are substituted in
place, placeholders after the template's ``?`` become ``name=value`` pairs,
and parameters no placeholder consumed are appended as extra query
parameters. Parsed templates and per-shape parameter accessors are cached
so repeated calls do no re-parsing.

Typical use::

    import httpbutler

    httpbutler.resolve("/users/{userId}/photos/{photoId}",
                       {"userId": "A01", "photoId": "7d36b9155"})
    # '/users/A01/photos/7d36b9155'

Modules:
    routing: Template parser, caches, and :class:`RouteResolver`.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr diagnostics with Rich support.
    app: The ``httpbutler`` developer CLI.
"""

__version__ = "0.1.0"

from httpbutler.exceptions import (  # noqa: E402
    HttpButlerError,
    MalformedRouteTemplate,
    RouteParameterMissing,
    RouteResolveError,
)
from httpbutler.models import (  # noqa: E402
    Placeholder,
    PlaceholderKind,
    ResolverConfig,
    TemplateStructure,
)
from httpbutler.routing import RouteResolver, parse_template, resolve, resolve_url  # noqa: E402

__all__ = [
    "HttpButlerError",
    "MalformedRouteTemplate",
    "Placeholder",
    "PlaceholderKind",
    "ResolverConfig",
    "RouteParameterMissing",
    "RouteResolveError",
    "RouteResolver",
    "TemplateStructure",
    "__version__",
    "parse_template",
    "resolve",
    "resolve_url",
]
