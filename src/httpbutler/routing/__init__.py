"""Route-template parsing, parameter-bag accessors, and URI resolution.

Modules:
    parser: :func:`parse_template` -- single-pass template scanner.
    cache: :class:`TemplateCache` -- populate-once cache of parsed templates.
    accessors: :class:`AccessorCache` -- per-shape readers for parameter bags.
    resolver: :class:`RouteResolver` -- substitutes a bag into a template.

Example::

    from httpbutler.routing import RouteResolver

    resolver = RouteResolver()
    resolver.resolve("/users/{userId}/photos", {"userId": "A01"})
    # '/users/A01/photos'
"""

from httpbutler.routing.accessors import (
    AccessorCache,
    AccessorDescriptor,
    ParameterAccessors,
    build_accessors,
    shape_key,
)
from httpbutler.routing.cache import TemplateCache
from httpbutler.routing.parser import parse_template
from httpbutler.routing.resolver import (
    RouteResolver,
    get_resolver,
    reset_resolver,
    resolve,
    resolve_url,
    set_resolver,
)

__all__ = [
    "AccessorCache",
    "AccessorDescriptor",
    "ParameterAccessors",
    "RouteResolver",
    "TemplateCache",
    "build_accessors",
    "get_resolver",
    "parse_template",
    "reset_resolver",
    "resolve",
    "resolve_url",
    "set_resolver",
    "shape_key",
]
