"""Route resolution: substitute a parameter bag into a route template.

:class:`RouteResolver` is the one operation the rest of a client toolkit
calls. It takes a template such as ``/users/{userId}/photos?{size}`` and a
parameter bag, and produces the URI string for the request::

    >>> resolver = RouteResolver()
    >>> resolver.resolve("/users/{userId}/photos?{size}", {"userId": "A 01", "size": 2, "page": 3})
    '/users/A%2001/photos?size=2&page=3'

Resolution runs in two passes over cached data:

1. **Substitution** -- walks the template's placeholders left to right,
   copying the literal text between them. Path placeholders become the bare
   percent-encoded value; query placeholders (after the template's ``?``)
   become ``name=value``.
2. **Leftovers** -- every bag value no placeholder consumed, and which is not
   ``None``, is appended as an extra query parameter in bag order.

Both the template structure and the bag's accessor list are cached on the
resolver, so a repeated call does no parsing and no introspection.

A process-wide default resolver backs the module-level :func:`resolve` and
:func:`resolve_url` helpers. It is built on first use from
:func:`~httpbutler.config.resolve_config`, so it honours the user and
project config files and the ``HTTPBUTLER_*`` variables; install a
different one with :func:`set_resolver`.
"""

from __future__ import annotations

import datetime as dt
import enum
from typing import Any, Optional
from urllib.parse import quote

import httpx

from httpbutler.exceptions import MalformedRouteTemplate, RouteParameterMissing
from httpbutler.models import PlaceholderKind, ResolverConfig, TemplateStructure
from httpbutler.routing.accessors import AccessorCache, ParameterAccessors
from httpbutler.routing.cache import TemplateCache

_QUERY_SEPARATORS = ("?", "&")


class RouteResolver:
    """Resolve route templates against parameter bags.

    Instances are safe to share between threads: the only mutable state is
    the two populate-once caches.

    Args:
        config: Behaviour switches. Defaults to :class:`ResolverConfig` with
            all defaults.
        template_cache: Cache of parsed templates. A private one is created
            when omitted.
        accessor_cache: Cache of parameter-bag accessors. A private one is
            created when omitted.
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        template_cache: Optional[TemplateCache] = None,
        accessor_cache: Optional[AccessorCache] = None,
    ) -> None:
        self._config = config or ResolverConfig()
        self._templates = template_cache if template_cache is not None else TemplateCache()
        self._accessors = accessor_cache if accessor_cache is not None else AccessorCache()

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @property
    def template_cache(self) -> TemplateCache:
        return self._templates

    @property
    def accessor_cache(self) -> AccessorCache:
        return self._accessors

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def inspect(self, template: str) -> TemplateStructure:
        """Return the cached :class:`TemplateStructure` for *template*."""
        return self._templates.get_or_parse(template)

    def resolve(self, template: str, params: Any = None) -> str:
        """Resolve *template* against *params* into a URI string.

        Args:
            template: Route template with ``{name}`` placeholders and an
                optional ``?`` query marker.
            params: Parameter bag (mapping, Pydantic model, dataclass, named
                tuple or plain object). ``None`` returns *template* as-is
                without touching either cache.

        Returns:
            The resolved URI, absolute or relative as *template* is.

        Raises:
            RouteParameterMissing: A placeholder has no matching bag entry,
                or the matching value is ``None``.
            MalformedRouteTemplate: The template has an unterminated ``{``
                and ``strict_templates`` is enabled.
            TypeError: *params* is not a supported parameter-bag shape.
        """
        if params is None:
            return template

        structure = self._templates.get_or_parse(template)
        if structure.is_malformed and self._config.strict_templates:
            raise MalformedRouteTemplate(template, structure.unterminated_offset)

        accessors = self._accessors.get_or_build(params)

        parts: list[str] = []
        consumed: set[str] = set()
        last_copied = 0
        for placeholder in structure.placeholders:
            parts.append(template[last_copied:placeholder.template_offset])

            accessor = accessors.find(placeholder.name)
            if accessor is None:
                raise RouteParameterMissing(placeholder.name, template)
            value = accessor.read(params)
            if value is None:
                raise RouteParameterMissing(placeholder.name, template)

            escaped = self._escape(value)
            if placeholder.kind == PlaceholderKind.QUERY:
                parts.append(f"{placeholder.name}={escaped}")
            else:
                parts.append(escaped)

            consumed.add(placeholder.name.lower())
            last_copied = placeholder.end_offset

        parts.append(template[last_copied:])
        route = "".join(parts)

        if self._config.append_unconsumed:
            route = self._append_leftovers(route, structure, accessors, params, consumed)
        return route

    def resolve_url(
        self,
        template: str,
        params: Any = None,
        base_url: Optional[str | httpx.URL] = None,
    ) -> httpx.URL:
        """Resolve *template* and return it as an :class:`httpx.URL`.

        Args:
            template: Route template.
            params: Parameter bag, as for :meth:`resolve`.
            base_url: Optional base the resolved route is joined onto (RFC 3986
                reference resolution, so a leading ``/`` replaces the base path).

        Returns:
            The URL, ready to hand to an :class:`httpx.Client`.
        """
        route = self.resolve(template, params)
        if base_url is None:
            return httpx.URL(route)
        return httpx.URL(base_url).join(route)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _append_leftovers(
        self,
        route: str,
        structure: TemplateStructure,
        accessors: ParameterAccessors,
        params: Any,
        consumed: set[str],
    ) -> str:
        pairs: list[str] = []
        for accessor in accessors:
            if accessor.name.lower() in consumed:
                continue
            value = accessor.read(params)
            if value is None:
                continue
            pairs.append(f"{quote(accessor.name, safe='')}={self._escape(value)}")

        if not pairs:
            return route

        if not structure.has_query_marker:
            separator = "?"
        elif route.endswith(_QUERY_SEPARATORS):
            separator = ""
        else:
            separator = "&"
        return route + separator + "&".join(pairs)

    def _escape(self, value: Any) -> str:
        """Stringify *value* and percent-encode it as a URI component.

        ``bytes`` are encoded octet by octet, so they need not be UTF-8.
        """
        if isinstance(value, (bytes, bytearray)):
            return quote(bytes(value), safe="")
        return quote(self._stringify(value), safe="")

    def _stringify(self, value: Any) -> str:
        if isinstance(value, bool):
            if self._config.lowercase_booleans:
                return "true" if value else "false"
            return str(value)
        if isinstance(value, enum.Enum):
            return str(value.value)
        if isinstance(value, (dt.datetime, dt.date, dt.time)):
            return value.isoformat()
        return str(value)


# ------------------------------------------------------------------ #
# Process-wide default resolver
# ------------------------------------------------------------------ #

_resolver: Optional[RouteResolver] = None


def get_resolver() -> RouteResolver:
    """Return the global :class:`RouteResolver`, creating it on first use.

    The first call resolves the configuration layers (user file, project
    file, environment); later changes to them need :func:`reset_resolver`.

    Raises:
        ConfigError: A configuration layer is malformed.
    """
    global _resolver
    if _resolver is None:
        from httpbutler.config import resolve_config

        _resolver = RouteResolver(config=resolve_config())
    return _resolver


def set_resolver(resolver: RouteResolver) -> None:
    """Install *resolver* as the global instance used by :func:`resolve`."""
    global _resolver
    _resolver = resolver


def reset_resolver() -> None:
    """Drop the global resolver (and its caches). Mainly for test isolation."""
    global _resolver
    _resolver = None


def resolve(template: str, params: Any = None) -> str:
    """Resolve *template* with the global resolver. See :meth:`RouteResolver.resolve`."""
    return get_resolver().resolve(template, params)


def resolve_url(
    template: str,
    params: Any = None,
    base_url: Optional[str | httpx.URL] = None,
) -> httpx.URL:
    """Resolve *template* to an :class:`httpx.URL` with the global resolver."""
    return get_resolver().resolve_url(template, params, base_url)
