"""Single-pass parser that turns a route template into a :class:`TemplateStructure`.

A route template is a URI pattern such as ``/users/{userId}/photos?{size}``.
The parser walks it once, left to right, with a two-state machine:

* **Outside** a placeholder -- the first ``?`` is recorded as the query
  marker; a ``{`` switches to the inside state and remembers its offset.
* **Inside** a placeholder -- characters accumulate into the name until
  ``}`` closes it. A ``?`` here is part of the name, never a query marker.

Placeholders that open after the query marker are classified as
:attr:`~httpbutler.models.PlaceholderKind.QUERY`; all others are
:attr:`~httpbutler.models.PlaceholderKind.PATH`.

The parser never raises. A ``{`` that is still open at the end of the string
is reported through :attr:`TemplateStructure.unterminated_offset` and the
placeholders found before it are returned; the resolver decides what to do
with it (see :class:`~httpbutler.models.ResolverConfig`).
"""

from __future__ import annotations

from httpbutler.models import Placeholder, PlaceholderKind, TemplateStructure

_OPEN = "{"
_CLOSE = "}"
_QUERY_MARKER = "?"


def parse_template(template: str) -> TemplateStructure:
    """Parse *template* into its ordered placeholder structure.

    Args:
        template: The raw route template.

    Returns:
        A frozen :class:`~httpbutler.models.TemplateStructure`.

    Example::

        >>> s = parse_template("/users/{id}?{expand}")
        >>> [(p.name, p.kind.value, p.template_offset) for p in s.placeholders]
        [('id', 'path', 7), ('expand', 'query', 12)]
        >>> s.query_marker_offset
        11
    """
    placeholders: list[Placeholder] = []
    query_marker_offset = -1
    inside = False
    start = 0
    name_chars: list[str] = []

    for index, char in enumerate(template):
        if not inside:
            if char == _QUERY_MARKER and query_marker_offset < 0:
                query_marker_offset = index
            elif char == _OPEN:
                inside = True
                start = index
                name_chars = []
            continue

        if char == _CLOSE:
            inside = False
            if query_marker_offset >= 0 and start > query_marker_offset:
                kind = PlaceholderKind.QUERY
            else:
                kind = PlaceholderKind.PATH
            placeholders.append(
                Placeholder(name="".join(name_chars), kind=kind, template_offset=start)
            )
            continue

        name_chars.append(char)

    return TemplateStructure(
        template=template,
        query_marker_offset=query_marker_offset,
        placeholders=tuple(placeholders),
        unterminated_offset=start if inside else -1,
    )
