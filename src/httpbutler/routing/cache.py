"""In-memory cache of parsed route templates.

Templates in a client are a small set known when the client is written, so
entries are keyed by the exact template string and never invalidated.
Parsing is a pure function of the string: when two threads miss on the same
template at once, both parse, :meth:`dict.setdefault` keeps a single stored
structure, and both return it.

See Also:
    :class:`~httpbutler.routing.accessors.AccessorCache` -- the companion
    cache for parameter-bag shapes.
"""

from __future__ import annotations

from typing import Callable

from httpbutler.models import TemplateStructure
from httpbutler.output import debug
from httpbutler.routing.parser import parse_template


class TemplateCache:
    """Populate-once map of template string to :class:`TemplateStructure`.

    Args:
        parser: Function used to parse a template on a cache miss.
            Defaults to :func:`~httpbutler.routing.parser.parse_template`.
    """

    def __init__(self, parser: Callable[[str], TemplateStructure] = parse_template) -> None:
        self._parser = parser
        self._entries: dict[str, TemplateStructure] = {}

    def get_or_parse(self, template: str) -> TemplateStructure:
        """Return the cached structure for *template*, parsing it on first use."""
        structure = self._entries.get(template)
        if structure is None:
            structure = self._entries.setdefault(template, self._parser(template))
            debug(
                f"Parsed route template {template!r}: "
                f"{len(structure.placeholders)} placeholder(s)"
            )
        return structure

    def __contains__(self, template: object) -> bool:
        return template in self._entries

    def __len__(self) -> int:
        return len(self._entries)
