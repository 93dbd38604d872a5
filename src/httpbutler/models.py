"""Canonical Pydantic models shared across all httpbutler modules.

This is the single source of truth for data shapes in the project. The models
fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory
or the project-local ``httpbutler.json``:
    :class:`ResolverConfig`.

**Parser output models** -- produced by the template parser and consumed by
the resolver:
    :class:`PlaceholderKind`, :class:`Placeholder`, and
    :class:`TemplateStructure`.

Parser output models are frozen: a structure is cached once per template and
shared by every caller, so nothing may mutate it after parsing.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


# --- Config ---


class ResolverConfig(BaseModel):
    """Behaviour switches for :class:`~httpbutler.routing.RouteResolver`.

    Loaded and merged by :func:`~httpbutler.config.resolve_config`. Every
    field has a default so an empty config file is valid.

    Example::

        ResolverConfig(strict_templates=True)
    """

    model_config = ConfigDict(extra="forbid")

    strict_templates: bool = Field(
        default=False,
        description="Raise MalformedRouteTemplate on an unterminated '{' "
        "instead of copying the dangling text verbatim",
    )
    append_unconsumed: bool = Field(
        default=True,
        description="Append parameters not consumed by a placeholder as "
        "extra query parameters",
    )
    lowercase_booleans: bool = Field(
        default=True,
        description="Render booleans as 'true'/'false' instead of 'True'/'False'",
    )


# --- Parser Output Models ---


class PlaceholderKind(str, enum.Enum):
    """Where a placeholder sits relative to the template's query marker."""

    PATH = "path"
    QUERY = "query"


class Placeholder(BaseModel):
    """A single ``{name}`` placeholder found in a route template.

    ``template_offset`` is the index of the opening ``{`` in the raw
    template; the resolver slices the literal text around it using
    :attr:`end_offset`.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: PlaceholderKind
    template_offset: int

    @property
    def end_offset(self) -> int:
        """Index just past the closing ``}``."""
        return self.template_offset + len(self.name) + 2


class TemplateStructure(BaseModel):
    """Ordered structural description of a parsed route template.

    Placeholders are stored left to right; this order drives the resolver's
    single substitution pass.

    See Also:
        :func:`~httpbutler.routing.parser.parse_template`: Produces this model.
    """

    model_config = ConfigDict(frozen=True)

    template: str
    query_marker_offset: int = -1
    placeholders: tuple[Placeholder, ...] = ()
    unterminated_offset: int = Field(
        default=-1,
        description="Index of a '{' that is never closed, or -1",
    )

    @property
    def has_query_marker(self) -> bool:
        return self.query_marker_offset >= 0

    @property
    def is_malformed(self) -> bool:
        return self.unterminated_offset >= 0

    @property
    def names(self) -> list[str]:
        """Placeholder names in template order."""
        return [p.name for p in self.placeholders]

    @property
    def path_placeholders(self) -> list[Placeholder]:
        return [p for p in self.placeholders if p.kind == PlaceholderKind.PATH]

    @property
    def query_placeholders(self) -> list[Placeholder]:
        return [p for p in self.placeholders if p.kind == PlaceholderKind.QUERY]
