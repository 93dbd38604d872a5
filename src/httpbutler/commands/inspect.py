"""Inspect command -- show how a route template parses.

Prints one row per placeholder (name, kind, offset) followed by the query
marker position. A template with an unterminated ``{`` is flagged with a
warning, or rejected in ``--strict`` mode.
"""

from __future__ import annotations

import typer

from httpbutler.exceptions import MalformedRouteTemplate
from httpbutler.output import (
    OutputFormat,
    error,
    format_response,
    get_output,
    info,
    print_table,
    warning,
)


def inspect_command(
    template: str = typer.Argument(help="Route template to parse."),
) -> None:
    """Show the placeholders and query marker of a route template.

    Example::

        httpbutler inspect "/users/{userId}?{expand}"
        httpbutler --json inspect "/users/{userId}"
    """
    from httpbutler.routing import get_resolver

    resolver = get_resolver()
    structure = resolver.inspect(template)

    if structure.is_malformed:
        exc = MalformedRouteTemplate(template, structure.unterminated_offset)
        if resolver.config.strict_templates:
            error(str(exc))
            raise typer.Exit(code=exc.exit_code)
        warning(f"{exc}; the text will be copied verbatim")

    if get_output().format == OutputFormat.JSON:
        format_response(structure.model_dump(mode="json"))
        return

    rows = [
        [p.name, p.kind.value, str(p.template_offset)]
        for p in structure.placeholders
    ]
    print_table(["Name", "Kind", "Offset"], rows, title=template)
    if structure.has_query_marker:
        info(f"Query marker at offset {structure.query_marker_offset}")
    else:
        info("No query marker")
