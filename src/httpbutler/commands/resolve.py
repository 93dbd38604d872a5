"""Resolve command -- substitute ``-p name=value`` pairs into a route template."""

from __future__ import annotations

from typing import Optional

import typer

from httpbutler.exceptions import HttpButlerError, InvalidUsageError
from httpbutler.output import OutputFormat, error, format_response, get_output, print_data


def parse_param_pairs(pairs: list[str]) -> dict[str, str]:
    """Turn ``["name=value", ...]`` into an ordered dict.

    Only the first ``=`` splits, so values may contain ``=``. A repeated
    name keeps its first position and takes the last value.

    Raises:
        InvalidUsageError: If an entry has no ``=`` or an empty name.
    """
    params: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise InvalidUsageError(f"Expected name=value, got: {pair!r}")
        params[name] = value
    return params


def resolve_command(
    template: str = typer.Argument(help="Route template, e.g. '/users/{userId}'."),
    param: list[str] = typer.Option(
        [], "--param", "-p", help="Parameter as name=value. Repeatable; order is kept."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", "-b", help="Join the resolved route onto this base URL."
    ),
) -> None:
    """Resolve a route template and print the URI.

    The parameters always form a bag (empty when no ``-p`` is given), so a
    placeholder without a value is reported rather than left in place.

    Example::

        httpbutler resolve "/users/{userId}/photos" -p userId=A01 -p size=2
        # /users/A01/photos?size=2
    """
    from httpbutler.routing import get_resolver

    try:
        params = parse_param_pairs(param)
        resolver = get_resolver()
        if base_url:
            uri = str(resolver.resolve_url(template, params, base_url=base_url))
        else:
            uri = resolver.resolve(template, params)
    except HttpButlerError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if get_output().format == OutputFormat.JSON:
        format_response({"template": template, "params": params, "uri": uri})
    else:
        print_data(uri)
