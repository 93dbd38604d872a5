"""Typer application and entry point for the ``httpbutler`` developer CLI.

The CLI is a diagnostic surface over the resolver: it shows how a route
template parses and what URI a set of parameters produces, using exactly the
configuration the library would pick up.

Commands:
    ``resolve``  -- resolve a template with ``-p name=value`` parameters.
    ``inspect``  -- show a template's placeholders and query marker.
    ``config``   -- show, set, or reset the resolver configuration.
"""

from __future__ import annotations

import sys
from typing import Optional

import typer

from httpbutler import __version__
from httpbutler.commands.config import config_app
from httpbutler.commands.inspect import inspect_command
from httpbutler.commands.resolve import resolve_command
from httpbutler.exit_codes import EXIT_GENERIC_FAILURE
from httpbutler.output import OutputFormat


app = typer.Typer(
    name="httpbutler",
    help="Resolve and inspect HTTP route templates.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("resolve")(resolve_command)
app.command("inspect")(inspect_command)
app.add_typer(config_app, name="config", help="Resolver configuration.")


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"httpbutler {__version__}")
        raise typer.Exit()


def _pick_format(json_output: bool, plain_output: bool) -> OutputFormat:
    if json_output:
        return OutputFormat.JSON
    if plain_output:
        return OutputFormat.PLAIN
    return OutputFormat.AUTO


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True,
        help="Print the version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit data as JSON."),
    plain_output: bool = typer.Option(False, "--plain", help="Emit data as tab-separated text."),
    no_color: bool = typer.Option(False, "--no-color", help="Never use colour."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Hide informational messages."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Trace template and accessor cache misses."),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--lenient",
        help="Fail on unterminated placeholders instead of copying them verbatim.",
    ),
) -> None:
    """Set up output and the resolver before any sub-command runs.

    ``--strict``/``--lenient`` sit on top of the config precedence chain;
    leaving both out keeps whatever the files and environment say.

    Raises:
        typer.Exit: With the error's exit code if the configuration is invalid.
    """
    from httpbutler.config import resolve_config
    from httpbutler.exceptions import ConfigError
    from httpbutler.output import OutputManager, error, set_output
    from httpbutler.routing import RouteResolver, set_resolver

    set_output(
        OutputManager(
            format=_pick_format(json_output, plain_output),
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )

    try:
        config = resolve_config(overrides={"strict_templates": strict})
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    set_resolver(RouteResolver(config=config))


def main() -> None:
    """Console-script entry point.

    An :class:`~httpbutler.exceptions.HttpButlerError` that escapes a command
    is printed and turned into its ``exit_code``; any other exception exits
    with :data:`~httpbutler.exit_codes.EXIT_GENERIC_FAILURE`.
    """
    from httpbutler.exceptions import HttpButlerError
    from httpbutler.output import error

    try:
        app()
    except KeyboardInterrupt:
        sys.stderr.write("\nInterrupted.\n")
        sys.exit(130)
    except HttpButlerError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)


if __name__ == "__main__":
    main()
