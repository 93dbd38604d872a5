"""``httpbutler config`` -- view and edit resolver settings.

``show`` prints the effective configuration after the whole precedence
chain. ``set`` and ``reset`` only touch the user config file; project files
and environment variables still win over it.
"""

from __future__ import annotations

import typer

from httpbutler.exit_codes import EXIT_INVALID_USAGE
from httpbutler.output import error, format_response, info


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Print the configuration the resolver is running with.

    Example::

        httpbutler --json config show
    """
    from httpbutler.config import get_config_dir
    from httpbutler.routing import get_resolver

    info(f"User config lives in {get_config_dir()}")
    format_response(get_resolver().config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Setting name, e.g. 'strict_templates'."),
    value: str = typer.Argument(help="true/false, 1/0, yes/no or on/off."),
) -> None:
    """Store one setting in the user config file.

    Example::

        httpbutler config set strict_templates true
    """
    from pydantic import ValidationError

    from httpbutler.config import coerce_bool, load_user_config, save_config
    from httpbutler.exceptions import ConfigError
    from httpbutler.models import ResolverConfig

    if key not in ResolverConfig.model_fields:
        known = ", ".join(ResolverConfig.model_fields)
        error(f"Unknown config key: {key} (expected one of: {known})")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    flag = coerce_bool(value)
    if flag is None:
        error(f"Expected a boolean for {key}, got: {value}")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    # Other keys in the file are validated too, so a broken file surfaces here.
    try:
        new_config = ResolverConfig.model_validate({**load_user_config(), key: flag})
    except (ConfigError, ValidationError) as exc:
        error(f"Cannot update the user config: {exc}")
        raise typer.Exit(code=ConfigError.exit_code) from None

    path = save_config(new_config)
    info(f"Set {key} = {str(flag).lower()} in {path}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Do not ask for confirmation."),
) -> None:
    """Overwrite the user config file with the defaults."""
    from httpbutler.config import save_config
    from httpbutler.models import ResolverConfig

    if not force and not typer.confirm("Reset the user config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    path = save_config(ResolverConfig())
    info(f"Reset {path} to defaults.")
