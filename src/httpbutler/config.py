"""Resolver configuration: where it lives and how the layers combine.

The effective :class:`~httpbutler.models.ResolverConfig` is assembled from,
lowest precedence first:

1. field defaults,
2. the user file ``config.json`` in :func:`get_config_dir`,
3. a project file ``httpbutler.json`` in the working directory,
4. ``HTTPBUTLER_*`` environment variables,
5. explicit overrides (CLI flags, library callers).

Only the user file is ever written, through :func:`save_config`, which
replaces it in one rename so a concurrent reader sees either the old or the
new document.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from httpbutler.exceptions import ConfigError
from httpbutler.models import ResolverConfig

_APP_NAME = "httpbutler"
_USER_FILE = "config.json"
_PROJECT_FILE = "httpbutler.json"

# Environment variable -> ResolverConfig field.
_ENV_OVERRIDES: dict[str, str] = {
    "HTTPBUTLER_STRICT_TEMPLATES": "strict_templates",
    "HTTPBUTLER_APPEND_UNCONSUMED": "append_unconsumed",
    "HTTPBUTLER_LOWERCASE_BOOLEANS": "lowercase_booleans",
}

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


# --- Locations ---


def _is_xdg_platform() -> bool:
    """Linux and the BSDs follow the XDG base-directory layout."""
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _config_dir_path() -> Path:
    if _is_xdg_platform():
        xdg_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
        return Path(xdg_home) / _APP_NAME
    return Path.home() / f".{_APP_NAME}"


def get_config_dir() -> Path:
    """Return (and create) the directory holding the user config file.

    ``$XDG_CONFIG_HOME/httpbutler`` on XDG platforms, falling back to
    ``~/.config/httpbutler``; ``~/.httpbutler`` everywhere else.
    """
    config_dir = _config_dir_path()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def _user_config_path() -> Path:
    # Reading must not create directories; the library reads on first resolve.
    return _config_dir_path() / _USER_FILE


# --- Writing ---


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* via a sibling temp file and ``os.replace``.

    The temp file shares the target's directory so the rename never crosses
    filesystems. It is removed again if anything fails before the rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    handle, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(handle, "w", encoding="utf-8") as stream:
            stream.write(data)
            stream.flush()
            os.fsync(stream.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def save_config(config: ResolverConfig) -> Path:
    """Persist *config* as the user config file and return its path."""
    path = _user_config_path()
    _atomic_write(path, json.dumps(config.model_dump(mode="json"), indent=2) + "\n")
    return path


# --- Reading ---


def _read_json_object(path: Path, label: str) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} at {path}: expected a JSON object")
    return data


def load_user_config() -> dict[str, Any]:
    """Raw user config, or ``{}`` when there is no file yet.

    Raises:
        ConfigError: The file is not a JSON object.
    """
    return _read_json_object(_user_config_path(), "user config")


def load_project_config(directory: Optional[Path] = None) -> dict[str, Any]:
    """Raw ``httpbutler.json`` from *directory* (default: the working directory).

    Raises:
        ConfigError: The file is not a JSON object.
    """
    return _read_json_object((directory or Path.cwd()) / _PROJECT_FILE, "project config")


def coerce_bool(raw: str) -> Optional[bool]:
    """Read ``true/false``, ``1/0``, ``yes/no`` or ``on/off``; ``None`` otherwise."""
    value = raw.strip().lower()
    if value in _TRUE_STRINGS:
        return True
    if value in _FALSE_STRINGS:
        return False
    return None


def _parse_bool(var_name: str, raw: str) -> bool:
    value = coerce_bool(raw)
    if value is not None:
        return value
    raise ConfigError(
        f"Environment variable '{var_name}' must be a boolean "
        f"(true/false, 1/0, yes/no, on/off), got: {raw!r}"
    )


def load_env_overrides() -> dict[str, Any]:
    """Field values taken from ``HTTPBUTLER_*`` variables; blank ones are ignored.

    Raises:
        ConfigError: A variable holds something other than a boolean.
    """
    return {
        field: _parse_bool(var_name, os.environ[var_name])
        for var_name, field in _ENV_OVERRIDES.items()
        if os.environ.get(var_name, "").strip()
    }


# --- Merging ---


def resolve_config(
    overrides: Optional[dict[str, Any]] = None,
    project_dir: Optional[Path] = None,
) -> ResolverConfig:
    """Merge every layer into the effective :class:`ResolverConfig`.

    Args:
        overrides: Highest-precedence values. ``None`` entries mean "not
            given" and leave lower layers in effect.
        project_dir: Where to look for ``httpbutler.json``. Defaults to the
            working directory.

    Raises:
        ConfigError: A layer is malformed or the merged values do not
            validate (unknown keys included).
    """
    merged: dict[str, Any] = {
        **load_user_config(),
        **load_project_config(project_dir),
        **load_env_overrides(),
        **{k: v for k, v in (overrides or {}).items() if v is not None},
    }
    try:
        return ResolverConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid resolver configuration: {exc}") from exc
