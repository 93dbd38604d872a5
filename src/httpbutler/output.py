"""Terminal output for the CLI and the resolver's diagnostics.

Resolved URIs, placeholder tables and config dumps are *data* and go to
stdout. Everything else is a *diagnostic* and goes to stderr, so
``httpbutler resolve ... | xargs curl`` only ever sees the URI.

Diagnostics come in four levels:

* ``debug`` -- cache-miss traces, shown only with ``--verbose``.
* ``info`` -- progress notes, hidden by ``--quiet``.
* ``warning`` and ``error`` -- always shown.

Colour is dropped for ``--no-color``, ``NO_COLOR`` (any value) and
``TERM=dumb``; without colour, diagnostics are written as bare prefixed
lines instead of going through Rich.

The CLI installs an :class:`OutputManager` per invocation with
:func:`set_output`. Library code (the caches in :mod:`httpbutler.routing`)
only calls the module-level helpers, which fall back to a default manager.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """How data written to stdout is rendered."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# level -> (prefix without colour, Rich markup with colour)
_LEVELS: dict[str, tuple[str, str]] = {
    "debug": ("[debug] ", "[dim]\\[debug] {}[/dim]"),
    "info": ("", "{}"),
    "warning": ("Warning: ", "[yellow]Warning:[/yellow] {}"),
    "error": ("Error: ", "[bold red]Error:[/bold red] {}"),
}


class OutputManager:
    """Output preferences and consoles for one CLI invocation.

    Args:
        format: Rendering for stdout data. ``AUTO`` picks ``RICH`` on an
            interactive terminal with colour enabled and ``PLAIN`` otherwise.
        no_color: Force colour off.
        quiet: Hide ``info`` diagnostics.
        verbose: Show ``debug`` diagnostics.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._format = _resolve_format(OutputFormat(format), self._no_color)

        self._console = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=self._format is OutputFormat.RICH,
        )
        self._err_console = Console(
            file=sys.stderr,
            stderr=True,
            no_color=self._no_color,
            highlight=False,
        )

    @property
    def format(self) -> OutputFormat:
        return self._format

    # ------------------------------------------------------------------ #
    # stdout
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        """Write *text* and a newline to stdout, unformatted."""
        sys.stdout.write(f"{text}\n")
        sys.stdout.flush()

    def format_response(self, data: Any) -> None:
        """Render a dict, list or scalar to stdout in the active format."""
        if self._format is OutputFormat.JSON:
            self.print_data(_to_json(data))
        elif self._format is OutputFormat.RICH:
            self._render_rich(data)
        else:
            for line in _plain_lines(data):
                self.print_data(line)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print *rows* under *headers*.

        JSON gives one object per row keyed by header. Plain gives
        tab-separated lines, header first. Rich draws a table and is the
        only format that shows *title*.
        """
        if self._format is OutputFormat.JSON:
            self.print_data(_to_json([dict(zip(headers, row)) for row in rows]))
            return
        if self._format is OutputFormat.PLAIN:
            for cells in [headers, *rows]:
                self.print_data("\t".join(cells))
            return

        # Templates and names are user text; keep Rich from reading '[' as markup.
        table = Table(
            *headers,
            title=escape(title) if title else None,
            header_style="bold cyan",
        )
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        self._console.print(table)

    def _render_rich(self, data: Any) -> None:
        if isinstance(data, (dict, list)):
            self._console.print(Syntax(_to_json(data), "json", theme="monokai", word_wrap=True))
        else:
            self._console.print(str(data), markup=False, highlight=False)

    # ------------------------------------------------------------------ #
    # stderr
    # ------------------------------------------------------------------ #

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnostic("debug", message)

    def info(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic("info", message)

    def warning(self, message: str) -> None:
        self._diagnostic("warning", message)

    def error(self, message: str) -> None:
        self._diagnostic("error", message)

    def _diagnostic(self, level: str, message: str) -> None:
        prefix, markup = _LEVELS[level]
        if self._no_color:
            sys.stderr.write(f"{prefix}{message}\n")
            sys.stderr.flush()
        else:
            self._err_console.print(markup.format(escape(message)))


# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #


def _should_disable_color() -> bool:
    """``NO_COLOR`` (any value, see no-color.org) or ``TERM=dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


def _resolve_format(requested: OutputFormat, no_color: bool) -> OutputFormat:
    if requested is not OutputFormat.AUTO:
        return requested
    interactive = getattr(sys.stdout, "isatty", lambda: False)()
    return OutputFormat.RICH if interactive and not no_color else OutputFormat.PLAIN


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _plain_lines(data: Any) -> list[str]:
    if isinstance(data, dict):
        return [f"{key}\t{value}" for key, value in data.items()]
    if isinstance(data, list):
        return [
            "\t".join(str(v) for v in item.values()) if isinstance(item, dict) else str(item)
            for item in data
        ]
    return [str(data)]


# ------------------------------------------------------------------ #
# Process-wide manager
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager so the next call builds a fresh one.

    Managers bind ``sys.stdout``/``sys.stderr`` when created, so tests that
    capture streams reset between cases.
    """
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
    get_output().print_table(headers, rows, title)


def debug(message: str) -> None:
    get_output().debug(message)


def info(message: str) -> None:
    get_output().info(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)
