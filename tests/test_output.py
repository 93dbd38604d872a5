"""Tests for the output system.

Covers:
- OutputFormat resolution (auto -> plain when not a TTY)
- NO_COLOR / TERM=dumb colour disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- JSON and plain rendering of data and tables
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from httpbutler.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


class TestFormatResolution:
    def test_auto_is_plain_when_not_tty(self) -> None:
        # pytest captures stdout, so it is never a TTY here.
        assert OutputManager().format == OutputFormat.PLAIN

    def test_explicit_format_kept(self) -> None:
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_enabled_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


class TestStreams:
    def test_data_goes_to_stdout(self, capsys) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_data("/users/A01")
        captured = capsys.readouterr()
        assert captured.out == "/users/A01\n"
        assert captured.err == ""

    def test_diagnostics_go_to_stderr(self, capsys) -> None:
        out = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        out.info("hello")
        out.warning("careful")
        out.error("boom")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "hello" in captured.err
        assert "Warning: careful" in captured.err
        assert "Error: boom" in captured.err

    def test_quiet_suppresses_info_not_errors(self, capsys) -> None:
        out = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        out.info("hidden")
        out.error("shown")
        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err

    def test_debug_only_when_verbose(self, capsys) -> None:
        OutputManager(no_color=True).debug("quiet")
        OutputManager(no_color=True, verbose=True).debug("loud")
        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "[debug] loud" in err


class TestRendering:
    def test_json_response(self, capsys) -> None:
        OutputManager(format=OutputFormat.JSON).format_response({"uri": "/a"})
        assert json.loads(capsys.readouterr().out) == {"uri": "/a"}

    def test_plain_dict(self, capsys) -> None:
        OutputManager(format=OutputFormat.PLAIN).format_response({"a": 1, "b": True})
        assert capsys.readouterr().out == "a\t1\nb\tTrue\n"

    def test_json_table(self, capsys) -> None:
        OutputManager(format=OutputFormat.JSON).print_table(["Name", "Kind"], [["id", "path"]])
        assert json.loads(capsys.readouterr().out) == [{"Name": "id", "Kind": "path"}]

    def test_plain_table(self, capsys) -> None:
        OutputManager(format=OutputFormat.PLAIN).print_table(["Name", "Kind"], [["id", "path"]])
        assert capsys.readouterr().out == "Name\tKind\nid\tpath\n"


class TestGlobalInstance:
    def test_lazy_default(self) -> None:
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_and_reset(self) -> None:
        custom = OutputManager(quiet=True)
        set_output(custom)
        assert get_output() is custom
        reset_output()
        assert get_output() is not custom
