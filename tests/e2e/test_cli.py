"""End-to-end CLI coverage for the commands exposed by lib_struct_logger.

The tests run the Click group through ``CliRunner`` and check the rendered
lines, the environment-driven settings and the shared exit handling.
"""

from __future__ import annotations

import json

from click.testing import CliRunner

import lib_cli_exit_tools

from lib_struct_logger import cli

CLEAN_ENV = {
    "LIB_STRUCT_LOGGER_RENDERER": None,
    "LIB_STRUCT_LOGGER_SEPARATOR": None,
    "LIB_STRUCT_LOGGER_CONTEXT__ENV": None,
}


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def _invoke(args: list[str], env: dict[str, str | None] | None = None):
    return _runner().invoke(cli.cli, args, env={**CLEAN_ENV, **(env or {})})


def test_cli_render_key_value_line() -> None:
    result = _invoke(["render", "Hello", "a", "b"])
    assert result.exit_code == 0
    assert result.output == "INFO Hello, a=b\n"


def test_cli_render_reports_dropped_items() -> None:
    result = _invoke(["render", "Hello", "a", "b", "c"])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "WARNING [lib_struct_logger] : odd number of parameters (3) passed in. "
        "The value pair for key `c` not found thus it has been ignored.",
        "INFO Hello, a=b",
    ]


def test_cli_render_with_options() -> None:
    result = _invoke(
        ["render", "Hi", "env", "dev", "user", "ada", "--renderer", "json", "--context", "env=prod", "--level", "error"]
    )
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0].startswith("WARNING [lib_struct_logger] : key `env` ignored")
    level, _, payload = lines[1].partition(" ")
    assert level == "ERROR"
    assert json.loads(payload) == {"message": "Hi", "user": "ada", "env": "prod"}


def test_cli_render_separator_option() -> None:
    result = _invoke(["render", "m", "a", "1", "--separator", " |"])
    assert result.output == "INFO m | a=1\n"


def test_cli_render_reads_environment() -> None:
    result = _invoke(
        ["render", "m"],
        env={"LIB_STRUCT_LOGGER_RENDERER": "yaml", "LIB_STRUCT_LOGGER_CONTEXT__ENV": "prod"},
    )
    assert result.exit_code == 0
    assert result.output == "INFO message: m\nenv: prod\n"


def test_cli_render_rejects_malformed_context() -> None:
    result = _invoke(["render", "m", "--context", "novalue"])
    assert result.exit_code != 0
    assert "KEY=VALUE" in result.output


def test_cli_show_config_reflects_environment() -> None:
    result = _invoke(
        ["show-config"],
        env={"LIB_STRUCT_LOGGER_SEPARATOR": ";", "LIB_STRUCT_LOGGER_CONTEXT__ENV": "prod"},
    )
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "renderer": "KeyValueRenderer",
        "separator": ";",
        "value_renderer": "default_value_renderer",
        "context": {"env": "prod"},
    }


def test_cli_info_without_metadata(monkeypatch) -> None:
    """`cli info` should degrade gracefully when package metadata is missing."""

    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output


def test_cli_main_restores_traceback_flag() -> None:
    """`cli main` should restore lib_cli_exit_tools tracebacks after execution."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    exit_code = cli.main(["--traceback", "show-config"], restore_traceback=True)
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback


def test_cli_fail_command() -> None:
    """`cli fail` should bubble runtime errors for debugging flows."""

    result = _runner().invoke(cli.cli, ["fail"])
    assert result.exit_code != 0
    assert isinstance(result.exception, RuntimeError)
    assert str(result.exception) == "i should fail"
