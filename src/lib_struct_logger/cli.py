"""CLI adapter for ``lib_struct_logger`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators try renderers, separators and global context from a shell and
inspect the settings the environment produces, without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_render` – renders one log line through :class:`StructLogger`.
* :func:`cli_show_config` – prints the effective settings as JSON.
* :func:`cli_fail` – deterministic failure for traceback checks.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It calls the configuration surface and
the façade and never reaches into the normaliser or renderers directly.
"""

from __future__ import annotations

import json
import logging
import sys
from importlib import metadata
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .config import RENDERER_NAMES, configure, configure_from_env, describe_settings
from .core import StructLogger
from .domain.levels import Level
from .testing import i_should_fail

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

LEVEL_CHOICES: Final[tuple[str, ...]] = ("error", "warn", "info", "debug", "trace")
_RENDER_LOGGER_NAME: Final[str] = "lib_struct_logger.cli.render"


class EchoHandler(logging.Handler):
    """Write ``LEVEL message`` lines through :func:`click.echo`."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(f"{record.levelname} {record.getMessage()}")
        except Exception:  # noqa: BLE001 - logging handlers report through handleError
            self.handleError(record)


def _resolve_version() -> str:
    """Return the installed package version, otherwise ``"0.0.0"``."""

    try:
        return metadata.version("lib_struct_logger")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Structured logging façade: render and inspect log lines",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_struct_logger",
    message="lib_struct_logger version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_struct_logger")
    except metadata.PackageNotFoundError:
        click.echo("lib_struct_logger (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_struct_logger')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")
    for entry in meta.get_all("Project-URL") or []:
        click.echo(f"  {entry}")


@cli.command("render", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message")
@click.argument("items", nargs=-1)
@click.option(
    "--renderer",
    type=click.Choice(RENDERER_NAMES, case_sensitive=False),
    default=None,
    help="Output format (defaults to the environment or key_value)",
)
@click.option("--separator", default=None, help="Separator used by the key_value renderer")
@click.option(
    "--context",
    "context_entries",
    multiple=True,
    metavar="KEY=VALUE",
    help="Global context entry (repeatable)",
)
@click.option(
    "--level",
    type=click.Choice(LEVEL_CHOICES, case_sensitive=False),
    default="info",
    show_default=True,
    help="Level of the rendered line",
)
def cli_render(
    message: str,
    items: Sequence[str],
    renderer: Optional[str],
    separator: Optional[str],
    context_entries: Sequence[str],
    level: str,
) -> None:
    """Render MESSAGE with ITEMS as alternating keys and values.

    Settings from ``LIB_STRUCT_LOGGER_*`` variables apply first; options
    override them. Diagnostics about dropped items appear as their own lines.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> from lib_struct_logger.config import reset_settings
    >>> result = CliRunner().invoke(cli, ["render", "Hello", "a", "b"], env={})
    >>> result.output.strip()
    'INFO Hello, a=b'
    >>> reset_settings()
    """

    configure_from_env()
    options: dict[str, object] = {}
    if renderer is not None:
        options["renderer"] = renderer
    if separator is not None:
        options["separator"] = separator
    if context_entries:
        options["context"] = _parse_context(context_entries)
    configure(**options)
    StructLogger(_render_backend()).log(Level.from_name(level), message, *items)


@cli.command("show-config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_show_config(indent: Optional[int]) -> None:
    """Apply ``LIB_STRUCT_LOGGER_*`` variables and print the effective settings as JSON."""

    configure_from_env()
    click.echo(json.dumps(describe_settings(), indent=indent, default=str))


@cli.command("fail", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_fail() -> None:
    """Trigger a deterministic error for testing traceback handling."""

    i_should_fail()


def _parse_context(entries: Sequence[str]) -> dict[str, str]:
    """Split ``KEY=VALUE`` entries into a mapping, keeping entry order."""

    context: dict[str, str] = {}
    for entry in entries:
        key, sep, value = entry.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {entry!r}", param_hint="--context")
        context[key] = value
    return context


def _render_backend() -> logging.Logger:
    """Return the logger backing ``render``, echoing every level to stdout."""

    backend = logging.getLogger(_RENDER_LOGGER_NAME)
    backend.handlers[:] = [EchoHandler()]
    backend.setLevel(Level.TRACE)
    backend.propagate = False
    return backend


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_struct_logger",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
