"""Typer launcher and console-script entry point for plugcli.

``plugcli`` assembles a :class:`~plugcli.runtime.runtime.Runtime` from
command-line flags and runs whatever the remaining arguments resolve to::

    plugcli --brand movie --src ./cli --plugins ./plugins quote random --count 3

Everything after the launcher's own options is handed to the runtime
untouched. When nothing matches, the visible command listing is printed to
stderr and the process exits with
:data:`~plugcli.exit_codes.EXIT_COMMAND_NOT_FOUND`.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and maps
:class:`~plugcli.exceptions.PlugcliError` to its exit code; any other
exception is written to a crash log under the data directory.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from plugcli import __version__
from plugcli.exit_codes import EXIT_CANCELLED, EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="plugcli",
    help="Run commands contributed by plugcli plugins.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"plugcli {__version__}")
        raise typer.Exit()


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
def launch(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    brand: Optional[str] = typer.Option(
        None, "--brand", "-b", envvar="PLUGCLI_BRAND", help="Application brand."
    ),
    src: Optional[str] = typer.Option(
        None, "--src", "-s", envvar="PLUGCLI_SRC", help="Default plugin directory."
    ),
    plugins: Optional[list[str]] = typer.Option(
        None, "--plugins", help="Directory of plugin directories (repeatable)."
    ),
    plugin: Optional[list[str]] = typer.Option(
        None, "--plugin", help="Single plugin directory (repeatable)."
    ),
    matching: Optional[str] = typer.Option(
        None, "--matching", help="Glob filtering --plugins sub-directories."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Assemble the runtime and run the command named by the remaining arguments."""
    from plugcli.exceptions import CommandNotFoundError
    from plugcli.output import OutputFormat, OutputManager, set_output
    from plugcli.runtime import Runtime

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)

    runtime = Runtime(brand)
    if src:
        output.debug(f"Default plugin: {src}")
        runtime.add_default_plugin(src)
    for directory in plugin or []:
        runtime.add_plugin(directory)
    for directory in plugins or []:
        runtime.add_plugins(directory, matching=matching)

    args = list(ctx.args)
    output.debug(f"Running {args!r} with {len(runtime.plugins)} plugin(s)")
    context = runtime.run(args)

    if not context.found:
        context.print.print_commands(err=True)
        raise CommandNotFoundError(
            f"Command not found: {' '.join(args)}" if args else "No command given"
        )
    if context.result is not None:
        output.format_data(context.result)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from plugcli.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``plugcli`` console script.

    Unhandled :class:`~plugcli.exceptions.PlugcliError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app(standalone_mode=False)
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)
    except Exception as exc:
        import click

        from plugcli.exceptions import PlugcliError
        from plugcli.output import error

        if isinstance(exc, click.exceptions.Abort):
            sys.stderr.write("\nCancelled.\n")
            sys.exit(EXIT_CANCELLED)
        if isinstance(exc, click.ClickException):
            exc.show()
            sys.exit(exc.exit_code)
        if isinstance(exc, PlugcliError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
    sys.exit(0)
