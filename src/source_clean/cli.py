# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Main CLI entry point for source-clean.

Thin trigger: loads config, runs scripts, reports failures with exit codes.
"""

import logging
from typing import List, Optional

import typer

from source_clean import __version__
from source_clean.config import ConfigError, RunnerConfig, load_config
from source_clean.errors import ExecutionError, InvalidModeError, NotFoundError
from source_clean.event_log import EventLog
from source_clean.modes import VerbosityMode
from source_clean.pipeline import run_pipeline
from source_clean.runner import run_script


app = typer.Typer(
    name="source-clean",
    help="Run analysis scripts with verbosity control",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(config_path: Optional[str]) -> RunnerConfig:
    try:
        return load_config(config_path)
    except (FileNotFoundError, ConfigError) as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(1)


def _event_log(config: RunnerConfig) -> Optional[EventLog]:
    return EventLog(config.events_log) if config.events_log else None


@app.command()
def run(
    script: str = typer.Argument(..., help="Path to the script to run"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="debug, full, minimal, silent, code_only"),
    beep: bool = typer.Option(False, "--beep", help="Play a tone when the script completes"),
    alarm: bool = typer.Option(False, "--alarm", help="Play an alarm if the script fails"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Run a single script."""
    _configure_logging(verbose)
    config = _load(config_path)

    try:
        run_script(
            config.resolve(script),
            mode=mode or config.mode,
            notify_on_success=beep or config.notify_on_success,
            notify_on_error=alarm or config.notify_on_error,
            event_log=_event_log(config),
        )
    except (InvalidModeError, NotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except Exception as e:
        typer.echo(f"Script failed: {type(e).__name__}: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def pipeline(
    scripts: Optional[List[str]] = typer.Argument(None, help="Scripts to run, in order (default: configured list)"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="debug, full, minimal, silent, code_only"),
    beep: bool = typer.Option(False, "--beep", help="Play a tone when all scripts complete"),
    alarm: bool = typer.Option(False, "--alarm", help="Play an alarm if a script fails"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Run a sequence of scripts in one shared namespace."""
    _configure_logging(verbose)
    config = _load(config_path)

    paths = [config.resolve(s) for s in scripts] if scripts else config.script_paths()
    if not paths:
        typer.echo("No scripts given and none configured.", err=True)
        raise typer.Exit(1)

    try:
        results = run_pipeline(
            paths,
            mode=mode or config.mode,
            notify_on_success=beep or config.notify_on_success,
            notify_on_error=alarm or config.notify_on_error,
            event_log=_event_log(config),
        )
    except (InvalidModeError, NotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except ExecutionError as e:
        typer.echo(f"Pipeline failed at {e.script.name}: {type(e.cause).__name__}: {e.cause}", err=True)
        raise typer.Exit(1)

    if verbose:
        for result in results:
            typer.echo(f"{result.display_name}: {result.duration_ms} ms", err=True)


@app.command()
def modes():
    """List verbosity modes and what each shows."""
    def flag(value: bool) -> str:
        return "shown" if value else "hidden"

    for mode in VerbosityMode:
        policy = mode.policy
        typer.echo(
            f"{mode.value:<10} code={flag(policy.echo_source)} "
            f"output={flag(policy.show_output)} "
            f"messages={flag(policy.show_messages)} "
            f"graphics={flag(policy.show_graphics)}"
        )


@app.command()
def version():
    """Show version information."""
    typer.echo(f"source-clean version {__version__}")


# Static commands (config)
from source_clean.commands import config as config_command

app.add_typer(config_command.app, name="config")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
