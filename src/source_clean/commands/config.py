# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Config command for source-clean.

Checks that a configuration file loads and that its scripts resolve.
"""

import typer

from source_clean.config import ConfigError, load_config

app = typer.Typer(help="Inspect and validate configuration")


@app.command()
def validate(
    config_path: str = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """
    Validate configuration file.

    Loads the file, checks the verbosity mode and reports scripts that
    do not exist.
    """
    typer.echo("Validating configuration...")
    typer.echo()

    try:
        config = load_config(config_path)
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except ConfigError as e:
        typer.echo(f"Validation failed: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Source: {config.source or '(defaults)'}")
    typer.echo(f"Mode: {config.mode.value}")
    typer.echo(f"Notify on success: {config.notify_on_success}")
    typer.echo(f"Notify on error: {config.notify_on_error}")
    if config.scripts_dir:
        typer.echo(f"Scripts dir: {config.scripts_dir}")

    missing = [p for p in config.script_paths() if not p.is_file()]
    if config.scripts:
        typer.echo(f"Scripts: {len(config.scripts)}")
        for path in config.script_paths():
            marker = "missing" if path in missing else "ok"
            typer.echo(f"  {path} [{marker}]")
    typer.echo()

    if missing:
        typer.echo(f"Validation failed: {len(missing)} script(s) not found", err=True)
        raise typer.Exit(1)
    typer.echo("Configuration validation complete!")
