"""CLI commands for configuration management."""

from __future__ import annotations

from dataclasses import replace
from typing import Annotated

import typer

from learnt.cli._helpers import fail, get_config, output_result

config_app = typer.Typer(help="Configuration management")


@config_app.command("show")
def show_cmd(
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show the active configuration.

    Examples:
        learnt config show
        learnt config show --json
    """
    config = get_config()
    if json_output:
        output_result(config.to_dict(), True)
        return

    typer.echo(f"Data dir: {config.data_dir}")
    typer.echo(f"Database: {config.db_path}")
    typer.echo(f"Graduation threshold: {config.review.graduation_threshold}")
    typer.echo(f"Intervals (days): {', '.join(str(d) for d in config.review.intervals)}")


@config_app.command("set-threshold")
def set_threshold_cmd(
    value: Annotated[int, typer.Argument(help="Successful reviews needed to graduate")],
) -> None:
    """Set the graduation threshold.

    Examples:
        learnt config set-threshold 4
    """
    config = get_config()
    try:
        config.review = replace(config.review, graduation_threshold=value)
    except ValueError as e:
        fail(str(e))
    config.save()
    typer.secho(f"Graduation threshold set to: {value}", fg=typer.colors.GREEN)


@config_app.command("set-intervals")
def set_intervals_cmd(
    days: Annotated[list[int], typer.Argument(help="Interval table in days, e.g. 1 7 16 35")],
) -> None:
    """Replace the review interval table.

    Examples:
        learnt config set-intervals 1 7 16 35
    """
    config = get_config()
    try:
        config.review = replace(config.review, intervals=tuple(days))
    except ValueError as e:
        fail(str(e))
    config.save()
    typer.secho(
        f"Intervals set to: {', '.join(str(d) for d in days)}", fg=typer.colors.GREEN
    )
