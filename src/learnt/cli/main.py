"""Learnt CLI main entry point."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

import typer

from learnt.cli._helpers import (
    configure_logging,
    fail,
    get_config,
    get_service,
    get_storage,
    output_result,
    run_async,
)
from learnt.cli.commands.config_cmd import config_app
from learnt.cli.commands.review import review_app
from learnt.engine.streak import (
    celebration_message,
    days_until_next_milestone,
    next_milestone,
)

# Main app
app = typer.Typer(
    name="learnt",
    help="Learnt - capture what you learn and review it with spaced repetition",
    no_args_is_help=True,
)
app.add_typer(review_app, name="review")
app.add_typer(config_app, name="config")


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    configure_logging(verbose)


def _parse_day(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        fail(f"Invalid date '{value}', expected YYYY-MM-DD")
    return None


# =============================================================================
# Core Commands
# =============================================================================


@app.command()
def capture(
    content: Annotated[str, typer.Argument(help="What did you learn?")],
    on: Annotated[
        Optional[str], typer.Option("--date", "-d", help="Capture date (YYYY-MM-DD), default today")
    ] = None,
    categories: Annotated[
        Optional[list[str]], typer.Option("--category", "-c", help="Category ID")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Capture a new learning.

    Examples:
        learnt capture "Python dicts keep insertion order"
        learnt capture "Rest days matter" --date 2024-03-01
    """
    day = _parse_day(on)

    async def _capture() -> None:
        config = get_config()
        storage = await get_storage(config)
        try:
            service = get_service(config, storage)
            try:
                entry = await service.capture(content, capture_date=day, category_ids=categories or ())
            except ValueError as e:
                fail(str(e))
                return

            milestone = await service.check_milestone()
            if milestone is not None:
                await service.mark_milestone_celebrated(milestone)

            if json_output:
                output_result({**entry.to_dict(), "milestone": milestone}, True)
                return

            output_result({"message": f"Captured [{entry.id}] for {entry.capture_date.isoformat()}"})
            if milestone is not None:
                typer.secho(
                    f"{milestone} day streak! {celebration_message(milestone)}",
                    fg=typer.colors.YELLOW,
                    bold=True,
                )
        finally:
            await storage.close()

    run_async(_capture())


@app.command()
def reflect(
    entry_id: Annotated[str, typer.Argument(help="Entry ID")],
    application: Annotated[
        Optional[str], typer.Option("--application", "-a", help="How will you apply this?")
    ] = None,
    surprise: Annotated[
        Optional[str], typer.Option("--surprise", "-s", help="What surprised you?")
    ] = None,
    simplification: Annotated[
        Optional[str], typer.Option("--simplify", help="Explain it simply")
    ] = None,
    question: Annotated[
        Optional[str], typer.Option("--question", "-q", help="What question does it raise?")
    ] = None,
) -> None:
    """Attach reflections to an entry. The first reflection schedules its reviews.

    Examples:
        learnt reflect 3f2a... --surprise "Order is guaranteed since 3.7"
    """

    async def _reflect() -> None:
        config = get_config()
        storage = await get_storage(config)
        try:
            service = get_service(config, storage)
            entry = await service.reflect(
                entry_id,
                application=application,
                surprise=surprise,
                simplification=simplification,
                question=question,
            )
            if entry is None:
                fail(f"No entry with id {entry_id}")
                return
            if entry.next_review_date is not None:
                output_result(
                    {"message": f"Saved. First review on {entry.next_review_date.date().isoformat()}"}
                )
            else:
                output_result({"message": "Saved."})
        finally:
            await storage.close()

    run_async(_reflect())


@app.command()
def favorite(
    entry_id: Annotated[str, typer.Argument(help="Entry ID")],
    off: Annotated[bool, typer.Option("--off", help="Remove from favorites")] = False,
) -> None:
    """Mark an entry as favorite."""

    async def _favorite() -> None:
        config = get_config()
        storage = await get_storage(config)
        try:
            entry = await get_service(config, storage).set_favorite(entry_id, not off)
            if entry is None:
                fail(f"No entry with id {entry_id}")
                return
            output_result({"message": "Removed from favorites." if off else "Added to favorites."})
        finally:
            await storage.close()

    run_async(_favorite())


@app.command()
def delete(
    entry_id: Annotated[str, typer.Argument(help="Entry ID")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
) -> None:
    """Delete an entry."""
    if not force and not typer.confirm(f"Delete entry {entry_id}?"):
        typer.echo("Cancelled.")
        return

    async def _delete() -> None:
        config = get_config()
        storage = await get_storage(config)
        try:
            deleted = await get_service(config, storage).delete(entry_id)
            if not deleted:
                fail(f"No entry with id {entry_id}")
                return
            output_result({"message": "Deleted."})
        finally:
            await storage.close()

    run_async(_delete())


@app.command()
def streak(
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show capture and review streaks."""

    async def _streak() -> None:
        config = get_config()
        storage = await get_storage(config)
        try:
            service = get_service(config, storage)
            state = await service.streak_state()
            review_streak = await service.review_streak()
            upcoming = next_milestone(state.current_streak)
            remaining = days_until_next_milestone(state.current_streak)

            data = {
                "current_streak": state.current_streak,
                "longest_streak": state.longest_streak,
                "next_milestone": upcoming,
                "days_until_next_milestone": remaining,
                "review_streak": review_streak.current,
                "longest_review_streak": review_streak.longest,
            }
            if json_output:
                output_result(data, True)
                return

            typer.echo(f"Current streak: {state.current_streak} days")
            typer.echo(f"Longest streak: {state.longest_streak} days")
            if upcoming is not None:
                typer.echo(f"Next milestone: {upcoming} days ({remaining} to go)")
            typer.echo(
                f"Review streak: {review_streak.current} days (longest {review_streak.longest})"
            )
        finally:
            await storage.close()

    run_async(_streak())


@app.command()
def stats(
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show journal and review statistics."""

    async def _stats() -> None:
        config = get_config()
        storage = await get_storage(config)
        try:
            result = await get_service(config, storage).stats()
            data = {
                "total_entries": result.total_entries,
                "total_days": result.total_days,
                "reflected": result.reflected,
                "reviewed": result.reviewed,
                "due": result.due,
                "graduated": result.graduated,
                "retention_rate": (
                    f"{result.retention_rate}%" if result.retention_rate is not None else "-"
                ),
            }
            output_result(data, json_output)
        finally:
            await storage.close()

    run_async(_stats())


@app.command()
def categories(
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """List categories, creating the presets on first use."""

    async def _categories() -> None:
        config = get_config()
        storage = await get_storage(config)
        try:
            items = await get_service(config, storage).ensure_preset_categories()
            if json_output:
                output_result(
                    {
                        "categories": [
                            {"id": c.id, "name": c.name, "icon": c.icon, "preset": c.is_preset}
                            for c in items
                        ]
                    },
                    True,
                )
                return
            for c in items:
                typer.echo(f"  [{c.id}] {c.name}" + (" (preset)" if c.is_preset else ""))
        finally:
            await storage.close()

    run_async(_categories())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
