"""Spaced repetition review commands."""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from learnt.cli._helpers import fail, get_config, get_service, get_storage, output_result, run_async
from learnt.core.entry import Entry, ReviewOutcome
from learnt.engine.review_scheduler import ReviewPipelineInactiveError

review_app = typer.Typer(help="Spaced repetition review commands")

OUTCOME_ALIASES: dict[str, ReviewOutcome] = {
    "got-it": ReviewOutcome.GOT_IT,
    "got_it": ReviewOutcome.GOT_IT,
    "again": ReviewOutcome.REVIEW_AGAIN,
    "review-again": ReviewOutcome.REVIEW_AGAIN,
    "review_again": ReviewOutcome.REVIEW_AGAIN,
}


def _entry_line(entry: Entry) -> str:
    status = "graduated" if entry.is_graduated else f"reviews: {entry.review_count}"
    return f"  [{entry.id}] {entry.capture_date.isoformat()}  {entry.preview_text}  ({status})"


@review_app.command("due")
def review_due(
    include_graduated: Annotated[
        bool, typer.Option("--graduated", "-g", help="Also include graduated entries")
    ] = False,
    category: Annotated[
        Optional[str], typer.Option("--category", "-c", help="Only entries in this category")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """List entries ready for review.

    Examples:
        learnt review due
        learnt review due --graduated --category <id>
    """

    async def _due() -> None:
        config = get_config()
        storage = await get_storage(config)
        try:
            service = get_service(config, storage)
            entries = await service.reviewable(
                include_graduated=include_graduated, category_id=category
            )
            if json_output:
                output_result(
                    {"entries": [e.to_dict() for e in entries], "count": len(entries)}, True
                )
                return

            if not entries:
                typer.echo("All caught up. Nothing to review right now.")
                upcoming = await service.upcoming(limit=3)
                for entry in upcoming:
                    when = entry.next_review_date.date().isoformat() if entry.next_review_date else "-"
                    typer.echo(f"  next: {when}  {entry.preview_text}")
                return

            typer.echo(f"Due for review ({len(entries)}):")
            for entry in entries:
                typer.echo(_entry_line(entry))
        finally:
            await storage.close()

    run_async(_due())


@review_app.command("mark")
def review_mark(
    entry_id: Annotated[str, typer.Argument(help="Entry ID")],
    outcome: Annotated[str, typer.Argument(help="got-it or again")],
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Record the outcome of reviewing one entry.

    Examples:
        learnt review mark 3f2a... got-it
        learnt review mark 3f2a... again
    """
    result = OUTCOME_ALIASES.get(outcome.lower())
    if result is None:
        fail(f"Unknown outcome '{outcome}'. Use got-it or again.")

    async def _mark() -> None:
        config = get_config()
        storage = await get_storage(config)
        try:
            service = get_service(config, storage)
            try:
                entry = await service.review(entry_id, result)
            except ReviewPipelineInactiveError as e:
                fail(str(e))
                return
            if entry is None:
                fail(f"No entry with id {entry_id}")
                return

            if json_output:
                output_result(entry.to_dict(), True)
            elif entry.is_graduated:
                typer.secho("Graduated! This learning has left the review queue.", fg=typer.colors.GREEN)
            else:
                when = entry.next_review_date.date().isoformat() if entry.next_review_date else "-"
                typer.secho(
                    f"Next review on {when} (in {entry.review_interval} days)",
                    fg=typer.colors.GREEN,
                )
        finally:
            await storage.close()

    run_async(_mark())
