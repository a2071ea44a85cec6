"""Shared helpers for CLI commands."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Coroutine
from typing import Any, TypeVar

import typer

from learnt.service import JournalService
from learnt.storage.sqlite_store import SQLiteStorage
from learnt.unified_config import UnifiedConfig

T = TypeVar("T")


def get_config() -> UnifiedConfig:
    """Get CLI configuration."""
    return UnifiedConfig.load()


async def get_storage(config: UnifiedConfig) -> SQLiteStorage:
    """Open the journal database for the configured data directory."""
    storage = SQLiteStorage(config.db_path)
    await storage.initialize()
    return storage


def get_service(config: UnifiedConfig, storage: SQLiteStorage) -> JournalService:
    return JournalService(storage, config=config.review)


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    return asyncio.run(coro)


def configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def output_result(data: dict[str, Any], as_json: bool = False) -> None:
    """Output result in appropriate format."""
    if as_json:
        typer.echo(json.dumps(data, indent=2, default=str))
    elif "error" in data:
        typer.secho(f"Error: {data['error']}", fg=typer.colors.RED, err=True)
    elif "message" in data:
        typer.secho(data["message"], fg=typer.colors.GREEN)
    else:
        for key, value in data.items():
            typer.echo(f"{key}: {value}")


def fail(message: str) -> None:
    """Print an error and exit with code 1."""
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)
