"""Application configuration stored in ``<data_dir>/config.toml``.

Example file:

    [review]
    graduation_threshold = 4
    intervals = [1, 7, 16, 35]
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from learnt.engine.review_scheduler import ReviewConfig

logger = logging.getLogger(__name__)

ENV_HOME = "LEARNT_HOME"
CONFIG_FILENAME = "config.toml"
DB_FILENAME = "journal.db"


def default_data_dir() -> Path:
    env_home = os.environ.get(ENV_HOME)
    if env_home:
        return Path(env_home).expanduser()
    return Path.home() / ".learnt"


@dataclass
class UnifiedConfig:
    """Settings shared by the CLI and the service."""

    data_dir: Path = field(default_factory=default_data_dir)
    review: ReviewConfig = field(default_factory=ReviewConfig)

    @property
    def config_path(self) -> Path:
        return self.data_dir / CONFIG_FILENAME

    @property
    def db_path(self) -> Path:
        return self.data_dir / DB_FILENAME

    @classmethod
    def load(cls, data_dir: Path | None = None) -> UnifiedConfig:
        """Load config.toml; a missing file yields defaults."""
        directory = data_dir or default_data_dir()
        config_path = directory / CONFIG_FILENAME
        if not config_path.exists():
            return cls(data_dir=directory)

        with config_path.open("rb") as fh:
            data = tomllib.load(fh)

        review_data: dict[str, Any] = data.get("review", {})
        try:
            review = ReviewConfig.from_dict(review_data)
        except (ValueError, TypeError) as e:
            logger.warning("Invalid [review] section in %s, using defaults: %s", config_path, e)
            review = ReviewConfig()

        return cls(data_dir=directory, review=review)

    def save(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        intervals = ", ".join(str(days) for days in self.review.intervals)
        lines = [
            "[review]",
            f"graduation_threshold = {self.review.graduation_threshold}",
            f"intervals = [{intervals}]",
            "",
        ]
        self.config_path.write_text("\n".join(lines), encoding="utf-8")
        logger.info("Saved config to %s", self.config_path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "data_dir": str(self.data_dir),
            "db_path": str(self.db_path),
            "review": self.review.to_dict(),
        }
