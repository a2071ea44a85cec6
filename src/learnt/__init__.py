"""Learnt - a journaling engine with spaced repetition review and capture streaks."""

from learnt.core import Category, Entry, ReviewOutcome
from learnt.engine import ReviewConfig
from learnt.service import JournalService

__version__ = "0.1.0"

__all__ = [
    "Category",
    "Entry",
    "JournalService",
    "ReviewConfig",
    "ReviewOutcome",
    "__version__",
]
