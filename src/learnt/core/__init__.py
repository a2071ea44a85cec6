"""Core data models for Learnt."""

from learnt.core.category import PRESET_CATEGORIES, Category, preset_categories
from learnt.core.entry import Entry, ReviewOutcome

__all__ = [
    "Category",
    "Entry",
    "PRESET_CATEGORIES",
    "ReviewOutcome",
    "preset_categories",
]
