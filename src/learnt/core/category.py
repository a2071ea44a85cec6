"""Categories used to group and filter entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

# (name, icon) pairs seeded on first run
PRESET_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("Personal", "person"),
    ("Work", "briefcase"),
    ("Learning", "book"),
    ("Relationships", "heart"),
)


@dataclass(frozen=True)
class Category:
    """A user-visible grouping of entries.

    Attributes:
        id: Unique identifier (UUID)
        name: Display name
        icon: Symbol name shown next to the category
        sort_order: Position in category lists
        is_preset: Seeded by the app; presets cannot be deleted
        created_at: When the category was created
    """

    id: str
    name: str
    icon: str
    sort_order: int
    is_preset: bool
    created_at: datetime

    @classmethod
    def create(
        cls,
        name: str,
        icon: str,
        sort_order: int,
        now: datetime,
        is_preset: bool = False,
        category_id: str | None = None,
    ) -> Category:
        return cls(
            id=category_id or str(uuid4()),
            name=name,
            icon=icon,
            sort_order=sort_order,
            is_preset=is_preset,
            created_at=now,
        )


def preset_categories(now: datetime) -> list[Category]:
    """Build the preset categories in display order."""
    return [
        Category.create(name=name, icon=icon, sort_order=index, now=now, is_preset=True)
        for index, (name, icon) in enumerate(PRESET_CATEGORIES)
    ]
