"""Review engine: scheduling, streaks and queue selection."""

from learnt.engine.review_queue import (
    DateFilter,
    LibraryFilter,
    ReviewStats,
    due_entries,
    filter_library,
    review_stats,
    reviewable_entries,
    upcoming_reviews,
)
from learnt.engine.review_scheduler import (
    DEFAULT_REVIEW_CONFIG,
    ReviewConfig,
    ReviewPipelineInactiveError,
    ReviewStreak,
    activate_review_pipeline,
    record_review,
    review_graduated_entry,
    update_review_streak,
)
from learnt.engine.streak import (
    MILESTONES,
    MilestoneCheck,
    StreakState,
    check_for_new_milestone,
    current_streak,
    mark_milestone_celebrated,
)

__all__ = [
    # Scheduler
    "DEFAULT_REVIEW_CONFIG",
    "ReviewConfig",
    "ReviewPipelineInactiveError",
    "ReviewStreak",
    "activate_review_pipeline",
    "record_review",
    "review_graduated_entry",
    "update_review_streak",
    # Streaks
    "MILESTONES",
    "MilestoneCheck",
    "StreakState",
    "check_for_new_milestone",
    "current_streak",
    "mark_milestone_celebrated",
    # Queue
    "DateFilter",
    "LibraryFilter",
    "ReviewStats",
    "due_entries",
    "filter_library",
    "review_stats",
    "reviewable_entries",
    "upcoming_reviews",
]
