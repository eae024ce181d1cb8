"""Gamification Engine - Pure logic for levels and achievements.

This engine provides stateless, pure Python functions for:
- Level and level-progress derivation from the completed-day count
- Achievement derivation (full recomputation, never a diff)
- Perfect-week detection over the whole day history
- Newly-unlocked detection between two derived achievement sets

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data.

Achievements are never persisted. The coordinator keeps the last derived
set only to detect which flags flipped from locked to unlocked.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .. import const
from ..utils.math_utils import floor_percentage

if TYPE_CHECKING:
    from ..type_defs import (
        AchievementStatus,
        LevelProgress,
        UserProgressData,
        WorkoutDayData,
    )


class GamificationEngine:
    """Pure logic engine for level and achievement evaluation.

    All methods are static - no instance state. This enables easy unit testing
    without any Home Assistant mocking.

    Monotonicity:
        Every achievement except Weekly Warrior only depends on quantities that
        never shrink as history grows (completed-day count, level, existence of
        a qualifying 7-day window). Weekly Warrior reads the live streak and
        re-locks when the streak drops below 7.
    """

    # =========================================================================
    # LEVELS
    # =========================================================================

    @staticmethod
    def calculate_level_progress(
        completed_days: int,
        thresholds: Sequence[int] = const.LEVEL_THRESHOLDS,
        schedule_length: int = len(const.WORKOUT_SCHEDULE),
    ) -> LevelProgress:
        """Derive level and percent progress toward the next level.

        Args:
            completed_days: Number of completed days (non-negative)
            thresholds: Ascending completed-day counts at which each level
                begins; thresholds[0] is 0
            schedule_length: Upper bound of the final level's window

        Returns:
            LevelProgress with 1-based level and progress in [0, 100]

        Examples:
            calculate_level_progress(0) → {"level": 1, "progress": 0}
            calculate_level_progress(1) → {"level": 1, "progress": 10}
            calculate_level_progress(10) → {"level": 2, "progress": 0}
            calculate_level_progress(45) → {"level": 5, "progress": 100}
        """
        level = 1
        for index, threshold in enumerate(thresholds, start=1):
            if completed_days >= threshold:
                level = index

        window_start = thresholds[level - 1]
        if level < len(thresholds):
            window_end = thresholds[level]
        else:
            window_end = schedule_length

        progress = floor_percentage(
            completed_days - window_start, window_end - window_start
        )
        return {
            const.DATA_LEVEL_RESULT_LEVEL: level,
            const.DATA_LEVEL_RESULT_PROGRESS: progress,
        }  # type: ignore[return-value]

    @staticmethod
    def get_level_name(level: int) -> str:
        """Return the display name for a level (e.g. 1 → "Beginner")."""
        return const.LEVEL_NAMES.get(level, const.LEVEL_NAMES[const.MAX_LEVEL])

    # =========================================================================
    # ACHIEVEMENTS
    # =========================================================================

    @staticmethod
    def count_completed_days(days: Sequence[WorkoutDayData]) -> int:
        """Return how many days are marked completed (real or joker-backed)."""
        return sum(1 for day in days if day[const.DATA_DAY_COMPLETED])

    @staticmethod
    def has_perfect_week(
        days: Sequence[WorkoutDayData],
        window: int = const.ACHIEVEMENT_PERFECT_WEEK_DAYS,
    ) -> bool:
        """Check for any run of `window` consecutive days done without jokers.

        Days are scanned in day-number order. A qualifying run stays in the
        history forever, so the result never reverts once true unless a past
        day is later marked as joker-consumed.
        """
        run = 0
        for day in sorted(days, key=lambda d: d[const.DATA_DAY_NUMBER]):
            if day[const.DATA_DAY_COMPLETED] and not day[const.DATA_DAY_JOKER_USED]:
                run += 1
                if run >= window:
                    return True
            else:
                run = 0
        return False

    @staticmethod
    def derive_achievements(progress: UserProgressData) -> list[AchievementStatus]:
        """Derive the full ordered achievement set from current progress.

        Pure function - calling it twice on the same progress yields identical
        results.

        Args:
            progress: UserProgress aggregate

        Returns:
            One AchievementStatus per entry of const.ACHIEVEMENT_DEFINITIONS,
            in catalogue order.
        """
        days = progress[const.DATA_DAYS]
        completed_days = GamificationEngine.count_completed_days(days)
        streak = progress[const.DATA_STREAK]
        level = progress[const.DATA_LEVEL]

        unlocked_by_id = {
            const.ACHIEVEMENT_FIRST_DAY: (
                completed_days >= const.ACHIEVEMENT_FIRST_DAY_COMPLETED_DAYS
            ),
            const.ACHIEVEMENT_WEEK_STREAK: (
                streak >= const.ACHIEVEMENT_WEEK_STREAK_DAYS
            ),
            const.ACHIEVEMENT_LEVEL_UP: level >= const.ACHIEVEMENT_LEVEL_UP_LEVEL,
            const.ACHIEVEMENT_HALFWAY: (
                completed_days >= const.ACHIEVEMENT_HALFWAY_COMPLETED_DAYS
            ),
            const.ACHIEVEMENT_NO_JOKER: GamificationEngine.has_perfect_week(days),
            const.ACHIEVEMENT_MASTER: level >= const.ACHIEVEMENT_MASTER_LEVEL,
        }

        return [
            {
                const.DATA_ACHIEVEMENT_ID: definition[const.DATA_ACHIEVEMENT_ID],
                const.DATA_ACHIEVEMENT_NAME: definition[const.DATA_ACHIEVEMENT_NAME],
                const.DATA_ACHIEVEMENT_DESCRIPTION: definition[
                    const.DATA_ACHIEVEMENT_DESCRIPTION
                ],
                const.DATA_ACHIEVEMENT_ICON: definition[const.DATA_ACHIEVEMENT_ICON],
                const.DATA_ACHIEVEMENT_UNLOCKED: unlocked_by_id[
                    definition[const.DATA_ACHIEVEMENT_ID]
                ],
            }  # type: ignore[misc]
            for definition in const.ACHIEVEMENT_DEFINITIONS
        ]

    @staticmethod
    def find_newly_unlocked(
        previous: Sequence[AchievementStatus],
        current: Sequence[AchievementStatus],
    ) -> list[AchievementStatus]:
        """Return achievements that flipped from locked to unlocked.

        Entries are matched by id; an id missing from `previous` counts as
        previously locked.
        """
        was_unlocked = {
            entry[const.DATA_ACHIEVEMENT_ID]: entry[const.DATA_ACHIEVEMENT_UNLOCKED]
            for entry in previous
        }
        return [
            entry
            for entry in current
            if entry[const.DATA_ACHIEVEMENT_UNLOCKED]
            and not was_unlocked.get(entry[const.DATA_ACHIEVEMENT_ID], False)
        ]

    @staticmethod
    def count_unlocked(achievements: Sequence[AchievementStatus]) -> int:
        """Return the number of unlocked achievements."""
        return sum(1 for entry in achievements if entry[const.DATA_ACHIEVEMENT_UNLOCKED])
