"""Progress Engine - Pure logic for workout day and streak transitions.

This engine provides stateless, pure Python functions for:
- Creating the first-run progress record and new workout days
- Logging repetition counts and toggling completion
- Spending and refunding jokers (banked streak charges)
- Advancing to the next program day
- Catching up on calendar days that passed while the app was closed

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data. "Today" is
always an explicit argument.

Transition methods mutate the given UserProgress in place and return a
ProgressTransition describing what happened. The coordinator turns that
description into side effects (persistence, notifications, achievements).

Joker bank:
    Every completed day that did not use a joker is one available streak
    charge. Charges are spent earliest-first (by day number) when a day is
    missed; spending marks the donor day's jokerUsed flag.
"""

from __future__ import annotations

from collections.abc import Sequence
import copy
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import dt_add_days, dt_days_between, dt_parse_date, dt_to_iso_date
from .gamification_engine import GamificationEngine

if TYPE_CHECKING:
    from ..type_defs import UserProgressData, WorkoutDayData


# =============================================================================
# TRANSITION RESULT
# =============================================================================


@dataclass
class ProgressTransition:
    """Outcome of a progress transition.

    Attributes:
        changed: Whether the progress record was modified (needs persisting)
        completion_changed: Whether the active day's completed flag flipped
        advanced_days: How many new workout days were appended
        finished_day: Snapshot of the day closed by advance_day()
        jokers_consumed: Banked charges spent to cover missed days
        streak_reset: Whether a missed day without charges reset the streak
    """

    changed: bool = False
    completion_changed: bool = False
    advanced_days: int = 0
    finished_day: WorkoutDayData | None = None
    jokers_consumed: int = 0
    streak_reset: bool = False

    @property
    def advanced(self) -> bool:
        """Return True if at least one new day was created."""
        return self.advanced_days > 0


# =============================================================================
# PROGRESS ENGINE
# =============================================================================


class ProgressEngine:
    """Pure logic engine for the UserProgress aggregate.

    All methods are static - no instance state.

    Invariants maintained:
    - days is non-empty, day numbers run 1..n without gaps
    - currentDay equals the last day's number
    - jokerUsed implies completed
    """

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @staticmethod
    def get_target_for_day(
        day_number: int, schedule: Sequence[int] = const.WORKOUT_SCHEDULE
    ) -> int:
        """Return the repetition target for a program day.

        Days past the end of the schedule hold the last scheduled target.
        """
        index = min(max(day_number, 1), len(schedule)) - 1
        return schedule[index]

    @staticmethod
    def build_workout_day(day_number: int, day_date: date) -> WorkoutDayData:
        """Build a fresh, not-yet-completed workout day."""
        return {
            const.DATA_DAY_NUMBER: day_number,
            const.DATA_DAY_TARGET: ProgressEngine.get_target_for_day(day_number),
            const.DATA_DAY_COMPLETED: False,
            const.DATA_DAY_ACTUAL: 0,
            const.DATA_DAY_JOKER_USED: False,
            const.DATA_DAY_DATE: dt_to_iso_date(day_date),
        }  # type: ignore[return-value]

    @staticmethod
    def create_initial_progress(today: date) -> UserProgressData:
        """Create the first-run progress record with a single day-1 entry."""
        return {
            const.DATA_CURRENT_DAY: const.DEFAULT_STARTING_DAY,
            const.DATA_STREAK: const.DEFAULT_ZERO,
            const.DATA_LEVEL: const.DEFAULT_STARTING_LEVEL,
            const.DATA_LEVEL_PROGRESS: const.DEFAULT_ZERO,
            const.DATA_DAYS: [
                ProgressEngine.build_workout_day(const.DEFAULT_STARTING_DAY, today)
            ],
        }  # type: ignore[return-value]

    # =========================================================================
    # QUERIES
    # =========================================================================

    @staticmethod
    def get_day(progress: UserProgressData, day_number: int) -> WorkoutDayData | None:
        """Return the day with the given number, or None."""
        for day in progress[const.DATA_DAYS]:
            if day[const.DATA_DAY_NUMBER] == day_number:
                return day
        return None

    @staticmethod
    def get_active_day(progress: UserProgressData) -> WorkoutDayData | None:
        """Return the day matching currentDay, or None if it is missing."""
        return ProgressEngine.get_day(progress, progress[const.DATA_CURRENT_DAY])

    @staticmethod
    def count_completed_days(progress: UserProgressData) -> int:
        """Return how many days are completed."""
        return GamificationEngine.count_completed_days(progress[const.DATA_DAYS])

    @staticmethod
    def find_available_jokers(progress: UserProgressData) -> list[WorkoutDayData]:
        """Return the days holding an unspent streak charge, earliest first."""
        return sorted(
            (
                day
                for day in progress[const.DATA_DAYS]
                if day[const.DATA_DAY_COMPLETED] and not day[const.DATA_DAY_JOKER_USED]
            ),
            key=lambda day: day[const.DATA_DAY_NUMBER],
        )

    @staticmethod
    def count_available_jokers(progress: UserProgressData) -> int:
        """Return how many streak charges are banked."""
        return len(ProgressEngine.find_available_jokers(progress))

    @staticmethod
    def navigate_to(
        progress: UserProgressData, day_number: int
    ) -> WorkoutDayData | None:
        """Select an existing day for display.

        Read-only. Returns None when the day does not exist or lies after
        the active day.
        """
        if day_number > progress[const.DATA_CURRENT_DAY]:
            return None
        return ProgressEngine.get_day(progress, day_number)

    # =========================================================================
    # INTERNAL HELPERS
    # =========================================================================

    @staticmethod
    def _apply_streak_change(progress: UserProgressData, completed: bool) -> None:
        """Grow the streak on completion, shrink it (floored at 0) otherwise."""
        if completed:
            progress[const.DATA_STREAK] = progress[const.DATA_STREAK] + 1
        else:
            progress[const.DATA_STREAK] = max(0, progress[const.DATA_STREAK] - 1)

    @staticmethod
    def _apply_level(progress: UserProgressData) -> None:
        """Recompute level and levelProgress from the completed-day count."""
        result = GamificationEngine.calculate_level_progress(
            ProgressEngine.count_completed_days(progress)
        )
        progress[const.DATA_LEVEL] = result[const.DATA_LEVEL_RESULT_LEVEL]
        progress[const.DATA_LEVEL_PROGRESS] = result[const.DATA_LEVEL_RESULT_PROGRESS]

    @staticmethod
    def _append_next_day(progress: UserProgressData, day_date: date) -> WorkoutDayData:
        """Append the day after currentDay and make it active."""
        next_day = ProgressEngine.build_workout_day(
            progress[const.DATA_CURRENT_DAY] + 1, day_date
        )
        progress[const.DATA_DAYS].append(next_day)
        progress[const.DATA_CURRENT_DAY] = next_day[const.DATA_DAY_NUMBER]
        return next_day

    # =========================================================================
    # USER INTENTS
    # =========================================================================

    @staticmethod
    def record_count(progress: UserProgressData, count: int) -> ProgressTransition:
        """Log the repetition count for the active day.

        Completion is recomputed from the count unless a joker backs the day:
        count >= target completes it, count < target un-completes it. A
        joker-backed day keeps its completion regardless of the count.
        """
        active = ProgressEngine.get_active_day(progress)
        if active is None:
            return ProgressTransition()

        was_completed = active[const.DATA_DAY_COMPLETED]
        active[const.DATA_DAY_ACTUAL] = count

        if not active[const.DATA_DAY_JOKER_USED]:
            active[const.DATA_DAY_COMPLETED] = count >= active[const.DATA_DAY_TARGET]

        result = ProgressTransition(changed=True)
        if active[const.DATA_DAY_COMPLETED] != was_completed:
            result.completion_changed = True
            ProgressEngine._apply_streak_change(
                progress, active[const.DATA_DAY_COMPLETED]
            )
            ProgressEngine._apply_level(progress)
        return result

    @staticmethod
    def toggle_completed(progress: UserProgressData) -> ProgressTransition:
        """Flip the active day's completion manually.

        Locked while a joker backs the day. Completing raises actual to at
        least the target; un-completing clears actual.
        """
        active = ProgressEngine.get_active_day(progress)
        if active is None or active[const.DATA_DAY_JOKER_USED]:
            return ProgressTransition()

        completed = not active[const.DATA_DAY_COMPLETED]
        active[const.DATA_DAY_COMPLETED] = completed
        if completed:
            active[const.DATA_DAY_ACTUAL] = max(
                active[const.DATA_DAY_ACTUAL], active[const.DATA_DAY_TARGET]
            )
        else:
            active[const.DATA_DAY_ACTUAL] = 0

        ProgressEngine._apply_streak_change(progress, completed)
        ProgressEngine._apply_level(progress)
        return ProgressTransition(changed=True, completion_changed=True)

    @staticmethod
    def toggle_joker(progress: UserProgressData) -> ProgressTransition:
        """Spend or refund a joker on the active day.

        Turning a joker on completes the day without growing the streak and
        keeps logged reps. Turning it off clears completion and reps and
        takes one off the streak (floored at 0). Level is not recomputed.
        """
        active = ProgressEngine.get_active_day(progress)
        if active is None:
            return ProgressTransition()

        was_completed = active[const.DATA_DAY_COMPLETED]
        joker_on = not active[const.DATA_DAY_JOKER_USED]
        active[const.DATA_DAY_JOKER_USED] = joker_on

        if joker_on:
            active[const.DATA_DAY_COMPLETED] = True
        else:
            active[const.DATA_DAY_COMPLETED] = False
            active[const.DATA_DAY_ACTUAL] = 0
            ProgressEngine._apply_streak_change(progress, False)

        return ProgressTransition(
            changed=True,
            completion_changed=active[const.DATA_DAY_COMPLETED] != was_completed,
        )

    @staticmethod
    def advance_day(progress: UserProgressData, today: date) -> ProgressTransition:
        """Close the completed active day and open the next one.

        No-op unless the active day is completed. The new day is dated today.
        """
        active = ProgressEngine.get_active_day(progress)
        if active is None or not active[const.DATA_DAY_COMPLETED]:
            return ProgressTransition()

        finished_day = copy.deepcopy(active)
        ProgressEngine._append_next_day(progress, today)
        return ProgressTransition(
            changed=True, advanced_days=1, finished_day=finished_day
        )

    # =========================================================================
    # LOAD-TIME CATCH-UP
    # =========================================================================

    @staticmethod
    def reconcile_elapsed_time(
        progress: UserProgressData, today: date
    ) -> ProgressTransition:
        """Catch up on calendar days that passed since the active day's date.

        Every elapsed day is settled in order:
        - a completed active day advances to the next day
        - a missed active day spends the earliest banked joker, is marked
          completed + jokerUsed, and advances
        - a missed active day with no joker left resets streak and
          levelProgress to 0 (level is kept), re-dates the active day to
          today and stops

        New days are dated one day after their predecessor, so a fully
        covered gap leaves the active day dated today.
        """
        result = ProgressTransition()
        active = ProgressEngine.get_active_day(progress)
        if active is None:
            return result

        active_date = dt_parse_date(active[const.DATA_DAY_DATE])
        if active_date is None:
            const.LOGGER.warning(
                "WARNING: Active day %s has an unreadable date '%s'; re-dating to %s",
                active[const.DATA_DAY_NUMBER],
                active[const.DATA_DAY_DATE],
                today,
            )
            active[const.DATA_DAY_DATE] = dt_to_iso_date(today)
            result.changed = True
            return result

        days_difference = dt_days_between(active_date, today)
        if days_difference <= 0:
            return result

        result.changed = True
        for _ in range(days_difference):
            active = ProgressEngine.get_active_day(progress)
            if active is None:
                break
            next_date = dt_add_days(active_date, 1)

            if not active[const.DATA_DAY_COMPLETED]:
                available = ProgressEngine.find_available_jokers(progress)
                if not available:
                    progress[const.DATA_STREAK] = 0
                    progress[const.DATA_LEVEL_PROGRESS] = 0
                    active[const.DATA_DAY_DATE] = dt_to_iso_date(today)
                    result.streak_reset = True
                    break

                available[0][const.DATA_DAY_JOKER_USED] = True
                active[const.DATA_DAY_COMPLETED] = True
                active[const.DATA_DAY_JOKER_USED] = True
                result.jokers_consumed += 1

            ProgressEngine._append_next_day(progress, next_date)
            result.advanced_days += 1
            active_date = next_date

        return result
