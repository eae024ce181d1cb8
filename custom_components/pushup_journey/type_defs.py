"""Type definitions for Push-up Journey data structures.

TypedDicts describe the fixed-key structures that are persisted or handed
between the engines and the coordinator. Key names match the persisted JSON
(camelCase) so exported files stay compatible with earlier exports, which is
why the dict literals in the engines use the const.DATA_* names.

IMPORTANT: This file must NOT import from coordinator.py or any module that
imports the coordinator, to avoid circular dependencies.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime validation of imported data
lives in helpers/backup_helpers.py.
"""

from typing import TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

ISODate = str  # ISO 8601 date string (no time) "2026-01-18"
ReminderTime = str  # "HH:MM"


# =============================================================================
# Persisted Structures
# =============================================================================


# Keys are camelCase to match the persisted/exported format, so the
# functional TypedDict syntax is used for the two mixed-case fields.
WorkoutDayData = TypedDict(
    "WorkoutDayData",
    {
        "day": int,
        "target": int,
        "completed": bool,
        "actual": int,
        "jokerUsed": bool,
        "date": ISODate,
    },
)


UserProgressData = TypedDict(
    "UserProgressData",
    {
        "currentDay": int,
        "streak": int,
        "level": int,
        "levelProgress": int,
        "days": list[WorkoutDayData],
    },
)


NotificationSettingsData = TypedDict(
    "NotificationSettingsData",
    {
        "streakEnabled": bool,
        "achievementEnabled": bool,
        "notificationTimes": list[ReminderTime],
        "daysEnabled": list[int],  # 0 = Sunday ... 6 = Saturday
    },
)


# =============================================================================
# Derived Structures
# =============================================================================


class LevelProgress(TypedDict):
    """Result of GamificationEngine.calculate_level_progress()."""

    level: int
    progress: int  # 0-100


class AchievementStatus(TypedDict):
    """One entry of the ordered achievement set."""

    id: str
    name: str
    description: str
    icon: str
    unlocked: bool
