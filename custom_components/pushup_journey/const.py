# File: const.py
"""Constants for the Push-up Journey integration.

This file centralizes configuration keys, defaults, storage field names,
program definitions (workout schedule, level thresholds, achievements),
service names and notification texts used across the integration.
"""

import logging

from homeassistant.const import Platform

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
PUSHUP_JOURNEY_TITLE = "Push-up Journey"

# Integration Domain
DOMAIN = "pushup_journey"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORAGE_MANAGER = "store"
STORAGE_KEY = "pushup_journey_data"
STORAGE_KEY_NOTIFICATION_SETTINGS = "pushup_journey_notification_settings"
STORAGE_VERSION = 1

# Export / backup files
EXPORT_DIRECTORY = "pushup_journey"
EXPORT_FILENAME_FMT = "pushup-journey-export-{date}.json"
BACKUP_FILENAME_FMT = "{key}_{timestamp}_{tag}"
BACKUP_TAG_RESET = "reset"
BACKUP_TAG_IMPORT = "pre-import"

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------
CONF_NOTIFY_SERVICE = "notify_service"

DEFAULT_NOTIFY_SERVICE = ""

CONFIG_FLOW_STEP_USER = "user"

# ------------------------------------------------------------------------------------------------
# Data Keys (persisted field names - kept compatible with exported JSON)
# ------------------------------------------------------------------------------------------------

# UserProgress
DATA_CURRENT_DAY = "currentDay"
DATA_STREAK = "streak"
DATA_LEVEL = "level"
DATA_LEVEL_PROGRESS = "levelProgress"
DATA_DAYS = "days"

# WorkoutDay
DATA_DAY_NUMBER = "day"
DATA_DAY_TARGET = "target"
DATA_DAY_COMPLETED = "completed"
DATA_DAY_ACTUAL = "actual"
DATA_DAY_JOKER_USED = "jokerUsed"
DATA_DAY_DATE = "date"

# Notification settings
DATA_NOTIF_STREAK_ENABLED = "streakEnabled"
DATA_NOTIF_ACHIEVEMENT_ENABLED = "achievementEnabled"
DATA_NOTIF_TIMES = "notificationTimes"
DATA_NOTIF_DAYS_ENABLED = "daysEnabled"

# Achievement status
DATA_ACHIEVEMENT_ID = "id"
DATA_ACHIEVEMENT_NAME = "name"
DATA_ACHIEVEMENT_DESCRIPTION = "description"
DATA_ACHIEVEMENT_ICON = "icon"
DATA_ACHIEVEMENT_UNLOCKED = "unlocked"

# Level progress result
DATA_LEVEL_RESULT_LEVEL = "level"
DATA_LEVEL_RESULT_PROGRESS = "progress"

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_ZERO = 0
DEFAULT_STARTING_DAY = 1
DEFAULT_STARTING_LEVEL = 1

DEFAULT_STREAK_ENABLED = True
DEFAULT_ACHIEVEMENT_ENABLED = True
DEFAULT_NOTIFICATION_TIMES = ["18:00", "21:00"]
# 0 = Sunday ... 6 = Saturday
DEFAULT_DAYS_ENABLED = [0, 1, 2, 3, 4, 5, 6]

# ------------------------------------------------------------------------------------------------
# Program Definition
# ------------------------------------------------------------------------------------------------

# Daily repetition targets, indexed by program day (day 1 = index 0).
# Days past the end of the schedule hold the last target.
WORKOUT_SCHEDULE: list[int] = [
    5, 6, 7, 8, 9,  # Week 1
    10, 12, 14, 16, 18,  # Week 2
    20, 22, 24, 26, 28,  # Week 3
    30, 32, 34, 36, 38,  # Week 4
    40, 42, 44, 46, 48,  # Week 5
    50, 52, 54, 56, 58,  # Week 6
    60, 62, 64, 66, 68,  # Week 7
    70, 72, 74, 76, 78,  # Week 8
    80, 85, 90, 95, 100,  # Week 9
]  # fmt: skip

# Completed-day count at which each level begins (level 1 starts at 0).
LEVEL_THRESHOLDS: list[int] = [0, 10, 20, 30, 40]

LEVEL_BEGINNER = 1
LEVEL_AMATEUR = 2
LEVEL_INTERMEDIATE = 3
LEVEL_ADVANCED = 4
LEVEL_MASTER = 5

LEVEL_NAMES: dict[int, str] = {
    LEVEL_BEGINNER: "Beginner",
    LEVEL_AMATEUR: "Amateur",
    LEVEL_INTERMEDIATE: "Intermediate",
    LEVEL_ADVANCED: "Advanced",
    LEVEL_MASTER: "Master",
}

MAX_LEVEL = len(LEVEL_THRESHOLDS)

# ------------------------------------------------------------------------------------------------
# Achievements
# ------------------------------------------------------------------------------------------------
ACHIEVEMENT_FIRST_DAY = "first_day"
ACHIEVEMENT_WEEK_STREAK = "week_streak"
ACHIEVEMENT_LEVEL_UP = "level_up"
ACHIEVEMENT_HALFWAY = "halfway"
ACHIEVEMENT_NO_JOKER = "no_joker"
ACHIEVEMENT_MASTER = "master"

ACHIEVEMENT_FIRST_DAY_COMPLETED_DAYS = 1
ACHIEVEMENT_WEEK_STREAK_DAYS = 7
ACHIEVEMENT_LEVEL_UP_LEVEL = LEVEL_AMATEUR
ACHIEVEMENT_HALFWAY_COMPLETED_DAYS = 25
ACHIEVEMENT_PERFECT_WEEK_DAYS = 7
ACHIEVEMENT_MASTER_LEVEL = MAX_LEVEL

# Ordered catalogue - derive_achievements() returns entries in this order.
ACHIEVEMENT_DEFINITIONS: list[dict[str, str]] = [
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_FIRST_DAY,
        DATA_ACHIEVEMENT_NAME: "First Step",
        DATA_ACHIEVEMENT_DESCRIPTION: "Complete your first day",
        DATA_ACHIEVEMENT_ICON: "🥇",
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_WEEK_STREAK,
        DATA_ACHIEVEMENT_NAME: "Weekly Warrior",
        DATA_ACHIEVEMENT_DESCRIPTION: "Complete 7 days in a row",
        DATA_ACHIEVEMENT_ICON: "🔥",
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_LEVEL_UP,
        DATA_ACHIEVEMENT_NAME: "Level Up",
        DATA_ACHIEVEMENT_DESCRIPTION: "Reach Amateur level",
        DATA_ACHIEVEMENT_ICON: "⬆️",
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_HALFWAY,
        DATA_ACHIEVEMENT_NAME: "Halfway There",
        DATA_ACHIEVEMENT_DESCRIPTION: "Complete 25 days",
        DATA_ACHIEVEMENT_ICON: "🏃",
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_NO_JOKER,
        DATA_ACHIEVEMENT_NAME: "Perfect Week",
        DATA_ACHIEVEMENT_DESCRIPTION: "Complete a week without using jokers",
        DATA_ACHIEVEMENT_ICON: "✨",
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_MASTER,
        DATA_ACHIEVEMENT_NAME: "Push-up Master",
        DATA_ACHIEVEMENT_DESCRIPTION: "Reach Master level",
        DATA_ACHIEVEMENT_ICON: "👑",
    },
]

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_ADVANCE_DAY = "advance_day"
SERVICE_EXPORT_PROGRESS = "export_progress"
SERVICE_IMPORT_PROGRESS = "import_progress"
SERVICE_NAVIGATE_TO_DAY = "navigate_to_day"
SERVICE_RESET_ALL_DATA = "reset_all_data"
SERVICE_SET_COUNT = "set_count"
SERVICE_TOGGLE_COMPLETED = "toggle_completed"
SERVICE_TOGGLE_JOKER = "toggle_joker"
SERVICE_UPDATE_NOTIFICATION_SETTINGS = "update_notification_settings"

# Service fields
FIELD_ACHIEVEMENT_ENABLED = "achievement_enabled"
FIELD_COUNT = "count"
FIELD_DAY = "day"
FIELD_DAYS_ENABLED = "days_enabled"
FIELD_JSON_DATA = "json_data"
FIELD_NOTIFICATION_TIMES = "notification_times"
FIELD_STREAK_ENABLED = "streak_enabled"

# Service response keys
RESPONSE_DATA = "data"
RESPONSE_PATH = "path"

# ------------------------------------------------------------------------------------------------
# Notifications
# ------------------------------------------------------------------------------------------------
NOTIFY_CREATE = "create"
NOTIFY_DOMAIN = "notify"
NOTIFY_MESSAGE = "message"
NOTIFY_NOTIFICATION_ID = "notification_id"
NOTIFY_PERSISTENT_NOTIFICATION = "persistent_notification"
NOTIFY_TITLE = "title"
DISPLAY_DOT = "."

NOTIFICATION_ID_PREFIX = "pushup_journey_"
NOTIFICATION_ID_ACHIEVEMENT = "achievement"
NOTIFICATION_ID_DAY_COMPLETED = "day_completed"
NOTIFICATION_ID_REMINDER = "reminder"
NOTIFICATION_ID_STREAK = "streak"

NOTIF_TITLE_DAY_COMPLETED = "Day Completed! 🎉"
NOTIF_MESSAGE_DAY_COMPLETED = (
    "Great job completing Day {day}! You've done {actual} push-ups today."
)
NOTIF_TITLE_STREAK_SAVED = "Streak Saved! 🃏"
NOTIF_MESSAGE_STREAK_SAVED = (
    "We used {count} of your streak charges to maintain your streak."
)
NOTIF_TITLE_STREAK_RESET = "Streak Reset 😢"
NOTIF_MESSAGE_STREAK_RESET = (
    "Your streak has been reset because you missed a day and had no streak "
    "charges left."
)
NOTIF_TITLE_ACHIEVEMENT_FMT = "Achievement Unlocked: {name}"
NOTIF_TITLE_REMINDER = "Push-up Journey Reminder"
NOTIF_MESSAGE_REMINDER = "Don't forget to complete your daily push-ups!"

# ------------------------------------------------------------------------------------------------
# Sensors
# ------------------------------------------------------------------------------------------------
SENSOR_UID_SUFFIX_ACHIEVEMENTS = "_achievements"
SENSOR_UID_SUFFIX_AVAILABLE_JOKERS = "_available_jokers"
SENSOR_UID_SUFFIX_CURRENT_DAY = "_current_day"
SENSOR_UID_SUFFIX_LEVEL = "_level"
SENSOR_UID_SUFFIX_LEVEL_PROGRESS = "_level_progress"
SENSOR_UID_SUFFIX_SELECTED_DAY = "_selected_day"
SENSOR_UID_SUFFIX_STREAK = "_streak"

TRANS_KEY_SENSOR_ACHIEVEMENTS = "achievements"
TRANS_KEY_SENSOR_AVAILABLE_JOKERS = "available_jokers"
TRANS_KEY_SENSOR_CURRENT_DAY = "current_day"
TRANS_KEY_SENSOR_LEVEL = "level"
TRANS_KEY_SENSOR_LEVEL_PROGRESS = "level_progress"
TRANS_KEY_SENSOR_SELECTED_DAY = "selected_day"
TRANS_KEY_SENSOR_STREAK = "streak"

# Sensor attributes
ATTR_ACHIEVEMENTS = "achievements"
ATTR_ACTUAL = "actual"
ATTR_COMPLETED = "completed"
ATTR_COMPLETED_DAYS = "completed_days"
ATTR_DATE = "date"
ATTR_DAY = "day"
ATTR_IS_ACTIVE_DAY = "is_active_day"
ATTR_JOKER_USED = "joker_used"
ATTR_LEVEL_NAME = "level_name"
ATTR_NEXT_LEVEL = "next_level"
ATTR_TARGET = "target"
ATTR_TOTAL_ACHIEVEMENTS = "total_achievements"

DEVICE_MANUFACTURER = "Push-up Journey"
DEVICE_MODEL = "Progress Tracker"

# ------------------------------------------------------------------------------------------------
# Errors
# ------------------------------------------------------------------------------------------------
TRANS_KEY_ERROR_SINGLE_INSTANCE = "single_instance_allowed"
TRANS_KEY_ERROR_INVALID_NOTIFY_SERVICE = "invalid_notify_service"

MSG_NO_ENTRY_FOUND = "No Push-up Journey entry found"
ERROR_DAY_NOT_AVAILABLE_FMT = "Day {0} is not available (current day is {1})"
ERROR_IMPORT_FAILED_FMT = "Failed to import progress: {0}"
ERROR_INVALID_TIME_FMT = "Invalid reminder time '{0}' (expected HH:MM)"
