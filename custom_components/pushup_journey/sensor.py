# File: sensor.py
"""Sensors for the Push-up Journey integration.

All sensors belong to one device and read from the coordinator:

1. CurrentDaySensor - active program day with its target/actual/completion
2. SelectedDaySensor - day picked via navigate_to_day (history view)
3. StreakSensor - consecutive days maintained
4. LevelSensor - current level with level name
5. LevelProgressSensor - percent progress toward the next level
6. AvailableJokersSensor - banked streak charges
7. AchievementsSensor - unlocked count, full ordered set as attributes
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.const import PERCENTAGE

from . import const
from .engines import GamificationEngine
from .entity import PushupJourneyCoordinatorEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import PushupJourneyCoordinator
    from .type_defs import WorkoutDayData


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up sensors for Push-up Journey integration."""
    coordinator: PushupJourneyCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    async_add_entities(
        [
            CurrentDaySensor(coordinator, entry),
            SelectedDaySensor(coordinator, entry),
            StreakSensor(coordinator, entry),
            LevelSensor(coordinator, entry),
            LevelProgressSensor(coordinator, entry),
            AvailableJokersSensor(coordinator, entry),
            AchievementsSensor(coordinator, entry),
        ]
    )


def _day_attributes(day: WorkoutDayData | None) -> dict[str, Any]:
    """Flatten a workout day into sensor attributes."""
    if day is None:
        return {}
    return {
        const.ATTR_DAY: day[const.DATA_DAY_NUMBER],
        const.ATTR_TARGET: day[const.DATA_DAY_TARGET],
        const.ATTR_ACTUAL: day[const.DATA_DAY_ACTUAL],
        const.ATTR_COMPLETED: day[const.DATA_DAY_COMPLETED],
        const.ATTR_JOKER_USED: day[const.DATA_DAY_JOKER_USED],
        const.ATTR_DATE: day[const.DATA_DAY_DATE],
    }


# ------------------------------------------------------------------------------------------
class CurrentDaySensor(PushupJourneyCoordinatorEntity, SensorEntity):
    """Sensor for the active program day.

    State is the day number; attributes carry the day's target, logged reps,
    completion and joker flags so a dashboard can render the workout card.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_CURRENT_DAY
    _attr_icon = "mdi:calendar-today"

    def __init__(self, coordinator: PushupJourneyCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_CURRENT_DAY)

    @property
    def native_value(self) -> int:
        """Return the active day number."""
        return self.coordinator.progress[const.DATA_CURRENT_DAY]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the active day's details."""
        return _day_attributes(self.coordinator.active_day)


# ------------------------------------------------------------------------------------------
class SelectedDaySensor(PushupJourneyCoordinatorEntity, SensorEntity):
    """Sensor for the day currently selected in the history view."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_SELECTED_DAY
    _attr_icon = "mdi:calendar-search"

    def __init__(self, coordinator: PushupJourneyCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_SELECTED_DAY)

    @property
    def native_value(self) -> int:
        """Return the selected day number."""
        return self.coordinator.selected_day

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the selected day's details."""
        attributes = _day_attributes(self.coordinator.selected_day_data)
        attributes[const.ATTR_IS_ACTIVE_DAY] = (
            self.coordinator.selected_day
            == self.coordinator.progress[const.DATA_CURRENT_DAY]
        )
        return attributes


# ------------------------------------------------------------------------------------------
class StreakSensor(PushupJourneyCoordinatorEntity, SensorEntity):
    """Sensor for the current streak."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_STREAK
    _attr_icon = "mdi:fire"
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, coordinator: PushupJourneyCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_STREAK)

    @property
    def native_value(self) -> int:
        """Return the streak."""
        return self.coordinator.progress[const.DATA_STREAK]


# ------------------------------------------------------------------------------------------
class LevelSensor(PushupJourneyCoordinatorEntity, SensorEntity):
    """Sensor for the current level (1 = Beginner ... 5 = Master)."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_LEVEL
    _attr_icon = "mdi:stairs-up"

    def __init__(self, coordinator: PushupJourneyCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_LEVEL)

    @property
    def native_value(self) -> int:
        """Return the level."""
        return self.coordinator.progress[const.DATA_LEVEL]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the level name, next level name and completed-day count."""
        level = self.coordinator.progress[const.DATA_LEVEL]
        return {
            const.ATTR_LEVEL_NAME: GamificationEngine.get_level_name(level),
            const.ATTR_NEXT_LEVEL: (
                GamificationEngine.get_level_name(level + 1)
                if level < const.MAX_LEVEL
                else None
            ),
            const.ATTR_COMPLETED_DAYS: self.coordinator.completed_days,
        }


# ------------------------------------------------------------------------------------------
class LevelProgressSensor(PushupJourneyCoordinatorEntity, SensorEntity):
    """Sensor for progress toward the next level, in percent."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_LEVEL_PROGRESS
    _attr_icon = "mdi:progress-check"
    _attr_native_unit_of_measurement = PERCENTAGE
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, coordinator: PushupJourneyCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_LEVEL_PROGRESS)

    @property
    def native_value(self) -> int:
        """Return the level progress percentage."""
        return self.coordinator.progress[const.DATA_LEVEL_PROGRESS]


# ------------------------------------------------------------------------------------------
class AvailableJokersSensor(PushupJourneyCoordinatorEntity, SensorEntity):
    """Sensor for banked streak charges (completed days without a joker)."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_AVAILABLE_JOKERS
    _attr_icon = "mdi:cards-playing-outline"

    def __init__(self, coordinator: PushupJourneyCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_AVAILABLE_JOKERS)

    @property
    def native_value(self) -> int:
        """Return the number of available jokers."""
        return self.coordinator.available_jokers


# ------------------------------------------------------------------------------------------
class AchievementsSensor(PushupJourneyCoordinatorEntity, SensorEntity):
    """Sensor for unlocked achievements.

    State is the number unlocked. The full ordered set (locked and unlocked)
    is exposed as an attribute for dashboards.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_ACHIEVEMENTS
    _attr_icon = "mdi:trophy"

    def __init__(self, coordinator: PushupJourneyCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_ACHIEVEMENTS)

    @property
    def native_value(self) -> int:
        """Return the number of unlocked achievements."""
        return GamificationEngine.count_unlocked(self.coordinator.achievements)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the full achievement set."""
        achievements = self.coordinator.achievements
        return {
            const.ATTR_ACHIEVEMENTS: [dict(entry) for entry in achievements],
            const.ATTR_TOTAL_ACHIEVEMENTS: len(achievements),
        }
