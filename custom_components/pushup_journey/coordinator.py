# File: coordinator.py
"""Coordinator for the Push-up Journey integration.

Owns the live progress record. User intents (set count, toggle completion,
toggle joker, advance, navigate, import, reset) are applied through the pure
engines; the coordinator persists the result, refreshes the achievement
snapshot, dispatches notifications and pushes updates to the sensors.

Elapsed calendar days are reconciled on load and again at every local
midnight while Home Assistant keeps running.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from homeassistant.helpers.event import async_track_time_change
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator
from homeassistant.util import dt as dt_util

from . import const
from .engines import GamificationEngine, ProgressEngine, ProgressTransition
from .helpers import backup_helpers

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

    from .managers import NotificationManager
    from .store import PushupJourneyStore
    from .type_defs import AchievementStatus, UserProgressData, WorkoutDayData


class PushupJourneyCoordinator(DataUpdateCoordinator["UserProgressData"]):
    """Coordinator for Push-up Journey integration.

    The progress dict held by the store is the single live copy; engines
    mutate it in place.
    """

    config_entry: ConfigEntry

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        store: PushupJourneyStore,
        notification_manager: NotificationManager,
    ) -> None:
        """Initialize the PushupJourneyCoordinator."""
        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=None,
        )
        self.store = store
        self.notification_manager = notification_manager
        self.selected_day: int = const.DEFAULT_STARTING_DAY
        self._achievements: list[AchievementStatus] = []

    # -------------------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------------------

    @property
    def progress(self) -> UserProgressData:
        """Return the live progress record."""
        return self.store.data

    @property
    def achievements(self) -> list[AchievementStatus]:
        """Return the last derived achievement set."""
        return self._achievements

    @property
    def active_day(self) -> WorkoutDayData | None:
        """Return the day the user is currently working on."""
        return ProgressEngine.get_active_day(self.progress)

    @property
    def selected_day_data(self) -> WorkoutDayData | None:
        """Return the day currently selected for display."""
        return ProgressEngine.get_day(self.progress, self.selected_day)

    @property
    def available_jokers(self) -> int:
        """Return the number of banked streak charges."""
        return ProgressEngine.count_available_jokers(self.progress)

    @property
    def completed_days(self) -> int:
        """Return the number of completed days."""
        return ProgressEngine.count_completed_days(self.progress)

    # -------------------------------------------------------------------------------------
    # Update + First Refresh
    # -------------------------------------------------------------------------------------

    def _today(self) -> date:
        """Return today's local date."""
        return dt_util.now().date()

    async def _async_update_data(self) -> UserProgressData:
        """Return the in-memory progress (no polling)."""
        return self.progress

    async def async_config_entry_first_refresh(self) -> None:
        """Reconcile elapsed days and register the midnight listener."""
        self._achievements = GamificationEngine.derive_achievements(self.progress)
        self.reconcile_elapsed_time(self._today())
        self.selected_day = self.progress[const.DATA_CURRENT_DAY]

        self.config_entry.async_on_unload(
            async_track_time_change(
                self.hass, self._async_handle_midnight, hour=0, minute=0, second=0
            )
        )
        await super().async_config_entry_first_refresh()

    async def _async_handle_midnight(self, now: datetime) -> None:
        """Reconcile the day that just ended."""
        const.LOGGER.debug("DEBUG: Midnight reconcile triggered at %s", now)
        self.reconcile_elapsed_time(dt_util.as_local(now).date())

    # -------------------------------------------------------------------------------------
    # Persistence / refresh helpers
    # -------------------------------------------------------------------------------------

    def _persist(self) -> None:
        """Save to persistent storage."""
        self.hass.add_job(self.store.async_save)

    def _persist_and_update(self) -> None:
        """Save and push the new state to listening entities."""
        self._persist()
        self.async_set_updated_data(self.progress)

    def _refresh_achievements(self, notify: bool = True) -> list[AchievementStatus]:
        """Re-derive achievements and announce the newly unlocked ones."""
        current = GamificationEngine.derive_achievements(self.progress)
        newly_unlocked = GamificationEngine.find_newly_unlocked(
            self._achievements, current
        )
        self._achievements = current
        if newly_unlocked:
            const.LOGGER.info(
                "INFO: Achievements unlocked: %s",
                [entry[const.DATA_ACHIEVEMENT_ID] for entry in newly_unlocked],
            )
            if notify:
                self.notification_manager.notify_achievements_unlocked(newly_unlocked)
        return newly_unlocked

    # -------------------------------------------------------------------------------------
    # User intents
    # -------------------------------------------------------------------------------------

    def record_count(self, count: int) -> ProgressTransition:
        """Log the repetition count for the active day."""
        result = ProgressEngine.record_count(self.progress, count)
        if result.changed:
            const.LOGGER.debug(
                "DEBUG: Recorded %s reps for day %s (completed changed: %s)",
                count,
                self.progress[const.DATA_CURRENT_DAY],
                result.completion_changed,
            )
            self._persist_and_update()
        return result

    def toggle_completed(self) -> ProgressTransition:
        """Flip completion of the active day."""
        result = ProgressEngine.toggle_completed(self.progress)
        if result.changed:
            self._persist_and_update()
        else:
            const.LOGGER.debug(
                "DEBUG: Toggle completed ignored for day %s (joker in use)",
                self.progress[const.DATA_CURRENT_DAY],
            )
        return result

    def toggle_joker(self) -> ProgressTransition:
        """Spend or refund a joker on the active day."""
        result = ProgressEngine.toggle_joker(self.progress)
        if result.changed:
            self._persist_and_update()
        return result

    def advance_day(self) -> ProgressTransition:
        """Close the completed active day and open the next one."""
        result = ProgressEngine.advance_day(self.progress, self._today())
        if not result.advanced:
            const.LOGGER.debug(
                "DEBUG: Advance ignored, day %s is not completed",
                self.progress[const.DATA_CURRENT_DAY],
            )
            return result

        const.LOGGER.info(
            "INFO: Advanced to day %s", self.progress[const.DATA_CURRENT_DAY]
        )
        self.selected_day = self.progress[const.DATA_CURRENT_DAY]
        self._refresh_achievements()
        if result.finished_day is not None:
            self.notification_manager.notify_day_completed(result.finished_day)
        self._persist_and_update()
        return result

    def navigate_to_day(self, day_number: int) -> WorkoutDayData | None:
        """Select a past or active day for display.

        Returns:
            The selected day, or None if the day is not available.
        """
        day = ProgressEngine.navigate_to(self.progress, day_number)
        if day is None:
            return None
        self.selected_day = day_number
        self.async_update_listeners()
        return day

    def reconcile_elapsed_time(self, today: date) -> ProgressTransition:
        """Catch up on calendar days that passed since the active day's date."""
        result = ProgressEngine.reconcile_elapsed_time(self.progress, today)
        if not result.changed:
            return result

        if result.advanced:
            const.LOGGER.info(
                "INFO: Reconciled %s elapsed day(s), now on day %s (%s joker(s) used)",
                result.advanced_days,
                self.progress[const.DATA_CURRENT_DAY],
                result.jokers_consumed,
            )
            self.selected_day = self.progress[const.DATA_CURRENT_DAY]
            self._refresh_achievements()
        if result.jokers_consumed:
            self.notification_manager.notify_streak_saved(result.jokers_consumed)
        if result.streak_reset:
            const.LOGGER.info(
                "INFO: Missed day %s with no streak charges left, streak reset",
                self.progress[const.DATA_CURRENT_DAY],
            )
            self.notification_manager.notify_streak_reset()

        self._persist_and_update()
        return result

    # -------------------------------------------------------------------------------------
    # Data management
    # -------------------------------------------------------------------------------------

    async def async_export_progress(self) -> tuple[str, str]:
        """Write an export file and return (path, json text)."""
        return await backup_helpers.async_write_export_file(
            self.hass, self.progress, self._today()
        )

    async def async_import_progress(self, json_str: str) -> None:
        """Replace progress with an imported export.

        Raises:
            InvalidProgressDataError: If the payload is rejected. Nothing is
                changed in that case.
        """
        imported = backup_helpers.parse_progress_json(json_str)
        try:
            achievements = GamificationEngine.derive_achievements(imported)
        except (KeyError, TypeError, AttributeError) as err:
            raise backup_helpers.InvalidProgressDataError(
                f"Malformed workout day entry: {err}"
            ) from err

        await backup_helpers.create_timestamped_backup(
            self.hass, self.store, const.BACKUP_TAG_IMPORT
        )
        self.store.set_data(imported)
        self.selected_day = imported[const.DATA_CURRENT_DAY]
        self._achievements = achievements
        await self.store.async_save()
        self.async_set_updated_data(self.progress)
        const.LOGGER.info(
            "INFO: Imported progress at day %s with %s days",
            imported[const.DATA_CURRENT_DAY],
            len(imported[const.DATA_DAYS]),
        )

    async def async_reset_all_data(self) -> None:
        """Wipe progress and notification settings, starting over at day 1."""
        await backup_helpers.create_timestamped_backup(
            self.hass, self.store, const.BACKUP_TAG_RESET
        )
        await self.store.async_clear_data(self._today())
        self.notification_manager.async_schedule_reminders()
        self.selected_day = self.progress[const.DATA_CURRENT_DAY]
        self._achievements = GamificationEngine.derive_achievements(self.progress)
        self.async_set_updated_data(self.progress)
