# File: notification_manager.py
"""Notification Manager for Push-up Journey integration.

This manager handles all outgoing notification logic:
- Event notifications after progress transitions (day completed, streak
  saved, streak reset, achievement unlocked)
- Scheduled streak reminders at the configured HH:MM times
- Notification preference updates (merge, persist, reschedule)

Channel:
- The notify service configured on the config entry (e.g. notify.mobile_app_phone)
- A persistent notification when no notify service is configured

Delivery is fire-and-forget. A failed notification is logged and never
affects progress state or persistence.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from homeassistant.core import callback
from homeassistant.helpers.event import async_track_time_change
from homeassistant.util import dt as dt_util

from .. import const
from ..utils.dt_utils import dt_weekday_sunday_first, parse_reminder_time

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

    from ..store import PushupJourneyStore
    from ..type_defs import AchievementStatus, NotificationSettingsData, WorkoutDayData


# =============================================================================
# Module-level helper for testability
# =============================================================================


async def async_send_notification(
    hass: HomeAssistant,
    service: str,
    title: str,
    message: str,
    notification_id: str | None = None,
) -> None:
    """Send a notification via Home Assistant service call.

    This is a module-level function that can be easily mocked in tests.

    Args:
        hass: Home Assistant instance
        service: Notification service in format "notify.service_name" or just
            service name. Empty sends a persistent notification instead.
        title: Notification title
        message: Notification message
        notification_id: Persistent notification id (replaces an older one)
    """
    if not service:
        payload: dict[str, Any] = {
            const.NOTIFY_TITLE: title,
            const.NOTIFY_MESSAGE: message,
        }
        if notification_id:
            payload[const.NOTIFY_NOTIFICATION_ID] = notification_id
        const.LOGGER.debug(
            "async_send_notification: persistent - title='%s', message='%s'",
            title,
            message,
        )
        await hass.services.async_call(
            const.NOTIFY_PERSISTENT_NOTIFICATION,
            const.NOTIFY_CREATE,
            payload,
            blocking=True,
        )
        return

    if const.DISPLAY_DOT in service:
        domain, svc = service.split(const.DISPLAY_DOT, 1)
    else:
        domain = const.NOTIFY_DOMAIN
        svc = service

    const.LOGGER.debug(
        "async_send_notification: %s.%s - title='%s', message='%s'",
        domain,
        svc,
        title,
        message,
    )
    await hass.services.async_call(
        domain,
        svc,
        {const.NOTIFY_TITLE: title, const.NOTIFY_MESSAGE: message},
        blocking=True,
    )


class NotificationManager:
    """Manager for event notifications and scheduled streak reminders.

    Constructed in async_setup_entry and handed to the coordinator. Its
    reminder listeners live until the config entry unloads.
    """

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        store: PushupJourneyStore,
    ) -> None:
        """Initialize notification manager.

        Args:
            hass: Home Assistant instance
            config_entry: Entry holding the optional notify service
            store: Store holding the notification settings blob
        """
        self.hass = hass
        self.config_entry = config_entry
        self.store = store
        self._reminder_unsubs: list[Callable[[], None]] = []
        self._last_reminder_date: date | None = None

    @property
    def notify_service(self) -> str:
        """Return the configured notify service, or "" for persistent notifications."""
        if const.CONF_NOTIFY_SERVICE in self.config_entry.options:
            return self.config_entry.options[const.CONF_NOTIFY_SERVICE]
        return self.config_entry.data.get(
            const.CONF_NOTIFY_SERVICE, const.DEFAULT_NOTIFY_SERVICE
        )

    @property
    def settings(self) -> NotificationSettingsData:
        """Return the live notification settings."""
        return self.store.settings

    async def async_setup(self) -> None:
        """Start reminder listeners and tie their cleanup to the config entry."""
        self.async_schedule_reminders()
        self.config_entry.async_on_unload(self.async_shutdown)
        const.LOGGER.debug(
            "NotificationManager set up (channel: %s)",
            self.notify_service or const.NOTIFY_PERSISTENT_NOTIFICATION,
        )

    @callback
    def async_shutdown(self) -> None:
        """Cancel all reminder listeners."""
        for unsub in self._reminder_unsubs:
            unsub()
        self._reminder_unsubs.clear()

    # =========================================================================
    # Settings
    # =========================================================================

    async def async_update_settings(self, **changes: Any) -> NotificationSettingsData:
        """Merge setting changes, persist them and reschedule reminders.

        Args:
            **changes: Any subset of the persisted settings keys
                (streakEnabled, achievementEnabled, notificationTimes, daysEnabled)

        Returns:
            The merged settings.
        """
        merged = dict(self.settings)
        merged.update(
            {key: value for key, value in changes.items() if value is not None}
        )
        self.store.set_settings(merged)  # type: ignore[arg-type]
        await self.store.async_save_settings()
        self.async_schedule_reminders()
        const.LOGGER.info(
            "INFO: Notification settings updated: %s", sorted(changes.keys())
        )
        return self.settings

    # =========================================================================
    # Scheduled reminders
    # =========================================================================

    @callback
    def async_schedule_reminders(self) -> None:
        """(Re)create one time listener per configured reminder time."""
        self.async_shutdown()
        if not self.settings.get(const.DATA_NOTIF_STREAK_ENABLED):
            const.LOGGER.debug("Streak reminders disabled, no listeners scheduled")
            return

        for time_str in self.settings.get(const.DATA_NOTIF_TIMES, []):
            reminder_time = parse_reminder_time(time_str)
            if reminder_time is None:
                continue
            self._reminder_unsubs.append(
                async_track_time_change(
                    self.hass,
                    self._async_handle_reminder,
                    hour=reminder_time.hour,
                    minute=reminder_time.minute,
                    second=0,
                )
            )

        const.LOGGER.debug(
            "Scheduled %s streak reminder listener(s)", len(self._reminder_unsubs)
        )

    async def _async_handle_reminder(self, now: datetime) -> None:
        """Send the streak reminder if today is enabled and none was sent yet."""
        if not self.settings.get(const.DATA_NOTIF_STREAK_ENABLED):
            return

        today = dt_util.as_local(now).date()
        if self._last_reminder_date == today:
            return
        if dt_weekday_sunday_first(today) not in self.settings.get(
            const.DATA_NOTIF_DAYS_ENABLED, []
        ):
            return

        self._last_reminder_date = today
        await self._send_notification(
            const.NOTIF_TITLE_REMINDER,
            const.NOTIF_MESSAGE_REMINDER,
            const.NOTIFICATION_ID_REMINDER,
        )

    # =========================================================================
    # Event notifications
    # =========================================================================

    def notify_day_completed(self, finished_day: WorkoutDayData) -> None:
        """Announce the day that advance_day() just closed."""
        self.hass.async_create_task(
            self._send_notification(
                const.NOTIF_TITLE_DAY_COMPLETED,
                const.NOTIF_MESSAGE_DAY_COMPLETED.format(
                    day=finished_day[const.DATA_DAY_NUMBER],
                    actual=finished_day[const.DATA_DAY_ACTUAL],
                ),
                const.NOTIFICATION_ID_DAY_COMPLETED,
            )
        )

    def notify_streak_saved(self, jokers_consumed: int) -> None:
        """Announce that banked charges covered missed days."""
        self.hass.async_create_task(
            self._send_notification(
                const.NOTIF_TITLE_STREAK_SAVED,
                const.NOTIF_MESSAGE_STREAK_SAVED.format(count=jokers_consumed),
                const.NOTIFICATION_ID_STREAK,
            )
        )

    def notify_streak_reset(self) -> None:
        """Announce that a missed day without charges reset the streak."""
        self.hass.async_create_task(
            self._send_notification(
                const.NOTIF_TITLE_STREAK_RESET,
                const.NOTIF_MESSAGE_STREAK_RESET,
                const.NOTIFICATION_ID_STREAK,
            )
        )

    def notify_achievements_unlocked(
        self, achievements: list[AchievementStatus]
    ) -> None:
        """Announce each newly unlocked achievement (if enabled)."""
        if not self.settings.get(const.DATA_NOTIF_ACHIEVEMENT_ENABLED):
            return
        for achievement in achievements:
            self.hass.async_create_task(
                self._send_notification(
                    const.NOTIF_TITLE_ACHIEVEMENT_FMT.format(
                        name=achievement[const.DATA_ACHIEVEMENT_NAME]
                    ),
                    achievement[const.DATA_ACHIEVEMENT_DESCRIPTION],
                    f"{const.NOTIFICATION_ID_ACHIEVEMENT}_"
                    f"{achievement[const.DATA_ACHIEVEMENT_ID]}",
                )
            )

    # =========================================================================
    # Delivery
    # =========================================================================

    async def _send_notification(
        self, title: str, message: str, notification_id: str
    ) -> None:
        """Send one notification over the configured channel.

        Gracefully handles a configured notify service that is not (yet)
        available.
        """
        notify_service = self.notify_service
        if notify_service:
            if const.DISPLAY_DOT in notify_service:
                domain, service = notify_service.split(const.DISPLAY_DOT, 1)
            else:
                domain, service = const.NOTIFY_DOMAIN, notify_service
            if not self.hass.services.has_service(domain, service):
                const.LOGGER.warning(
                    "WARNING: Notification service '%s.%s' not available - "
                    "skipping notification '%s'",
                    domain,
                    service,
                    title,
                )
                return

        try:
            await async_send_notification(
                self.hass,
                notify_service,
                title,
                message,
                f"{const.NOTIFICATION_ID_PREFIX}{notification_id}",
            )
        except Exception as err:  # pylint: disable=broad-exception-caught
            # Runs in fire-and-forget tasks; a failure must not surface as
            # "Task exception was never retrieved".
            const.LOGGER.error(
                "ERROR: Unexpected error sending notification '%s': %s", title, err
            )
