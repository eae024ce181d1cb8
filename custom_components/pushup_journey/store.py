# File: store.py
"""Handles persistent data storage for the Push-up Journey integration.

Uses Home Assistant's Storage helper to save and load two independent blobs:
the user's progress record and the notification preferences. Both survive
restarts; either can be missing or unreadable without blocking setup.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.storage import Store

from . import const
from .engines.progress_engine import ProgressEngine
from .helpers.backup_helpers import InvalidProgressDataError, validate_progress_data

if TYPE_CHECKING:
    from datetime import date

    from homeassistant.core import HomeAssistant

    from .type_defs import NotificationSettingsData, UserProgressData


class PushupJourneyStore:
    """Handles persistent storage operations for Push-up Journey data.

    Thin wrapper around Home Assistant's Store API. The in-memory copies are
    authoritative: a failed write is logged and the session carries on with
    the in-memory state until the next successful save.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        storage_key: str = const.STORAGE_KEY,
        settings_key: str = const.STORAGE_KEY_NOTIFICATION_SETTINGS,
    ) -> None:
        """Initialize the store.

        Args:
            hass: Home Assistant core object.
            storage_key: Key of the progress blob.
            settings_key: Key of the notification settings blob.

        """
        self.hass = hass
        self._store: Store = Store(hass, const.STORAGE_VERSION, storage_key)
        self._settings_store: Store = Store(hass, const.STORAGE_VERSION, settings_key)
        self._data: dict[str, Any] = {}
        self._settings: dict[str, Any] = {}

    @staticmethod
    def get_default_settings() -> NotificationSettingsData:
        """Return the notification settings used when none are stored."""
        return {
            const.DATA_NOTIF_STREAK_ENABLED: const.DEFAULT_STREAK_ENABLED,
            const.DATA_NOTIF_ACHIEVEMENT_ENABLED: const.DEFAULT_ACHIEVEMENT_ENABLED,
            const.DATA_NOTIF_TIMES: list(const.DEFAULT_NOTIFICATION_TIMES),
            const.DATA_NOTIF_DAYS_ENABLED: list(const.DEFAULT_DAYS_ENABLED),
        }  # type: ignore[return-value]

    async def _async_load_blob(self, store: Store) -> Any:
        """Load one blob, returning None when it is missing or unreadable."""
        try:
            return await store.async_load()
        except (HomeAssistantError, OSError, ValueError) as err:
            const.LOGGER.error(
                "ERROR: Failed to read storage %s: %s. Falling back to defaults",
                store.path,
                err,
            )
            return None

    async def async_initialize(self, today: date) -> None:
        """Load both blobs during startup.

        A missing or invalid progress blob is replaced by a fresh day-1
        record (and saved). Missing settings keys take their defaults.
        """
        const.LOGGER.debug("DEBUG: PushupJourneyStore: Loading data from storage")
        existing_data = await self._async_load_blob(self._store)

        if existing_data is None:
            const.LOGGER.info("INFO: No existing storage found. Initializing new data")
            self._data = ProgressEngine.create_initial_progress(today)  # type: ignore[assignment]
            await self.async_save()
        else:
            try:
                self._data = validate_progress_data(existing_data)  # type: ignore[assignment]
                const.LOGGER.debug(
                    "DEBUG: Loaded progress from storage: day %s, %s days recorded",
                    self._data[const.DATA_CURRENT_DAY],
                    len(self._data[const.DATA_DAYS]),
                )
            except InvalidProgressDataError as err:
                const.LOGGER.warning(
                    "WARNING: Stored progress is invalid (%s). Starting over at day 1",
                    err,
                )
                self._data = ProgressEngine.create_initial_progress(today)  # type: ignore[assignment]
                await self.async_save()

        self._settings = dict(PushupJourneyStore.get_default_settings())
        existing_settings = await self._async_load_blob(self._settings_store)
        if isinstance(existing_settings, dict):
            self._settings.update(
                {
                    key: value
                    for key, value in existing_settings.items()
                    if key in self._settings
                }
            )

    @property
    def data(self) -> UserProgressData:
        """Retrieve the in-memory progress record."""
        return self._data  # type: ignore[return-value]

    @property
    def settings(self) -> NotificationSettingsData:
        """Retrieve the in-memory notification settings."""
        return self._settings  # type: ignore[return-value]

    def get_storage_path(self) -> str:
        """Get the progress storage file path.

        Returns:
            str: The absolute path to the storage file.
        """
        return self._store.path

    def set_data(self, new_data: UserProgressData) -> None:
        """Replace the entire in-memory progress record."""
        const.LOGGER.debug(
            "DEBUG: Storage set_data called: day %s, %s days recorded",
            new_data.get(const.DATA_CURRENT_DAY),
            len(new_data.get(const.DATA_DAYS, [])),
        )
        self._data = new_data  # type: ignore[assignment]

    def set_settings(self, new_settings: NotificationSettingsData) -> None:
        """Replace the in-memory notification settings."""
        self._settings = dict(new_settings)

    async def _async_save_blob(self, store: Store, data: dict[str, Any]) -> None:
        """Save one blob. Errors are logged but do not stop execution."""
        try:
            await store.async_save(data)
            const.LOGGER.debug("DEBUG: Data saved successfully to %s", store.path)
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions for %s",
                err,
                store.path,
            )
        except TypeError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to non-serializable data: %s. "
                "Data contains types that cannot be converted to JSON",
                err,
            )
        except (ValueError, HomeAssistantError) as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to invalid data format: %s. "
                "Data structure may be corrupted",
                err,
            )

    async def async_save(self) -> None:
        """Save the progress record to storage asynchronously."""
        await self._async_save_blob(self._store, self._data)

    async def async_save_settings(self) -> None:
        """Save the notification settings to storage asynchronously."""
        await self._async_save_blob(self._settings_store, self._settings)

    async def async_clear_data(self, today: date) -> None:
        """Wipe both blobs and start over with a fresh day-1 record."""
        const.LOGGER.warning(
            "WARNING: Clearing all Push-up Journey data and resetting storage"
        )
        self._data = ProgressEngine.create_initial_progress(today)  # type: ignore[assignment]
        self._settings = dict(PushupJourneyStore.get_default_settings())
        await self.async_save()
        await self.async_save_settings()

    async def async_delete_storage(self) -> None:
        """Delete both storage files from disk.

        Used when the config entry is removed.
        """
        self._data = {}
        self._settings = {}
        for store in (self._store, self._settings_store):
            try:
                await store.async_remove()
                const.LOGGER.info("INFO: Storage file removed successfully: %s", store.path)
            except OSError as err:
                const.LOGGER.error(
                    "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                    store.path,
                    err,
                )

    def snapshot(self) -> dict[str, Any]:
        """Return deep copies of both blobs (used by diagnostics)."""
        return {
            const.STORAGE_KEY: copy.deepcopy(self._data),
            const.STORAGE_KEY_NOTIFICATION_SETTINGS: copy.deepcopy(self._settings),
        }
