# File: services.py
"""Defines custom services for the Push-up Journey integration.

These services are the user intents: logging reps, toggling completion or
jokers, advancing, navigating history, export/import and reset. They can be
called from dashboards, scripts or automations.
"""

from __future__ import annotations

import voluptuous as vol
from homeassistant.core import (
    HomeAssistant,
    ServiceCall,
    ServiceResponse,
    SupportsResponse,
)
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv

from . import const
from .coordinator import PushupJourneyCoordinator
from .helpers.backup_helpers import InvalidProgressDataError
from .utils.dt_utils import validate_reminder_times

# --- Service Schemas ---
SET_COUNT_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_COUNT): cv.positive_int,
    }
)

NAVIGATE_TO_DAY_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_DAY): vol.All(vol.Coerce(int), vol.Range(min=1)),
    }
)

IMPORT_PROGRESS_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_JSON_DATA): cv.string,
    }
)

UPDATE_NOTIFICATION_SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_STREAK_ENABLED): cv.boolean,
        vol.Optional(const.FIELD_ACHIEVEMENT_ENABLED): cv.boolean,
        vol.Optional(const.FIELD_NOTIFICATION_TIMES): vol.All(
            cv.ensure_list, [cv.string]
        ),
        vol.Optional(const.FIELD_DAYS_ENABLED): vol.All(
            cv.ensure_list, [vol.All(vol.Coerce(int), vol.Range(min=0, max=6))]
        ),
    }
)

NO_FIELDS_SCHEMA = vol.Schema({})


def _get_coordinator(hass: HomeAssistant, service_name: str) -> PushupJourneyCoordinator:
    """Return the coordinator of the (single) loaded entry."""
    domain_entries = hass.data.get(const.DOMAIN)
    entry_id = next(iter(domain_entries.keys()), None) if domain_entries else None
    if not entry_id:
        const.LOGGER.warning("WARNING: %s: %s", service_name, const.MSG_NO_ENTRY_FOUND)
        raise HomeAssistantError(const.MSG_NO_ENTRY_FOUND)
    return hass.data[const.DOMAIN][entry_id][const.COORDINATOR]


def async_setup_services(hass: HomeAssistant) -> None:
    """Register Push-up Journey services."""

    async def handle_set_count(call: ServiceCall) -> None:
        """Handle logging the repetition count for the active day."""
        coordinator = _get_coordinator(hass, "Set Count")
        coordinator.record_count(call.data[const.FIELD_COUNT])

    async def handle_toggle_completed(_call: ServiceCall) -> None:
        """Handle manually flipping completion of the active day."""
        coordinator = _get_coordinator(hass, "Toggle Completed")
        coordinator.toggle_completed()

    async def handle_toggle_joker(_call: ServiceCall) -> None:
        """Handle spending or refunding a joker on the active day."""
        coordinator = _get_coordinator(hass, "Toggle Joker")
        coordinator.toggle_joker()

    async def handle_advance_day(_call: ServiceCall) -> None:
        """Handle moving on to the next program day."""
        coordinator = _get_coordinator(hass, "Advance Day")
        coordinator.advance_day()

    async def handle_navigate_to_day(call: ServiceCall) -> ServiceResponse:
        """Handle selecting a past or active day for display."""
        coordinator = _get_coordinator(hass, "Navigate To Day")
        day_number = call.data[const.FIELD_DAY]
        day = coordinator.navigate_to_day(day_number)
        if day is None:
            message = const.ERROR_DAY_NOT_AVAILABLE_FMT.format(
                day_number, coordinator.progress[const.DATA_CURRENT_DAY]
            )
            const.LOGGER.warning("WARNING: Navigate To Day: %s", message)
            raise HomeAssistantError(message)
        return dict(day)

    async def handle_export_progress(_call: ServiceCall) -> ServiceResponse:
        """Handle writing a progress export file."""
        coordinator = _get_coordinator(hass, "Export Progress")
        try:
            path, content = await coordinator.async_export_progress()
        except OSError as err:
            const.LOGGER.error("ERROR: Export Progress: %s", err)
            raise HomeAssistantError(f"Failed to export progress: {err}") from err
        return {const.RESPONSE_PATH: path, const.RESPONSE_DATA: content}

    async def handle_import_progress(call: ServiceCall) -> None:
        """Handle replacing progress with an exported file's contents."""
        coordinator = _get_coordinator(hass, "Import Progress")
        try:
            await coordinator.async_import_progress(call.data[const.FIELD_JSON_DATA])
        except InvalidProgressDataError as err:
            const.LOGGER.warning("WARNING: Import Progress: %s", err)
            raise HomeAssistantError(
                const.ERROR_IMPORT_FAILED_FMT.format(err)
            ) from err

    async def handle_reset_all_data(_call: ServiceCall) -> None:
        """Handle wiping all progress and notification settings."""
        coordinator = _get_coordinator(hass, "Reset All Data")
        await coordinator.async_reset_all_data()
        const.LOGGER.info("INFO: Push-up Journey data reset to day 1")

    async def handle_update_notification_settings(call: ServiceCall) -> None:
        """Handle changing reminder and achievement notification settings."""
        coordinator = _get_coordinator(hass, "Update Notification Settings")

        times = call.data.get(const.FIELD_NOTIFICATION_TIMES)
        if times is not None:
            is_valid, invalid_value = validate_reminder_times(times)
            if not is_valid:
                message = const.ERROR_INVALID_TIME_FMT.format(invalid_value)
                const.LOGGER.warning("WARNING: Update Notification Settings: %s", message)
                raise HomeAssistantError(message)

        days_enabled = call.data.get(const.FIELD_DAYS_ENABLED)
        await coordinator.notification_manager.async_update_settings(
            **{
                const.DATA_NOTIF_STREAK_ENABLED: call.data.get(
                    const.FIELD_STREAK_ENABLED
                ),
                const.DATA_NOTIF_ACHIEVEMENT_ENABLED: call.data.get(
                    const.FIELD_ACHIEVEMENT_ENABLED
                ),
                const.DATA_NOTIF_TIMES: times,
                const.DATA_NOTIF_DAYS_ENABLED: (
                    sorted(set(days_enabled)) if days_enabled is not None else None
                ),
            }
        )

    # --- Register Services ---
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_SET_COUNT,
        handle_set_count,
        schema=SET_COUNT_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_TOGGLE_COMPLETED,
        handle_toggle_completed,
        schema=NO_FIELDS_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_TOGGLE_JOKER,
        handle_toggle_joker,
        schema=NO_FIELDS_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_ADVANCE_DAY,
        handle_advance_day,
        schema=NO_FIELDS_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_NAVIGATE_TO_DAY,
        handle_navigate_to_day,
        schema=NAVIGATE_TO_DAY_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_EXPORT_PROGRESS,
        handle_export_progress,
        schema=NO_FIELDS_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_IMPORT_PROGRESS,
        handle_import_progress,
        schema=IMPORT_PROGRESS_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_RESET_ALL_DATA,
        handle_reset_all_data,
        schema=NO_FIELDS_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_UPDATE_NOTIFICATION_SETTINGS,
        handle_update_notification_settings,
        schema=UPDATE_NOTIFICATION_SETTINGS_SCHEMA,
    )

    const.LOGGER.debug("DEBUG: Push-up Journey services have been registered")


async def async_unload_services(hass: HomeAssistant) -> None:
    """Unregister Push-up Journey services when unloading the integration."""
    services = [
        const.SERVICE_ADVANCE_DAY,
        const.SERVICE_EXPORT_PROGRESS,
        const.SERVICE_IMPORT_PROGRESS,
        const.SERVICE_NAVIGATE_TO_DAY,
        const.SERVICE_RESET_ALL_DATA,
        const.SERVICE_SET_COUNT,
        const.SERVICE_TOGGLE_COMPLETED,
        const.SERVICE_TOGGLE_JOKER,
        const.SERVICE_UPDATE_NOTIFICATION_SETTINGS,
    ]

    for service in services:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: Push-up Journey services have been unregistered")
