# File: __init__.py
"""Initialization file for the Push-up Journey integration.

Handles setting up the integration, including loading configuration entries,
reconciling elapsed days, registering services, and managing data storage.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady
from homeassistant.util import dt as dt_util

from . import const
from .coordinator import PushupJourneyCoordinator
from .managers import NotificationManager
from .services import async_setup_services, async_unload_services
from .store import PushupJourneyStore


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for Push-up Journey entry: %s", entry.entry_id)

    # Load (or create) the progress record and notification settings.
    store = PushupJourneyStore(hass)
    await store.async_initialize(dt_util.now().date())

    notification_manager = NotificationManager(hass, entry, store)
    coordinator = PushupJourneyCoordinator(hass, entry, store, notification_manager)

    try:
        # Reconciles elapsed days before entities read the data.
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to refresh coordinator data: %s", e)
        raise ConfigEntryNotReady from e

    await notification_manager.async_setup()

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORAGE_MANAGER: store,
    }

    async_setup_services(hass)

    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    entry.async_on_unload(entry.add_update_listener(async_reload_entry))

    const.LOGGER.info("INFO: Push-up Journey setup complete for entry: %s", entry.entry_id)
    return True


async def async_reload_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry after its options changed."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading Push-up Journey entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        hass.data[const.DOMAIN].pop(entry.entry_id)
        if not hass.data[const.DOMAIN]:
            await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry by deleting its storage files."""
    const.LOGGER.info("INFO: Removing Push-up Journey entry: %s", entry.entry_id)

    await PushupJourneyStore(hass).async_delete_storage()

    const.LOGGER.info("INFO: Push-up Journey entry data cleared: %s", entry.entry_id)
