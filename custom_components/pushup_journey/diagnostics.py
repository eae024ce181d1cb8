"""Diagnostics support for Push-up Journey integration.

Returns the raw stored blobs so the progress part can be pasted straight
into the import_progress service during data recovery.
"""

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import PushupJourneyCoordinator


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry.

    Keys are the storage keys (progress and notification settings); values
    are copies of the in-memory blobs.
    """
    coordinator: PushupJourneyCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    return coordinator.store.snapshot()
