"""Base entity classes for Push-up Journey integration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from . import const
from .coordinator import PushupJourneyCoordinator

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry


def create_device_info(config_entry: ConfigEntry) -> DeviceInfo:
    """Create device info for the single Push-up Journey device."""
    return DeviceInfo(
        identifiers={(const.DOMAIN, config_entry.entry_id)},
        name=const.PUSHUP_JOURNEY_TITLE,
        manufacturer=const.DEVICE_MANUFACTURER,
        model=const.DEVICE_MODEL,
        entry_type=DeviceEntryType.SERVICE,
    )


class PushupJourneyCoordinatorEntity(CoordinatorEntity[PushupJourneyCoordinator]):
    """Base entity class for Push-up Journey sensors with typed coordinator access.

    Every entity hangs off the same device and builds its unique_id from the
    config entry id plus a per-entity suffix.
    """

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: PushupJourneyCoordinator,
        entry: ConfigEntry,
        unique_id_suffix: str,
    ) -> None:
        """Initialize the entity.

        Args:
            coordinator: PushupJourneyCoordinator instance for data access.
            entry: ConfigEntry for this integration instance.
            unique_id_suffix: Per-entity suffix (const.SENSOR_UID_SUFFIX_*).
        """
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}{unique_id_suffix}"
        self._attr_device_info = create_device_info(entry)
