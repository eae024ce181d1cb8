"""Tests for Push-up Journey diagnostics module.

Diagnostics return the stored blobs directly so the progress part can be
pasted into the import_progress service for recovery.
"""

# pylint: disable=redefined-outer-name  # Pytest fixtures shadow names
# pylint: disable=unused-argument  # Some fixtures needed for setup only

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock

from homeassistant.core import HomeAssistant
import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.pushup_journey import const
from custom_components.pushup_journey.diagnostics import (
    async_get_config_entry_diagnostics,
)
from custom_components.pushup_journey.helpers.backup_helpers import (
    parse_progress_json,
)
from tests.helpers import FROZEN_NOW, make_progress, setup_integration


@pytest.fixture(autouse=True)
def frozen_time(freezer: Any) -> None:
    """Freeze time at noon local on TODAY."""
    freezer.move_to(FROZEN_NOW)


async def test_config_entry_diagnostics_returns_stored_blobs(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """Diagnostics hold the progress record and the notification settings."""
    progress = make_progress(6, joker_days=[3])
    await setup_integration(
        hass,
        hass_storage,
        mock_config_entry,
        progress=progress,
        settings={"achievementEnabled": False},
    )

    result = await async_get_config_entry_diagnostics(hass, mock_config_entry)

    assert result[const.STORAGE_KEY] == progress
    assert result[const.STORAGE_KEY_NOTIFICATION_SETTINGS]["achievementEnabled"] is False


async def test_config_entry_diagnostics_are_importable(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """The progress blob round-trips through the import parser."""
    await setup_integration(
        hass, hass_storage, mock_config_entry, progress=make_progress(2)
    )

    result = await async_get_config_entry_diagnostics(hass, mock_config_entry)

    assert parse_progress_json(json.dumps(result[const.STORAGE_KEY])) == result[
        const.STORAGE_KEY
    ]


async def test_config_entry_diagnostics_do_not_alias_live_data(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """Changing the diagnostics output leaves the coordinator untouched."""
    setup = await setup_integration(hass, hass_storage, mock_config_entry)

    result = await async_get_config_entry_diagnostics(hass, mock_config_entry)
    result[const.STORAGE_KEY][const.DATA_DAYS].clear()

    assert len(setup.coordinator.progress[const.DATA_DAYS]) == 1
