"""Tests for PushupJourneyCoordinator.

Drives the coordinator through a loaded config entry so storage, achievement
snapshots and notifications are exercised together. Time is frozen at noon
local on TODAY (a Monday).
"""

# pylint: disable=protected-access  # Calling the midnight handler directly
# pylint: disable=redefined-outer-name  # Pytest fixtures

from __future__ import annotations

from datetime import timedelta
import json
from typing import Any
from unittest.mock import AsyncMock, patch

from homeassistant.core import HomeAssistant
from homeassistant.util import dt as dt_util
import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.pushup_journey import const
from custom_components.pushup_journey.helpers.backup_helpers import (
    InvalidProgressDataError,
)
from tests.helpers import (
    FROZEN_NOW,
    TODAY,
    assert_progress_invariants,
    make_day,
    make_progress,
    setup_integration,
)


@pytest.fixture(autouse=True)
def frozen_time(freezer: Any) -> None:
    """Freeze time at noon local on TODAY."""
    freezer.move_to(FROZEN_NOW)


def sent_titles(mock_send: AsyncMock) -> list[str]:
    """Return the titles of all notifications sent so far."""
    return [call.args[2] for call in mock_send.call_args_list]


# =============================================================================
# Load-time reconcile
# =============================================================================


async def test_first_run_starts_at_day_one(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """A fresh install has day 1 active and selected, dated today."""
    result = await setup_integration(hass, hass_storage, mock_config_entry)
    coordinator = result.coordinator

    assert coordinator.progress[const.DATA_CURRENT_DAY] == 1
    assert coordinator.selected_day == 1
    assert coordinator.active_day[const.DATA_DAY_DATE] == TODAY.isoformat()
    assert hass_storage[const.STORAGE_KEY]["data"][const.DATA_CURRENT_DAY] == 1
    mock_send_notification.assert_not_called()


async def test_load_spends_joker_for_missed_day(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """Opening after a missed day uses day 1's charge and keeps the streak."""
    progress = make_progress(5, active_date=TODAY - timedelta(days=1))

    result = await setup_integration(
        hass, hass_storage, mock_config_entry, progress=progress
    )
    coordinator = result.coordinator

    assert coordinator.progress[const.DATA_CURRENT_DAY] == 7
    assert coordinator.selected_day == 7
    assert coordinator.progress[const.DATA_STREAK] == 5
    assert coordinator.available_jokers == 4
    assert coordinator.progress[const.DATA_DAYS][0][const.DATA_DAY_JOKER_USED] is True
    assert hass_storage[const.STORAGE_KEY]["data"][const.DATA_CURRENT_DAY] == 7
    assert sent_titles(mock_send_notification) == [const.NOTIF_TITLE_STREAK_SAVED]


async def test_load_resets_streak_without_jokers(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """Opening after a missed day with an empty bank resets the streak."""
    progress = make_progress(
        3, joker_days=[1, 2, 3], active_date=TODAY - timedelta(days=2)
    )

    result = await setup_integration(
        hass, hass_storage, mock_config_entry, progress=progress
    )
    coordinator = result.coordinator

    assert coordinator.progress[const.DATA_STREAK] == 0
    assert coordinator.progress[const.DATA_LEVEL_PROGRESS] == 0
    assert coordinator.progress[const.DATA_CURRENT_DAY] == 4
    assert coordinator.active_day[const.DATA_DAY_DATE] == TODAY.isoformat()
    assert sent_titles(mock_send_notification) == [const.NOTIF_TITLE_STREAK_RESET]


async def test_load_same_day_changes_nothing(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """Reloading on the same date neither advances nor notifies."""
    progress = make_progress(8)

    result = await setup_integration(
        hass, hass_storage, mock_config_entry, progress=progress
    )

    assert result.coordinator.progress == progress
    mock_send_notification.assert_not_called()


async def test_load_does_not_announce_existing_achievements(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """Achievements already earned before a restart are the baseline."""
    result = await setup_integration(
        hass, hass_storage, mock_config_entry, progress=make_progress(12)
    )

    assert len(result.coordinator.achievements) == 6
    mock_send_notification.assert_not_called()


async def test_midnight_reconciles_the_ended_day(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """The midnight listener settles the day that just ended."""
    result = await setup_integration(
        hass, hass_storage, mock_config_entry, progress=make_progress(3)
    )
    coordinator = result.coordinator

    # 00:00 local on the following day
    midnight = dt_util.parse_datetime("2025-04-08T07:00:00+00:00")
    await coordinator._async_handle_midnight(midnight)
    await hass.async_block_till_done()

    assert coordinator.progress[const.DATA_CURRENT_DAY] == 5
    assert coordinator.active_day[const.DATA_DAY_DATE] == "2025-04-08"
    assert sent_titles(mock_send_notification) == [const.NOTIF_TITLE_STREAK_SAVED]


# =============================================================================
# User intents
# =============================================================================


async def test_record_count_persists_and_updates(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
) -> None:
    """Logging reps completes the day and is saved."""
    result = await setup_integration(hass, hass_storage, mock_config_entry)
    coordinator = result.coordinator

    coordinator.record_count(5)
    await hass.async_block_till_done()

    assert coordinator.progress[const.DATA_STREAK] == 1
    assert coordinator.progress[const.DATA_LEVEL_PROGRESS] == 10
    saved = hass_storage[const.STORAGE_KEY]["data"]
    assert saved[const.DATA_DAYS][0][const.DATA_DAY_ACTUAL] == 5
    assert saved[const.DATA_DAYS][0][const.DATA_DAY_COMPLETED] is True


async def test_advance_day_announces_day_and_achievements(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """Advancing a finished day 1 announces it and unlocks First Step."""
    result = await setup_integration(hass, hass_storage, mock_config_entry)
    coordinator = result.coordinator
    coordinator.record_count(8)

    transition = coordinator.advance_day()
    await hass.async_block_till_done()

    assert transition.advanced
    assert coordinator.progress[const.DATA_CURRENT_DAY] == 2
    assert coordinator.selected_day == 2
    assert coordinator.active_day[const.DATA_DAY_DATE] == TODAY.isoformat()
    assert sorted(sent_titles(mock_send_notification)) == [
        "Achievement Unlocked: First Step",
        const.NOTIF_TITLE_DAY_COMPLETED,
    ]
    day_completed = next(
        call
        for call in mock_send_notification.call_args_list
        if call.args[2] == const.NOTIF_TITLE_DAY_COMPLETED
    )
    assert "Day 1" in day_completed.args[3]
    assert "8 push-ups" in day_completed.args[3]
    assert hass_storage[const.STORAGE_KEY]["data"][const.DATA_CURRENT_DAY] == 2


async def test_advance_day_requires_completion(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """An open active day does not advance."""
    result = await setup_integration(hass, hass_storage, mock_config_entry)

    transition = result.coordinator.advance_day()
    await hass.async_block_till_done()

    assert not transition.advanced
    assert result.coordinator.progress[const.DATA_CURRENT_DAY] == 1
    mock_send_notification.assert_not_called()


async def test_toggle_joker_and_completion(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
) -> None:
    """Completion is locked while a joker backs the day."""
    result = await setup_integration(
        hass, hass_storage, mock_config_entry, progress=make_progress(2)
    )
    coordinator = result.coordinator

    coordinator.toggle_joker()
    assert not coordinator.toggle_completed().changed
    coordinator.toggle_joker()
    coordinator.toggle_completed()
    await hass.async_block_till_done()

    active = coordinator.active_day
    assert active[const.DATA_DAY_COMPLETED] is True
    assert active[const.DATA_DAY_JOKER_USED] is False
    assert active[const.DATA_DAY_ACTUAL] == active[const.DATA_DAY_TARGET]
    assert coordinator.progress[const.DATA_STREAK] == 2
    assert_progress_invariants(coordinator.progress)


async def test_navigate_to_day(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
) -> None:
    """Past days can be selected, future days cannot."""
    result = await setup_integration(
        hass, hass_storage, mock_config_entry, progress=make_progress(4)
    )
    coordinator = result.coordinator

    day = coordinator.navigate_to_day(2)

    assert day[const.DATA_DAY_NUMBER] == 2
    assert coordinator.selected_day == 2
    assert coordinator.selected_day_data is day
    assert coordinator.navigate_to_day(6) is None
    assert coordinator.selected_day == 2


# =============================================================================
# Data management
# =============================================================================


async def test_export_progress(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
) -> None:
    """Exports are written under the config directory."""
    result = await setup_integration(
        hass, hass_storage, mock_config_entry, progress=make_progress(2)
    )

    with patch(
        "custom_components.pushup_journey.helpers.backup_helpers._write_text_file"
    ) as mock_write:
        path, content = await result.coordinator.async_export_progress()

    assert path == hass.config.path(
        "pushup_journey", "pushup-journey-export-2025-04-07.json"
    )
    assert json.loads(content) == result.coordinator.progress
    mock_write.assert_called_once_with(path, content)


async def test_import_replaces_progress_quietly(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """Imports replace progress, reselect the active day and do not notify."""
    result = await setup_integration(hass, hass_storage, mock_config_entry)
    coordinator = result.coordinator
    imported = make_progress(10)

    await coordinator.async_import_progress(json.dumps(imported))
    await hass.async_block_till_done()

    assert coordinator.progress == imported
    assert coordinator.selected_day == 11
    assert hass_storage[const.STORAGE_KEY]["data"] == imported
    assert coordinator.achievements[2]["unlocked"] is True
    mock_send_notification.assert_not_called()


async def test_import_invalid_keeps_progress(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
) -> None:
    """A rejected import leaves everything untouched."""
    progress = make_progress(3)
    result = await setup_integration(
        hass, hass_storage, mock_config_entry, progress=progress
    )

    with pytest.raises(InvalidProgressDataError):
        await result.coordinator.async_import_progress('{"days": []}')

    assert result.coordinator.progress == progress


async def test_import_minimal_payload_fills_defaults(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """A payload with only currentDay and days imports with first-run values."""
    result = await setup_integration(
        hass, hass_storage, mock_config_entry, progress=make_progress(3)
    )
    coordinator = result.coordinator

    await coordinator.async_import_progress('{"currentDay": 1, "days": []}')
    await hass.async_block_till_done()

    assert coordinator.progress == {
        "currentDay": 1,
        "days": [],
        "streak": 0,
        "level": 1,
        "levelProgress": 0,
    }
    assert coordinator.completed_days == 0
    assert not any(entry["unlocked"] for entry in coordinator.achievements)
    assert hass_storage[const.STORAGE_KEY]["data"]["streak"] == 0


async def test_import_without_streak_accepts_intents(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
    mock_send_notification: AsyncMock,
) -> None:
    """An imported active day can be completed when streak and level were absent."""
    result = await setup_integration(hass, hass_storage, mock_config_entry)
    coordinator = result.coordinator
    payload = {"currentDay": 1, "days": [make_day(1)]}

    await coordinator.async_import_progress(json.dumps(payload))
    coordinator.record_count(5)
    await hass.async_block_till_done()

    assert coordinator.progress["streak"] == 1
    assert coordinator.progress["level"] == 1
    assert coordinator.progress["levelProgress"] == 10


async def test_import_malformed_days_changes_nothing(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
) -> None:
    """Day entries missing their fields reject the import before any backup."""
    progress = make_progress(3)
    result = await setup_integration(
        hass, hass_storage, mock_config_entry, progress=progress
    )
    achievements_before = result.coordinator.achievements

    with (
        patch(
            "custom_components.pushup_journey.helpers.backup_helpers"
            ".create_timestamped_backup",
            new_callable=AsyncMock,
        ) as mock_backup,
        pytest.raises(InvalidProgressDataError),
    ):
        await result.coordinator.async_import_progress(
            '{"currentDay": 2, "days": [{"day": 1}]}'
        )

    mock_backup.assert_not_called()
    assert result.coordinator.progress == progress
    assert result.coordinator.achievements == achievements_before
    assert hass_storage[const.STORAGE_KEY]["data"] == progress


async def test_reset_all_data(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    mock_config_entry: MockConfigEntry,
) -> None:
    """Reset returns to day 1 with default notification settings."""
    result = await setup_integration(
        hass,
        hass_storage,
        mock_config_entry,
        progress=make_progress(9),
        settings={"streakEnabled": False},
    )
    coordinator = result.coordinator

    await coordinator.async_reset_all_data()
    await hass.async_block_till_done()

    assert coordinator.progress[const.DATA_CURRENT_DAY] == 1
    assert coordinator.progress[const.DATA_STREAK] == 0
    assert coordinator.selected_day == 1
    assert coordinator.store.settings[const.DATA_NOTIF_STREAK_ENABLED] is True
    assert not any(entry["unlocked"] for entry in coordinator.achievements)
    assert hass_storage[const.STORAGE_KEY]["data"][const.DATA_CURRENT_DAY] == 1
