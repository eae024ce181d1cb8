"""Shared fixtures for Push-up Journey tests."""

from collections.abc import Generator
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.pushup_journey.const import (
    CONF_NOTIFY_SERVICE,
    DEFAULT_NOTIFY_SERVICE,
    DOMAIN,
    PUSHUP_JOURNEY_TITLE,
)

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a mock config entry using persistent notifications."""
    return MockConfigEntry(
        domain=DOMAIN,
        title=PUSHUP_JOURNEY_TITLE,
        data={CONF_NOTIFY_SERVICE: DEFAULT_NOTIFY_SERVICE},
        entry_id="test_entry_id",
        unique_id="test_unique_id",
    )


@pytest.fixture
def mock_send_notification() -> Generator[AsyncMock]:
    """Patch the module-level notification sender."""
    with patch(
        "custom_components.pushup_journey.managers.notification_manager."
        "async_send_notification",
        new_callable=AsyncMock,
    ) as mock_send:
        yield mock_send
