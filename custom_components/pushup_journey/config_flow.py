# File: config_flow.py
"""Config flow for the Push-up Journey integration.

Single instance. The only setting is an optional notify service used for
reminders and event notifications; left empty, persistent notifications
are used instead.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.core import HomeAssistant, callback

from . import const
from .options_flow import PushupJourneyOptionsFlowHandler


def build_notify_schema(default: str = const.DEFAULT_NOTIFY_SERVICE) -> vol.Schema:
    """Return the schema for the notify service form."""
    return vol.Schema(
        {
            vol.Optional(const.CONF_NOTIFY_SERVICE, default=default): str,
        }
    )


def validate_notify_service(hass: HomeAssistant, value: str) -> dict[str, str]:
    """Validate a notify service name such as "notify.mobile_app_phone".

    Returns:
        Errors dict for async_show_form (empty when valid).
    """
    value = value.strip()
    if not value:
        return {}

    domain, _, service = value.partition(const.DISPLAY_DOT)
    if domain != const.NOTIFY_DOMAIN or not service:
        return {const.CONF_NOTIFY_SERVICE: const.TRANS_KEY_ERROR_INVALID_NOTIFY_SERVICE}
    if not hass.services.has_service(domain, service):
        return {const.CONF_NOTIFY_SERVICE: const.TRANS_KEY_ERROR_INVALID_NOTIFY_SERVICE}
    return {}


class PushupJourneyConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for Push-up Journey."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        """Ask for the optional notify service and create the entry."""
        if any(self._async_current_entries()):
            return self.async_abort(reason=const.TRANS_KEY_ERROR_SINGLE_INSTANCE)

        errors: dict[str, str] = {}
        if user_input is not None:
            notify_service = user_input.get(
                const.CONF_NOTIFY_SERVICE, const.DEFAULT_NOTIFY_SERVICE
            ).strip()
            errors = validate_notify_service(self.hass, notify_service)
            if not errors:
                const.LOGGER.info(
                    "INFO: Creating Push-up Journey entry (notify service: %s)",
                    notify_service or const.NOTIFY_PERSISTENT_NOTIFICATION,
                )
                return self.async_create_entry(
                    title=const.PUSHUP_JOURNEY_TITLE,
                    data={const.CONF_NOTIFY_SERVICE: notify_service},
                )

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER,
            data_schema=build_notify_schema(),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return PushupJourneyOptionsFlowHandler()
