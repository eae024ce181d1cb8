# File: options_flow.py
"""Options flow for the Push-up Journey integration.

Lets the user change the notify service after setup. Saving reloads the
entry so the notification manager picks up the new channel.
"""

from __future__ import annotations

from typing import Any

from homeassistant import config_entries

from . import const


class PushupJourneyOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for changing the notification channel."""

    async def async_step_init(self, user_input: dict[str, Any] | None = None):
        """Show and validate the notify service form."""
        # Imported here to avoid a circular import with config_flow.
        from .config_flow import build_notify_schema, validate_notify_service

        errors: dict[str, str] = {}
        if user_input is not None:
            notify_service = user_input.get(
                const.CONF_NOTIFY_SERVICE, const.DEFAULT_NOTIFY_SERVICE
            ).strip()
            errors = validate_notify_service(self.hass, notify_service)
            if not errors:
                return self.async_create_entry(
                    data={const.CONF_NOTIFY_SERVICE: notify_service}
                )

        current = self.config_entry.options.get(
            const.CONF_NOTIFY_SERVICE,
            self.config_entry.data.get(
                const.CONF_NOTIFY_SERVICE, const.DEFAULT_NOTIFY_SERVICE
            ),
        )
        return self.async_show_form(
            step_id="init",
            data_schema=build_notify_schema(current),
            errors=errors,
        )
