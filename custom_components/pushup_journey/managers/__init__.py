"""Manager modules for Push-up Journey integration.

Managers are stateful, Home Assistant aware collaborators of the coordinator.
"""

from .notification_manager import NotificationManager

__all__ = [
    "NotificationManager",
]
