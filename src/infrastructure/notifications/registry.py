"""Notification strategy registry keyed by lowercase type tag."""

from typing import Dict, Optional

from domain.protocols import INotificationStrategy
from infrastructure.notifications.http import HttpNotification


class NotificationRegistry:
    """Maps notification type tags to delivery strategies."""

    def __init__(self):
        self._strategies: Dict[str, INotificationStrategy] = {}

    def register(self, type_tag: str, strategy: INotificationStrategy) -> None:
        """Register (or replace) the strategy for a type tag."""
        self._strategies[type_tag.lower()] = strategy

    def resolve(self, type_tag: str) -> Optional[INotificationStrategy]:
        """Strategy for a tag, case-insensitively; None when unknown."""
        return self._strategies.get(type_tag.lower())

    def __contains__(self, type_tag: str) -> bool:
        return type_tag.lower() in self._strategies


def default_registry(http_timeout: float = 30.0) -> NotificationRegistry:
    """Registry with every built-in strategy."""
    registry = NotificationRegistry()
    registry.register('http', HttpNotification(timeout=http_timeout))
    return registry
