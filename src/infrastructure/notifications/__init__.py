"""Notifications package."""

from infrastructure.notifications.http import HttpNotification, render_url
from infrastructure.notifications.registry import NotificationRegistry, default_registry
from infrastructure.notifications.notifier import Notifier

__all__ = [
    "HttpNotification",
    "render_url",
    "NotificationRegistry",
    "default_registry",
    "Notifier",
]
