"""
Backend for test environment.

Messages are kept in ``apps.notifications.outbox`` as
``(user_id, message)`` tuples instead of being delivered.
"""

from apps import notifications

from .base import BaseNotificationBackend


class LocMemBackend(BaseNotificationBackend):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not hasattr(notifications, 'outbox'):
            notifications.outbox = []

    def send(self, user_id, message):
        notifications.outbox.append((user_id, message))
