"""Notification backend that writes messages to the log."""

import logging

from .base import BaseNotificationBackend

logger = logging.getLogger('apps.notifications')


class LoggingBackend(BaseNotificationBackend):
    def send(self, user_id, message):
        logger.info("Notification to %s: %s", user_id, message)
