"""LINE Messaging API push backend."""

import logging

import requests
from django.conf import settings

from apps.notifications.exceptions import NotificationDeliveryError

from .base import BaseNotificationBackend

logger = logging.getLogger(__name__)


class LinePushBackend(BaseNotificationBackend):
    """
    Push a text message to a LINE user.

    The user id of the circle-split user is the LINE user id, so it is
    used directly as the push target.
    """

    def __init__(self, token=None, endpoint=None, timeout=None, **kwargs):
        super().__init__(**kwargs)
        self.token = token or settings.LINE_CHANNEL_ACCESS_TOKEN
        self.endpoint = endpoint or settings.LINE_PUSH_ENDPOINT
        self.timeout = timeout or settings.NOTIFICATION_TIMEOUT

    def send(self, user_id, message):
        if not self.token:
            raise NotificationDeliveryError('LINE_CHANNEL_ACCESS_TOKEN is not configured')

        payload = {
            "to": user_id,
            "messages": [{"type": "text", "text": message}],
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
        }

        try:
            resp = requests.post(self.endpoint, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise NotificationDeliveryError(f"LINE push failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise NotificationDeliveryError(
                f"LINE push failed {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
            )
        logger.debug("LINE push sent to %s", user_id)
