"""
Outbound notifications.

Domain services call ``notify_on_commit`` so a message only goes out once
the mutation that caused it is durable. Delivery failures are logged and
never reach the caller.
"""

from .dispatcher import get_backend, notify, notify_on_commit
from .exceptions import NotificationDeliveryError

# Filled by the locmem backend
outbox = []

__all__ = [
    'get_backend',
    'notify',
    'notify_on_commit',
    'NotificationDeliveryError',
    'outbox',
]
