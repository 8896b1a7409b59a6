import logging

from django.conf import settings
from django.db import transaction
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


def get_backend(backend=None, **kwargs):
    """
    Instantiate the notification backend.

    ``backend`` is a dotted path; it defaults to NOTIFICATION_BACKEND.
    """
    klass = import_string(backend or settings.NOTIFICATION_BACKEND)
    return klass(**kwargs)


def notify(user_id: str, message: str) -> bool:
    """
    Send ``message`` to ``user_id`` through the configured backend.

    Returns True on success. Any backend error is logged and swallowed.
    """
    try:
        get_backend().send(user_id, message)
    except Exception:
        logger.exception("Notification to %s failed", user_id)
        return False
    return True


def notify_on_commit(user_id: str, message: str) -> None:
    """Schedule ``notify`` for after the current transaction commits."""
    transaction.on_commit(lambda: notify(user_id, message))
