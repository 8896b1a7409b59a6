"""Exceptions raised by notification backends."""


class NotificationDeliveryError(Exception):
    """Raised when a backend could not hand a message to its channel."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code
