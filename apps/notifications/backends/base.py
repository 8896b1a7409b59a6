class BaseNotificationBackend:
    """
    Base class for notification backends.

    Subclasses must implement ``send(user_id, message)`` and raise on
    failure; the dispatcher decides what a failure means for the caller.
    """

    def __init__(self, **kwargs):
        pass

    def send(self, user_id: str, message: str) -> None:
        raise NotImplementedError('subclasses of BaseNotificationBackend must override send()')
