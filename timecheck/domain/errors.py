"""
Error taxonomy shared by every layer.

Repositories raise StoreError, the direct HTTP paths raise ValidationError and
NotFoundError, single-recipient sends raise TransportError. Batch and reply
paths report failures through result objects instead of raising.
"""


class TimeCheckError(Exception):
    """Base exception for tracker errors."""
    pass


class ValidationError(TimeCheckError):
    """A required field is missing or malformed. Never retried."""
    pass


class NotFoundError(TimeCheckError):
    """A referenced user does not exist on a path that does not auto-register."""
    pass


class StoreError(TimeCheckError):
    """The database is unreachable or rejected the write."""
    pass


class TransportError(TimeCheckError):
    """An outbound SMS could not be sent."""
    pass
