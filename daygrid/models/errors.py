# File: daygrid/models/errors.py


class InvalidEventError(ValueError):
    """Raised when an event record cannot be used (bad fields or end before start)."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field
