class DispatchError(Exception):
    """Raised when the persistence endpoint rejects a record."""


class DispatchNetworkError(DispatchError):
    """Raised when the persistence endpoint cannot be reached."""
