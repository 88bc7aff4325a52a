"""Errors raised by the rate storage."""


class StorageError(Exception):
    """Raised when the rate storage cannot answer a query."""


class NotFoundError(StorageError):
    """Raised when a requested rate does not exist."""

    def __init__(self, message: str = "not found") -> None:
        super().__init__(message)