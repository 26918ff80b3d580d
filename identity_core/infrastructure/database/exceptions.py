"""Persistence-layer exceptions. Typed, no HTTP."""


class PersistenceError(Exception):
    """Base for all persistence-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StaleRecordError(PersistenceError):
    """Raised when a snapshot's version no longer matches the stored row (optimistic lock)."""
