from sqlalchemy.exc import SQLAlchemyError


class TaskTrackerError(Exception):
    """Base error for the task tracker service."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageUnavailable(TaskTrackerError):
    """The store could not be reached or a statement against it failed."""

    @classmethod
    def from_exception(cls, exc: SQLAlchemyError) -> "StorageUnavailable":
        # Prefer the driver's own message over SQLAlchemy's wrapped one,
        # which carries the statement and a documentation link.
        orig = getattr(exc, "orig", None)
        return cls(str(orig) if orig is not None else str(exc))


class TaskValidationError(TaskTrackerError):
    """Task input was rejected before reaching the store."""
