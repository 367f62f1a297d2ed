"""Domain-specific exceptions. Pure domain layer — no infrastructure."""


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(DomainError):
    """Raised when caller-supplied fields are missing or malformed."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class UserNotFoundError(NotFoundError):
    """Raised when the subject user of an event cannot be resolved."""


class LogNotFoundError(NotFoundError):
    """Raised when a user log entry does not exist."""


class LogInvariantError(DomainError):
    """Raised when a log entry's fields contradict its action."""
