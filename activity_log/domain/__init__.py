"""Domain layer: models, schemas, validators, exceptions. Pure business logic only."""

from activity_log.domain.exceptions import (
    DomainError,
    InvalidInputError,
    LogInvariantError,
    LogNotFoundError,
    NotFoundError,
    UserNotFoundError,
)
from activity_log.domain.models import (
    LogFilter,
    LogSort,
    LogStats,
    Pagination,
    SortDirection,
    StatsPeriod,
    UserAction,
    UserLogEntry,
    UserSnapshot,
)

__all__ = [
    "DomainError",
    "InvalidInputError",
    "LogFilter",
    "LogInvariantError",
    "LogNotFoundError",
    "LogSort",
    "LogStats",
    "NotFoundError",
    "Pagination",
    "SortDirection",
    "StatsPeriod",
    "UserAction",
    "UserLogEntry",
    "UserNotFoundError",
    "UserSnapshot",
]
