"""Domain models. Pure business entities."""

from activity_log.domain.models.log_query import (
    MATCH_ALL,
    SORTABLE_FIELDS,
    LogFilter,
    LogSort,
    LogStats,
    Pagination,
    SortDirection,
)
from activity_log.domain.models.user_log import (
    StatsPeriod,
    UserAction,
    UserLogEntry,
    UserSnapshot,
    session_duration_ms,
)

__all__ = [
    "MATCH_ALL",
    "SORTABLE_FIELDS",
    "LogFilter",
    "LogSort",
    "LogStats",
    "Pagination",
    "SortDirection",
    "StatsPeriod",
    "UserAction",
    "UserLogEntry",
    "UserSnapshot",
    "session_duration_ms",
]
