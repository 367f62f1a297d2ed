"""Query shapes for reading user logs: filters, sort order, pagination and stats."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

# Public sort keys mapped to entry field names.
SORTABLE_FIELDS = {
    "createdAt": "created_at",
    "username": "username",
    "role": "role",
    "action": "action",
    "ipAddress": "ip_address",
    "loginTime": "login_time",
    "logoutTime": "logout_time",
    "sessionDuration": "session_duration",
}

MATCH_ALL = "all"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class LogFilter:
    """AND of all set clauses; `search` matches username OR ip address."""

    role: Optional[str] = None
    action: Optional[str] = None
    search: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


@dataclass(frozen=True)
class LogSort:
    field: str = "created_at"
    direction: SortDirection = SortDirection.DESC


@dataclass(frozen=True)
class Pagination:
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int

    @classmethod
    def build(cls, page: int, limit: int, total_items: int) -> "Pagination":
        total_pages = -(-total_items // limit)
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_items=total_items,
            items_per_page=limit,
        )

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.items_per_page


@dataclass(frozen=True)
class LogStats:
    total_logs: int = 0
    login_count: int = 0
    logout_count: int = 0
    unique_users: int = 0
