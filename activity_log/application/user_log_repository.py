"""User log repository protocol. Application layer depends on this; infrastructure implements it."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Protocol, Sequence

from activity_log.domain.models import (
    LogFilter,
    LogSort,
    LogStats,
    UserAction,
    UserLogEntry,
)


@dataclass(frozen=True)
class LinkedUser:
    """Live view of the referenced user, attached when listing logs."""

    id: str
    full_name: Optional[str]
    email: str


@dataclass(frozen=True)
class PersistedUserLog:
    """A stored, immutable user log. `id` and `created_at` are assigned by the store."""

    id: str
    user_id: str
    username: str
    role: str
    action: UserAction
    ip_address: str
    token_name: str
    user_agent: str
    created_at: datetime
    login_time: Optional[datetime] = None
    logout_time: Optional[datetime] = None
    session_duration: Optional[int] = None
    user: Optional[LinkedUser] = None


class UserLogRepository(Protocol):
    """Protocol for persisting, querying and deleting user logs. There is no update path."""

    async def save(self, entry: UserLogEntry) -> PersistedUserLog:
        """Persist a new entry. Returns the stored log with id and created_at."""
        ...

    async def find_latest_login(self, user_id: str) -> Optional[PersistedUserLog]:
        """Newest login log for the user with a login_time, ordered by login_time."""
        ...

    async def find(
        self,
        log_filter: LogFilter,
        sort: LogSort,
        offset: int,
        limit: int,
    ) -> List[PersistedUserLog]:
        """One page of logs matching the filter, in sort order."""
        ...

    async def count(self, log_filter: LogFilter) -> int:
        ...

    async def aggregate_stats(self, since: datetime) -> LogStats:
        """Totals over logs created at or after `since`. All zeros when none match."""
        ...

    async def get(self, log_id: str) -> Optional[PersistedUserLog]:
        ...

    async def delete(self, log_id: str) -> None:
        ...

    async def delete_many(self, log_ids: Sequence[str]) -> int:
        """Delete every existing log among `log_ids`; returns how many were removed."""
        ...
