"""DB-backed user log repository. Persists logs to the user_logs table."""

import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Sequence

from sqlalchemy import case, delete, distinct, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from activity_log.application.exceptions import StoreUnavailableError
from activity_log.application.user_log_repository import LinkedUser, PersistedUserLog
from activity_log.domain.models import (
    LogFilter,
    LogSort,
    LogStats,
    SortDirection,
    UserAction,
    UserLogEntry,
)
from activity_log.infrastructure.database.models import User, UserLog

_SORT_COLUMNS = {
    "created_at": UserLog.created_at,
    "username": UserLog.username,
    "role": UserLog.role,
    "action": UserLog.action,
    "ip_address": UserLog.ip_address,
    "login_time": UserLog.login_time,
    "logout_time": UserLog.logout_time,
    "session_duration": UserLog.session_duration,
}


def _parse_id(log_id) -> Optional[uuid.UUID]:
    """Ids that are not UUIDs cannot match any row."""
    if isinstance(log_id, uuid.UUID):
        return log_id
    try:
        return uuid.UUID(str(log_id))
    except ValueError:
        return None


def _utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _filter_clauses(log_filter: LogFilter) -> list:
    clauses = []
    if log_filter.role:
        clauses.append(UserLog.role == log_filter.role)
    if log_filter.action:
        clauses.append(UserLog.action == log_filter.action)
    if log_filter.search:
        pattern = _like_pattern(log_filter.search)
        clauses.append(
            or_(
                UserLog.username.ilike(pattern, escape="\\"),
                UserLog.ip_address.ilike(pattern, escape="\\"),
            )
        )
    if log_filter.start_date is not None:
        clauses.append(UserLog.created_at >= log_filter.start_date)
    if log_filter.end_date is not None:
        clauses.append(UserLog.created_at <= log_filter.end_date)
    return clauses


def _to_persisted(orm: UserLog, user: Optional[User] = None) -> PersistedUserLog:
    linked = None
    if user is not None:
        linked = LinkedUser(id=user.id, full_name=user.full_name, email=user.email)
    return PersistedUserLog(
        id=str(orm.id),
        user_id=orm.user_id,
        username=orm.username,
        role=orm.role,
        action=UserAction(orm.action),
        ip_address=orm.ip_address,
        token_name=orm.token_name,
        user_agent=orm.user_agent,
        created_at=_utc(orm.created_at),
        login_time=_utc(orm.login_time),
        logout_time=_utc(orm.logout_time),
        session_duration=orm.session_duration,
        user=linked,
    )


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        raise StoreUnavailableError(f"{operation} failed: {e}") from e


class DbUserLogRepository:
    """Implements UserLogRepository protocol against PostgreSQL (or any SQLAlchemy async backend)."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, entry: UserLogEntry) -> PersistedUserLog:
        """Insert the entry; id and created_at are assigned here."""
        orm = UserLog(
            user_id=entry.user_id,
            username=entry.username,
            role=entry.role,
            action=entry.action.value,
            ip_address=entry.ip_address,
            token_name=entry.token_name,
            user_agent=entry.user_agent,
            login_time=entry.login_time,
            logout_time=entry.logout_time,
            session_duration=entry.session_duration,
        )
        with _store_errors("Saving user log"):
            self._session.add(orm)
            await self._session.flush()
            await self._session.commit()
            await self._session.refresh(orm)
        return _to_persisted(orm)

    async def find_latest_login(self, user_id: str) -> Optional[PersistedUserLog]:
        stmt = (
            select(UserLog)
            .where(
                UserLog.user_id == user_id,
                UserLog.action == UserAction.LOGIN.value,
                UserLog.login_time.is_not(None),
            )
            .order_by(UserLog.login_time.desc())
            .limit(1)
        )
        with _store_errors("Latest login lookup"):
            result = await self._session.execute(stmt)
        orm = result.scalar_one_or_none()
        return _to_persisted(orm) if orm is not None else None

    async def find(
        self,
        log_filter: LogFilter,
        sort: LogSort,
        offset: int,
        limit: int,
    ) -> List[PersistedUserLog]:
        column = _SORT_COLUMNS[sort.field]
        if sort.direction is SortDirection.DESC:
            order_by = (column.desc(), UserLog.id.desc())
        else:
            order_by = (column.asc(), UserLog.id.asc())
        stmt = (
            select(UserLog, User)
            .outerjoin(User, User.id == UserLog.user_id)
            .where(*_filter_clauses(log_filter))
            .order_by(*order_by)
            .offset(offset)
            .limit(limit)
        )
        with _store_errors("User log query"):
            result = await self._session.execute(stmt)
        return [_to_persisted(log, user) for log, user in result.all()]

    async def count(self, log_filter: LogFilter) -> int:
        stmt = select(func.count(UserLog.id)).where(*_filter_clauses(log_filter))
        with _store_errors("User log count"):
            result = await self._session.execute(stmt)
        return result.scalar_one()

    async def aggregate_stats(self, since: datetime) -> LogStats:
        stmt = select(
            func.count(UserLog.id),
            func.coalesce(func.sum(case((UserLog.action == UserAction.LOGIN.value, 1), else_=0)), 0),
            func.coalesce(func.sum(case((UserLog.action == UserAction.LOGOUT.value, 1), else_=0)), 0),
            func.count(distinct(UserLog.user_id)),
        ).where(UserLog.created_at >= since)
        with _store_errors("User log statistics"):
            result = await self._session.execute(stmt)
        total, logins, logouts, unique_users = result.one()
        return LogStats(
            total_logs=int(total),
            login_count=int(logins),
            logout_count=int(logouts),
            unique_users=int(unique_users),
        )

    async def get(self, log_id: str) -> Optional[PersistedUserLog]:
        parsed = _parse_id(log_id)
        if parsed is None:
            return None
        with _store_errors("User log lookup"):
            orm = await self._session.get(UserLog, parsed)
        return _to_persisted(orm) if orm is not None else None

    async def delete(self, log_id: str) -> None:
        parsed = _parse_id(log_id)
        if parsed is None:
            return
        with _store_errors("Deleting user log"):
            await self._session.execute(delete(UserLog).where(UserLog.id == parsed))
            await self._session.commit()

    async def delete_many(self, log_ids: Sequence[str]) -> int:
        parsed = {p for p in (_parse_id(log_id) for log_id in log_ids) if p is not None}
        if not parsed:
            return 0
        with _store_errors("Deleting user logs"):
            result = await self._session.execute(delete(UserLog).where(UserLog.id.in_(list(parsed))))
            await self._session.commit()
        return result.rowcount
