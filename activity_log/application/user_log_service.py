"""User log application service. Records events, derives session duration, queries, aggregates, deletes."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from activity_log.application.user_directory import UserDirectory
from activity_log.application.user_log_repository import PersistedUserLog, UserLogRepository
from activity_log.config.settings import AppSettings
from activity_log.domain.exceptions import LogNotFoundError, UserNotFoundError
from activity_log.domain.models import (
    LogFilter,
    LogSort,
    LogStats,
    Pagination,
    StatsPeriod,
    UserAction,
    UserLogEntry,
    session_duration_ms,
)
from activity_log.domain.validators import (
    validate_event_fields,
    validate_log_ids,
    validate_page,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are taken to be UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class LogPage:
    records: List[PersistedUserLog]
    pagination: Pagination


class UserLogService:
    """
    Application-layer orchestration only. No HTTP, no FastAPI.
    Store failures surface as StoreUnavailableError from the repository and are not retried.
    """

    def __init__(
        self,
        repository: UserLogRepository,
        user_directory: UserDirectory,
        settings: AppSettings,
        logger: logging.Logger,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._repository = repository
        self._users = user_directory
        self._settings = settings
        self._logger = logger
        self._clock = clock

    async def record_event(
        self,
        user_id: Optional[str],
        action: Optional[str],
        ip_address: Optional[str],
        token_name: Optional[str] = None,
        user_agent: Optional[str] = None,
        fallback_user_agent: Optional[str] = None,
    ) -> PersistedUserLog:
        """
        Validate, snapshot the user's identity and role, stamp login/logout time and
        link a logout to the user's most recent login. Required fields are checked
        before the user lookup.
        """
        user_action = validate_event_fields(user_id, action, ip_address)

        user = await self._users.find_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError("User not found")

        now = self._clock()
        login_time = None
        logout_time = None
        session_duration = None

        if user_action is UserAction.LOGIN:
            login_time = now
        elif user_action is UserAction.LOGOUT:
            logout_time = now
            # Not atomic with the write below: a concurrent login can be missed.
            last_login = await self._repository.find_latest_login(user.id)
            if last_login is not None and last_login.login_time is not None:
                session_duration = session_duration_ms(as_utc(last_login.login_time), now)
                self._logger.info(
                    "session_linked",
                    extra={
                        "user_id": user.id,
                        "login_log_id": last_login.id,
                        "session_duration": session_duration,
                    },
                )

        entry = UserLogEntry(
            user_id=user.id,
            username=user.email,
            role=user.role,
            action=user_action,
            ip_address=ip_address,
            token_name=token_name or self._settings.default_token_name,
            user_agent=user_agent or fallback_user_agent or self._settings.default_user_agent,
            login_time=login_time,
            logout_time=logout_time,
            session_duration=session_duration,
        )
        persisted = await self._repository.save(entry)
        self._logger.info(
            "user_log_created",
            extra={
                "log_id": persisted.id,
                "user_id": persisted.user_id,
                "action": persisted.action.value,
            },
        )
        return persisted

    async def list_logs(
        self,
        log_filter: LogFilter,
        sort: LogSort,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> LogPage:
        """Filtered, sorted page of logs plus pagination metadata."""
        page, limit = validate_page(
            page,
            limit if limit is not None else self._settings.default_page_limit,
            self._settings.max_page_limit,
        )
        log_filter = LogFilter(
            role=log_filter.role,
            action=log_filter.action,
            search=log_filter.search,
            start_date=as_utc(log_filter.start_date),
            end_date=as_utc(log_filter.end_date),
        )
        total = await self._repository.count(log_filter)
        pagination = Pagination.build(page, limit, total)
        records = await self._repository.find(log_filter, sort, pagination.offset, limit)
        return LogPage(records=records, pagination=pagination)

    async def get_stats(self, period: Optional[str] = None) -> LogStats:
        default = StatsPeriod(self._settings.default_stats_period)
        stats_period = StatsPeriod.parse(period, default)
        since = self._clock() - stats_period.window
        return await self._repository.aggregate_stats(since)

    async def delete_log(self, log_id: str) -> None:
        """Raises LogNotFoundError when the log does not exist rather than succeeding silently."""
        existing = await self._repository.get(log_id)
        if existing is None:
            raise LogNotFoundError("Log entry not found")
        await self._repository.delete(log_id)
        self._logger.info("user_log_deleted", extra={"log_id": log_id})

    async def delete_logs(self, log_ids: Any) -> int:
        ids = validate_log_ids(log_ids)
        deleted = await self._repository.delete_many(ids)
        self._logger.info(
            "user_logs_deleted",
            extra={"requested": len(ids), "deleted_count": deleted},
        )
        return deleted
