"""Unit tests for UserLogService: event recording, session linkage, listing, stats, deletion."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from activity_log.application.exceptions import StoreUnavailableError
from activity_log.application.user_log_repository import PersistedUserLog
from activity_log.application.user_log_service import UserLogService
from activity_log.config.settings import AppSettings
from activity_log.domain.exceptions import InvalidInputError, LogNotFoundError, UserNotFoundError
from activity_log.domain.models import (
    LogFilter,
    LogSort,
    LogStats,
    UserAction,
    UserLogEntry,
    UserSnapshot,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _persisted_from(entry: UserLogEntry, log_id: str = "log-1") -> PersistedUserLog:
    return PersistedUserLog(
        id=log_id,
        user_id=entry.user_id,
        username=entry.username,
        role=entry.role,
        action=entry.action,
        ip_address=entry.ip_address,
        token_name=entry.token_name,
        user_agent=entry.user_agent,
        created_at=NOW,
        login_time=entry.login_time,
        logout_time=entry.logout_time,
        session_duration=entry.session_duration,
    )


def _login_log(login_time: datetime, log_id: str = "login-1") -> PersistedUserLog:
    return PersistedUserLog(
        id=log_id,
        user_id="u1",
        username="bob@example.com",
        role="admin",
        action=UserAction.LOGIN,
        ip_address="10.0.0.1",
        token_name="N/A",
        user_agent="Unknown",
        created_at=login_time,
        login_time=login_time,
    )


@pytest.fixture
def repository():
    r = AsyncMock()
    r.save = AsyncMock(side_effect=lambda entry: _persisted_from(entry))
    r.find_latest_login = AsyncMock(return_value=None)
    r.count = AsyncMock(return_value=0)
    r.find = AsyncMock(return_value=[])
    r.aggregate_stats = AsyncMock(return_value=LogStats())
    r.get = AsyncMock(return_value=None)
    r.delete = AsyncMock(return_value=None)
    r.delete_many = AsyncMock(return_value=0)
    return r


@pytest.fixture
def user_directory():
    d = AsyncMock()
    d.find_user_by_id = AsyncMock(
        return_value=UserSnapshot(id="u1", email="bob@example.com", role="admin", full_name="Bob")
    )
    return d


@pytest.fixture
def settings():
    return AppSettings(max_page_limit=100)


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def service(repository, user_directory, settings, logger):
    return UserLogService(
        repository=repository,
        user_directory=user_directory,
        settings=settings,
        logger=logger,
        clock=lambda: NOW,
    )


# ---------- record_event ----------


async def test_login_sets_login_time_without_duration(service, repository):
    log = await service.record_event("u1", "login", "10.0.0.1")

    assert log.login_time == NOW
    assert log.logout_time is None
    assert log.session_duration is None
    repository.find_latest_login.assert_not_awaited()
    repository.save.assert_awaited_once()


async def test_snapshot_copies_email_and_role(service, repository):
    await service.record_event("u1", "register", "10.0.0.1")

    entry = repository.save.call_args[0][0]
    assert entry.username == "bob@example.com"
    assert entry.role == "admin"
    assert entry.login_time is None
    assert entry.logout_time is None


async def test_defaults_for_token_and_user_agent(service, repository):
    await service.record_event("u1", "login", "10.0.0.1")

    entry = repository.save.call_args[0][0]
    assert entry.token_name == "N/A"
    assert entry.user_agent == "Unknown"


async def test_fallback_user_agent_used_when_none_supplied(service, repository):
    await service.record_event("u1", "login", "10.0.0.1", fallback_user_agent="curl/8.0")
    assert repository.save.call_args[0][0].user_agent == "curl/8.0"

    await service.record_event("u1", "login", "10.0.0.1", user_agent="Firefox", fallback_user_agent="curl/8.0")
    assert repository.save.call_args[0][0].user_agent == "Firefox"


async def test_logout_links_to_latest_login(service, repository):
    repository.find_latest_login.return_value = _login_log(NOW - timedelta(minutes=30))

    log = await service.record_event("u1", "logout", "10.0.0.1")

    repository.find_latest_login.assert_awaited_once_with("u1")
    assert log.logout_time == NOW
    assert log.login_time is None
    assert log.session_duration == 30 * 60 * 1000


async def test_logout_links_naive_login_time_as_utc(service, repository):
    repository.find_latest_login.return_value = _login_log(datetime(2026, 10, 18, 11, 59))

    log = await service.record_event("u1", "logout", "10.0.0.1")

    assert log.session_duration == 60 * 1000


async def test_logout_without_prior_login_has_no_duration(service, repository):
    repository.find_latest_login.return_value = None

    log = await service.record_event("u1", "logout", "10.0.0.1")

    assert log.logout_time == NOW
    assert log.session_duration is None


async def test_logout_with_future_login_is_clamped(service, repository):
    repository.find_latest_login.return_value = _login_log(NOW + timedelta(seconds=5))

    log = await service.record_event("u1", "logout", "10.0.0.1")

    assert log.session_duration == 0


async def test_missing_fields_fail_before_user_lookup(service, user_directory, repository):
    with pytest.raises(InvalidInputError):
        await service.record_event("u1", None, "10.0.0.1")

    user_directory.find_user_by_id.assert_not_awaited()
    repository.save.assert_not_awaited()


async def test_unknown_user_raises_not_found(service, user_directory, repository):
    user_directory.find_user_by_id.return_value = None

    with pytest.raises(UserNotFoundError):
        await service.record_event("ghost", "login", "10.0.0.1")

    repository.save.assert_not_awaited()


async def test_store_failure_propagates(service, repository):
    repository.save.side_effect = StoreUnavailableError("Saving user log failed: down")

    with pytest.raises(StoreUnavailableError):
        await service.record_event("u1", "login", "10.0.0.1")


# ---------- list_logs ----------


async def test_list_uses_default_limit_and_offset(service, repository):
    repository.count.return_value = 120

    page = await service.list_logs(LogFilter(), LogSort(), page=3)

    assert page.pagination.total_pages == 3
    assert page.pagination.items_per_page == 50
    repository.find.assert_awaited_once()
    _, _, offset, limit = repository.find.call_args[0]
    assert (offset, limit) == (100, 50)


async def test_list_clamps_limit(service, repository):
    repository.count.return_value = 10

    page = await service.list_logs(LogFilter(), LogSort(), page=1, limit=10_000)

    assert page.pagination.items_per_page == 100


async def test_list_normalizes_naive_dates_to_utc(service, repository):
    await service.list_logs(LogFilter(start_date=datetime(2026, 10, 1)), LogSort())

    passed_filter = repository.count.call_args[0][0]
    assert passed_filter.start_date == datetime(2026, 10, 1, tzinfo=timezone.utc)


async def test_list_rejects_page_zero(service, repository):
    with pytest.raises(InvalidInputError):
        await service.list_logs(LogFilter(), LogSort(), page=0)
    repository.count.assert_not_awaited()


# ---------- get_stats ----------


@pytest.mark.parametrize(
    "period,window",
    [("24h", timedelta(hours=24)), ("7d", timedelta(days=7)), ("30d", timedelta(days=30)), ("bogus", timedelta(days=7)), (None, timedelta(days=7))],
)
async def test_stats_window(service, repository, period, window):
    await service.get_stats(period)
    repository.aggregate_stats.assert_awaited_once_with(NOW - window)


async def test_stats_returns_repository_totals(service, repository):
    repository.aggregate_stats.return_value = LogStats(total_logs=4, login_count=2, logout_count=1, unique_users=2)

    stats = await service.get_stats("24h")

    assert stats.unique_users == 2
    assert stats.total_logs == 4


# ---------- deletion ----------


async def test_delete_missing_log_raises_not_found(service, repository):
    repository.get.return_value = None

    with pytest.raises(LogNotFoundError):
        await service.delete_log("nope")

    repository.delete.assert_not_awaited()


async def test_delete_existing_log(service, repository):
    repository.get.return_value = _login_log(NOW)

    await service.delete_log("login-1")

    repository.delete.assert_awaited_once_with("login-1")


async def test_bulk_delete_empty_ids_is_invalid(service, repository):
    with pytest.raises(InvalidInputError):
        await service.delete_logs([])
    repository.delete_many.assert_not_awaited()


async def test_bulk_delete_reports_repository_count(service, repository):
    repository.delete_many.return_value = 2

    deleted = await service.delete_logs(["a", "b", "c", "d"])

    assert deleted == 2
    repository.delete_many.assert_awaited_once_with(["a", "b", "c", "d"])
