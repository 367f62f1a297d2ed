"""User logs API router: create, list, stats, single and bulk delete."""

from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request

from activity_log.api.dependencies import get_user_log_service
from activity_log.application.user_log_repository import PersistedUserLog
from activity_log.application.user_log_service import UserLogService
from activity_log.domain.models import LogStats
from activity_log.domain.schemas import (
    BulkDeleteRequest,
    DeleteResponse,
    LinkedUserResponse,
    LogStatsEnvelope,
    LogStatsResponse,
    PaginationResponse,
    UserLogCreatedResponse,
    UserLogCreateRequest,
    UserLogListResponse,
    UserLogResponse,
)
from activity_log.domain.validators import build_log_filter, parse_sort

router = APIRouter()

Service = Annotated[UserLogService, Depends(get_user_log_service)]


def _persisted_to_response(p: PersistedUserLog) -> UserLogResponse:
    user = None
    if p.user is not None:
        user = LinkedUserResponse(id=p.user.id, full_name=p.user.full_name, email=p.user.email)
    return UserLogResponse(
        id=p.id,
        user_id=p.user_id,
        username=p.username,
        role=p.role,
        action=p.action,
        ip_address=p.ip_address,
        token_name=p.token_name,
        user_agent=p.user_agent,
        login_time=p.login_time,
        logout_time=p.logout_time,
        session_duration=p.session_duration,
        created_at=p.created_at,
        user=user,
    )


def _stats_to_response(stats: LogStats) -> LogStatsResponse:
    return LogStatsResponse(
        total_logs=stats.total_logs,
        login_count=stats.login_count,
        logout_count=stats.logout_count,
        unique_users=stats.unique_users,
    )


@router.post("/create", response_model=UserLogCreatedResponse, status_code=201)
async def create_user_log(request: Request, body: UserLogCreateRequest, service: Service):
    """Record one authentication event. The request's User-Agent is the fallback client string."""
    persisted = await service.record_event(
        user_id=body.user_id,
        action=body.action,
        ip_address=body.ip_address,
        token_name=body.token_name,
        user_agent=body.user_agent,
        fallback_user_agent=request.headers.get("user-agent"),
    )
    return UserLogCreatedResponse(
        message="User log created successfully",
        data=_persisted_to_response(persisted),
    )


@router.get("/logs", response_model=UserLogListResponse)
async def list_user_logs(
    service: Service,
    page: int = 1,
    limit: Optional[int] = None,
    role: Optional[str] = None,
    action: Optional[str] = None,
    search: Optional[str] = None,
    start_date: Annotated[Optional[datetime], Query(alias="startDate")] = None,
    end_date: Annotated[Optional[datetime], Query(alias="endDate")] = None,
    sort_by: Annotated[str, Query(alias="sortBy")] = "createdAt",
    sort_order: Annotated[str, Query(alias="sortOrder")] = "desc",
):
    """Filtered, sorted, paginated log listing. 'all' disables the role/action filters."""
    log_page = await service.list_logs(
        log_filter=build_log_filter(
            role=role,
            action=action,
            search=search,
            start_date=start_date,
            end_date=end_date,
        ),
        sort=parse_sort(sort_by, sort_order),
        page=page,
        limit=limit,
    )
    p = log_page.pagination
    return UserLogListResponse(
        data=[_persisted_to_response(r) for r in log_page.records],
        pagination=PaginationResponse(
            current_page=p.current_page,
            total_pages=p.total_pages,
            total_items=p.total_items,
            items_per_page=p.items_per_page,
        ),
    )


@router.get("/stats", response_model=LogStatsEnvelope)
async def get_user_log_stats(service: Service, period: Optional[str] = None):
    """Totals over the trailing 24h, 7d or 30d; anything else means the default period."""
    stats = await service.get_stats(period)
    return LogStatsEnvelope(data=_stats_to_response(stats))


@router.delete("/logs/{log_id}", response_model=DeleteResponse, response_model_exclude_none=True)
async def delete_user_log(log_id: str, service: Service):
    await service.delete_log(log_id)
    return DeleteResponse(message="Log entry deleted successfully")


@router.delete("/logs", response_model=DeleteResponse)
async def delete_user_logs(service: Service, body: Optional[BulkDeleteRequest] = None):
    """Bulk delete by id. Ids that no longer exist are not an error; they are just not counted."""
    deleted = await service.delete_logs(body.log_ids if body is not None else None)
    return DeleteResponse(
        message=f"{deleted} log entries deleted successfully",
        deleted_count=deleted,
    )
