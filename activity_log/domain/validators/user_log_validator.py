"""Validators for user log requests. Pure functions, no infrastructure or DB access."""

from typing import Any, List, Optional, Tuple

from activity_log.domain.exceptions import InvalidInputError
from activity_log.domain.models import (
    MATCH_ALL,
    SORTABLE_FIELDS,
    LogFilter,
    LogSort,
    SortDirection,
    UserAction,
)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def validate_event_fields(
    user_id: Optional[str],
    action: Optional[str],
    ip_address: Optional[str],
) -> UserAction:
    """Require user_id, action and ip_address; action must be in the closed set."""
    if _is_blank(user_id) or _is_blank(action) or _is_blank(ip_address):
        raise InvalidInputError("Missing required fields: userId, action, ipAddress")
    try:
        return UserAction(action)
    except ValueError:
        allowed = ", ".join(a.value for a in UserAction)
        raise InvalidInputError(f"Invalid action '{action}'; expected one of: {allowed}") from None


def validate_page(page: int, limit: int, max_limit: int) -> Tuple[int, int]:
    """Return (page, effective limit). Limits above max_limit are clamped to it."""
    if page < 1:
        raise InvalidInputError("page must be 1 or greater")
    if limit < 1:
        raise InvalidInputError("limit must be 1 or greater")
    return page, min(limit, max_limit)


def parse_sort(sort_by: Optional[str], sort_order: Optional[str]) -> LogSort:
    field = SORTABLE_FIELDS.get(sort_by or "createdAt")
    if field is None:
        allowed = ", ".join(SORTABLE_FIELDS)
        raise InvalidInputError(f"Cannot sort by '{sort_by}'; expected one of: {allowed}")
    try:
        direction = SortDirection((sort_order or SortDirection.DESC.value).lower())
    except ValueError:
        raise InvalidInputError("sortOrder must be 'asc' or 'desc'") from None
    return LogSort(field=field, direction=direction)


def build_log_filter(
    role: Optional[str] = None,
    action: Optional[str] = None,
    search: Optional[str] = None,
    start_date=None,
    end_date=None,
) -> LogFilter:
    """Drop the 'all' sentinel and blank values so they do not constrain the query."""
    return LogFilter(
        role=None if _is_blank(role) or role == MATCH_ALL else role,
        action=None if _is_blank(action) or action == MATCH_ALL else action,
        search=None if _is_blank(search) else search,
        start_date=start_date,
        end_date=end_date,
    )


def validate_log_ids(log_ids: Any) -> List[str]:
    """Bulk delete requires a non-empty list of ids."""
    if not isinstance(log_ids, list) or not log_ids:
        raise InvalidInputError("Please provide an array of log IDs to delete")
    return [str(log_id) for log_id in log_ids]
