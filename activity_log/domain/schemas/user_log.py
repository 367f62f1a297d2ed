"""Pydantic schemas for the user log API. camelCase on the wire, snake_case in Python."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from activity_log.domain.models import UserAction


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class UserLogCreateRequest(_CamelModel):
    """
    Request schema for recording an event. Required fields are checked by the
    domain validator so a missing field is reported as invalid input, not a schema error.
    """

    user_id: Optional[str] = None
    action: Optional[str] = None
    ip_address: Optional[str] = None
    token_name: Optional[str] = None
    user_agent: Optional[str] = None


class BulkDeleteRequest(_CamelModel):
    log_ids: Any = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class LinkedUserResponse(_CamelModel):
    id: str
    full_name: Optional[str] = None
    email: str


class UserLogResponse(_CamelModel):
    id: str
    user_id: str
    username: str
    role: str
    action: UserAction
    ip_address: str
    token_name: str
    user_agent: str
    login_time: Optional[datetime] = None
    logout_time: Optional[datetime] = None
    session_duration: Optional[int] = Field(None, ge=0, description="Milliseconds")
    created_at: datetime
    user: Optional[LinkedUserResponse] = None


class PaginationResponse(_CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class UserLogCreatedResponse(_CamelModel):
    success: bool = True
    message: str
    data: UserLogResponse


class UserLogListResponse(_CamelModel):
    success: bool = True
    data: List[UserLogResponse]
    pagination: PaginationResponse


class LogStatsResponse(_CamelModel):
    total_logs: int
    login_count: int
    logout_count: int
    unique_users: int


class LogStatsEnvelope(_CamelModel):
    success: bool = True
    data: LogStatsResponse


class DeleteResponse(_CamelModel):
    success: bool = True
    message: str
    deleted_count: Optional[int] = None
