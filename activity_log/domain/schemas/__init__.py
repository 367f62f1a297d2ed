"""Domain schemas. Request/response and validation."""

from activity_log.domain.schemas.user_log import (
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

__all__ = [
    "BulkDeleteRequest",
    "DeleteResponse",
    "LinkedUserResponse",
    "LogStatsEnvelope",
    "LogStatsResponse",
    "PaginationResponse",
    "UserLogCreatedResponse",
    "UserLogCreateRequest",
    "UserLogListResponse",
    "UserLogResponse",
]
