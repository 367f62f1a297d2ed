# Application layer: services that orchestrate domain and infrastructure.

from activity_log.application.exceptions import ApplicationError, StoreUnavailableError
from activity_log.application.user_directory import UserDirectory
from activity_log.application.user_log_repository import (
    LinkedUser,
    PersistedUserLog,
    UserLogRepository,
)
from activity_log.application.user_log_service import LogPage, UserLogService

__all__ = [
    "ApplicationError",
    "LinkedUser",
    "LogPage",
    "PersistedUserLog",
    "StoreUnavailableError",
    "UserDirectory",
    "UserLogRepository",
    "UserLogService",
]
