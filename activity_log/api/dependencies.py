"""FastAPI dependency injection: DB session, UserLogService."""

import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from activity_log.application.user_log_service import UserLogService
from activity_log.config.settings import AppSettings, get_settings
from activity_log.infrastructure.database.session import get_db
from activity_log.infrastructure.database.user_directory_db import DbUserDirectory
from activity_log.infrastructure.database.user_log_repository_db import DbUserLogRepository


async def get_user_log_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[AppSettings, Depends(get_settings)],
) -> UserLogService:
    """Build UserLogService with a request-scoped repository and user directory."""
    return UserLogService(
        repository=DbUserLogRepository(db),
        user_directory=DbUserDirectory(db),
        settings=settings,
        logger=logging.getLogger("activity_log.user_logs"),
    )

