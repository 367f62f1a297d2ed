"""DB-backed user directory. Reads identity and role from the host users table."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from activity_log.application.exceptions import StoreUnavailableError
from activity_log.domain.models import UserSnapshot
from activity_log.infrastructure.database.models import User


class DbUserDirectory:
    """Implements UserDirectory protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_user_by_id(self, user_id: str) -> Optional[UserSnapshot]:
        try:
            result = await self._session.execute(select(User).where(User.id == user_id))
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"User lookup failed: {e}") from e
        orm = result.scalar_one_or_none()
        if orm is None:
            return None
        return UserSnapshot(
            id=orm.id,
            email=orm.email,
            role=orm.role,
            full_name=orm.full_name,
        )
