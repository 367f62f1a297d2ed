"""User directory protocol: read-only access to the host application's users."""

from typing import Optional, Protocol

from activity_log.domain.models import UserSnapshot


class UserDirectory(Protocol):
    async def find_user_by_id(self, user_id: str) -> Optional[UserSnapshot]:
        """Return the user's current identity and role, or None if absent."""
        ...
