"""Domain model for user activity logs. Pure business semantics, no ORM or infrastructure."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from activity_log.domain.exceptions import LogInvariantError


class UserAction(str, Enum):
    """Closed set of authentication-related actions that are logged."""

    LOGIN = "login"
    LOGOUT = "logout"
    REGISTER = "register"
    PASSWORD_RESET = "password_reset"


class StatsPeriod(str, Enum):
    """Trailing windows supported by log statistics."""

    LAST_24_HOURS = "24h"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"

    @property
    def window(self) -> timedelta:
        return _PERIOD_WINDOWS[self]

    @classmethod
    def parse(cls, value: Optional[str], default: "StatsPeriod") -> "StatsPeriod":
        """Unrecognized or missing values fall back to the default period."""
        try:
            return cls(value)
        except ValueError:
            return default


_PERIOD_WINDOWS = {
    StatsPeriod.LAST_24_HOURS: timedelta(hours=24),
    StatsPeriod.LAST_7_DAYS: timedelta(days=7),
    StatsPeriod.LAST_30_DAYS: timedelta(days=30),
}


@dataclass(frozen=True)
class UserSnapshot:
    """Identity of a user as seen by the user directory at one instant."""

    id: str
    email: str
    role: str
    full_name: Optional[str] = None


@dataclass(frozen=True)
class UserLogEntry:
    """
    A log entry ready to be written. Username and role are value copies taken at
    event time; they are never re-derived from the live user record.
    """

    user_id: str
    username: str
    role: str
    action: UserAction
    ip_address: str
    token_name: str
    user_agent: str
    login_time: Optional[datetime] = None
    logout_time: Optional[datetime] = None
    session_duration: Optional[int] = None  # milliseconds

    def __post_init__(self) -> None:
        if self.login_time is not None and self.action is not UserAction.LOGIN:
            raise LogInvariantError("login_time is only set on login entries")
        if self.logout_time is not None and self.action is not UserAction.LOGOUT:
            raise LogInvariantError("logout_time is only set on logout entries")
        if self.session_duration is not None:
            if self.action is not UserAction.LOGOUT:
                raise LogInvariantError("session_duration is only set on logout entries")
            if self.session_duration < 0:
                raise LogInvariantError("session_duration must not be negative")


def session_duration_ms(login_time: datetime, logout_time: datetime) -> int:
    """Elapsed milliseconds between login and logout, floored at zero for clock skew."""
    elapsed = logout_time - login_time
    return max(0, int(elapsed / timedelta(milliseconds=1)))
