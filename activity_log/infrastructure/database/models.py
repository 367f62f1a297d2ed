# activity_log/infrastructure/database/models.py

import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger, Column, DateTime, Index, String, Text, Uuid

from activity_log.infrastructure.database.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserLog(Base):
    """ORM model for user activity logs. Rows are inserted and deleted, never updated."""

    __tablename__ = "user_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Back-reference only: no foreign key, logs survive changes to the user row.
    user_id = Column(String, nullable=False)
    username = Column(String, nullable=False)
    role = Column(String, nullable=False)
    action = Column(String(32), nullable=False)

    login_time = Column(DateTime(timezone=True), nullable=True)
    logout_time = Column(DateTime(timezone=True), nullable=True)
    session_duration = Column(BigInteger, nullable=True)  # milliseconds

    ip_address = Column(String, nullable=False)
    token_name = Column(String, nullable=False, default="N/A")
    user_agent = Column(Text, nullable=False, default="Unknown")

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


# Compound indexes backing the per-user, per-action and per-role read paths.
Index("ix_user_logs_user_id_created_at", UserLog.user_id, UserLog.created_at.desc())
Index("ix_user_logs_action_created_at", UserLog.action, UserLog.created_at.desc())
Index("ix_user_logs_role_created_at", UserLog.role, UserLog.created_at.desc())


class User(Base):
    """Read-only mirror of the host application's users table."""

    __tablename__ = "users"

    id = Column(String, primary_key=True)
    email = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    role = Column(String, nullable=False, default="user")
