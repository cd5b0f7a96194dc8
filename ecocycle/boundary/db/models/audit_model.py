"""
Audit log and rate limit ORM models.

Dependencies: sqlalchemy, ecocycle.boundary.db.base
System role: Append-only trail of sensitive writes and per-user quota buckets
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Integer, JSON, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ecocycle.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class AuditLogModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Audit log ORM model.

    Attributes:
        user_id: Acting user (None for system actions)
        action: Action name, e.g. REDEEM_REWARD
        table_name: Affected table
        record_id: Affected row
        old_data: Snapshot before the change
        new_data: Snapshot or summary after the change
        ip_address: Caller address
        user_agent: Caller user agent
    """

    __tablename__ = "audit_logs"

    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True, index=True)
    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    table_name: Mapped[str] = mapped_column(String(100), nullable=False)
    record_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    old_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    new_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)


class RateLimitModel(Base, UUIDMixin):
    """
    Per-minute request bucket for one user and action.

    Attributes:
        user_id: Counted user
        action: Quota name, e.g. waste_detection
        count: Requests in this minute
        window_start: Minute the bucket covers (UTC, truncated)
    """

    __tablename__ = "rate_limits"
    __table_args__ = (
        UniqueConstraint("user_id", "action", "window_start", name="uq_rate_limits_bucket"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    action: Mapped[str] = mapped_column(String(100), nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    window_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
