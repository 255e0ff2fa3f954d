"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from device_pool.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return ``value`` as an aware UTC timestamp; naive values are taken as UTC.

    SQLite keeps no offset, so timestamps are written and read back in UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True)
    email = Column(String(100), unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    last_login_at = Column(DateTime(timezone=True))


class Device(Base):
    __tablename__ = "devices"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    sequence = Column(Integer, nullable=False, unique=True)
    model = Column(String(100), nullable=False)
    os = Column(String(100), nullable=False)
    manufacturer = Column(String(100), nullable=False)
    registered_by = Column(String(36), nullable=False, index=True)
    registered_at = Column(DateTime(timezone=True), nullable=False)
    is_checked_out = Column(Boolean, nullable=False, default=False)
    last_checked_out_by = Column(String(36))
    last_checked_out_date = Column(DateTime(timezone=True))
    last_checked_in_date = Column(DateTime(timezone=True))

    feedbacks = relationship(
        "DeviceFeedback",
        back_populates="device",
        order_by=lambda: DeviceFeedback.id.desc(),
        lazy="selectin",
        passive_deletes=True,
    )

    __table_args__ = (
        # A user may be the active holder of one device at a time.
        Index(
            "uq_devices_active_holder",
            "last_checked_out_by",
            unique=True,
            sqlite_where=is_checked_out.is_(True),
            postgresql_where=is_checked_out.is_(True),
        ),
    )


class DeviceFeedback(Base):
    __tablename__ = "device_feedback"

    id = Column(Integer, primary_key=True, autoincrement=True)
    device_id = Column(
        String(36), ForeignKey("devices.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reviewer_id = Column(String(36), nullable=False)
    reviewer_name = Column(String(100), nullable=False)
    rating = Column(Integer, nullable=False, default=5)
    text = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False)

    device = relationship("Device", back_populates="feedbacks")

    __table_args__ = (
        UniqueConstraint("device_id", "reviewer_id", name="uq_device_feedback_reviewer"),
    )
