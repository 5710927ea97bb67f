"""
Reminder models - one row per calendar day of a series, plus per-date status entries
"""
from enum import Enum
from sqlalchemy import Column, Integer, String, DateTime, Date, Boolean, Text, ForeignKey, JSON, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from sehaty.db.base import Base
from sehaty.utils.timezone import utcnow


class ReminderStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    MISSED = "missed"


class Reminder(Base):
    __tablename__ = "reminders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    medicine_id = Column(Integer, ForeignKey("medicines.id"), nullable=True)
    prescription_id = Column(Integer, ForeignKey("prescriptions.id"), nullable=True)

    product = Column(JSON, nullable=True)
    title = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    time = Column(DateTime, nullable=True)  # Scheduled intake instant for this day
    frequency = Column(String, nullable=True)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    dosage = Column(JSON, nullable=True)  # Free text or structured ({"frequency": ..., "amount": ...})
    notes = Column(Text, nullable=True)
    notification_preferences = Column(JSON, nullable=True)

    # Mirrors today's daily status for quick "today" lookups
    status = Column(String, nullable=False, default=ReminderStatus.ACTIVE.value)
    is_taken = Column(Boolean, nullable=False, default=False)

    is_deleted = Column(Boolean, nullable=False, default=False)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="reminders")
    medicine = relationship("Medicine")
    prescription = relationship("Prescription", back_populates="reminders")
    daily_statuses = relationship(
        "DailyStatus",
        back_populates="reminder",
        cascade="all, delete-orphan",
        order_by="DailyStatus.date",
    )

    __table_args__ = (
        Index("ix_reminders_user_range", "user_id", "is_deleted", "start_date", "end_date"),
        Index("ix_reminders_user_time", "user_id", "time"),
        Index("ix_reminders_prescription", "prescription_id"),
    )


class DailyStatus(Base):
    """Whether a reminder's dose was taken on one calendar date"""
    __tablename__ = "reminder_daily_statuses"

    id = Column(Integer, primary_key=True, index=True)
    reminder_id = Column(Integer, ForeignKey("reminders.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    status = Column(String, nullable=False, default=ReminderStatus.ACTIVE.value)
    is_taken = Column(Boolean, nullable=False, default=False)

    reminder = relationship("Reminder", back_populates="daily_statuses")

    __table_args__ = (
        UniqueConstraint("reminder_id", "date", name="uq_reminder_daily_status_date"),
    )
