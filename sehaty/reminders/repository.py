import datetime as dt
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload, selectinload
from sqlalchemy import and_, or_, update

from .models import Reminder, DailyStatus
from sehaty.utils.timezone import day_bounds, format_calendar_date, utcnow


def get_user_reminder(db: Session, reminder_id: int, user_id: int) -> Optional[Reminder]:
    return (
        db.query(Reminder)
        .options(selectinload(Reminder.daily_statuses), joinedload(Reminder.medicine))
        .filter(
            Reminder.id == reminder_id,
            Reminder.user_id == user_id,
            Reminder.is_deleted == False,  # noqa: E712
        )
        .first()
    )


def list_user_reminders(db: Session, user_id: int) -> List[Reminder]:
    return (
        db.query(Reminder)
        .options(selectinload(Reminder.daily_statuses), joinedload(Reminder.medicine))
        .filter(Reminder.user_id == user_id, Reminder.is_deleted == False)  # noqa: E712
        .order_by(Reminder.time.asc())
        .all()
    )


def list_reminders_for_day(db: Session, user_id: int, day: dt.date) -> List[Reminder]:
    """Reminders whose range overlaps the day, or whose intake time falls inside it"""
    day_start, day_end = day_bounds(day)
    return (
        db.query(Reminder)
        .options(selectinload(Reminder.daily_statuses), joinedload(Reminder.medicine))
        .filter(
            Reminder.user_id == user_id,
            Reminder.is_deleted == False,  # noqa: E712
            or_(
                and_(Reminder.start_date <= day_end, Reminder.end_date >= day_start),
                and_(Reminder.time >= day_start, Reminder.time <= day_end),
            ),
        )
        .order_by(Reminder.time.asc())
        .all()
    )


def list_prescription_reminders(db: Session, prescription_id: int) -> List[Reminder]:
    return (
        db.query(Reminder)
        .options(selectinload(Reminder.daily_statuses), joinedload(Reminder.medicine))
        .filter(Reminder.prescription_id == prescription_id, Reminder.is_deleted == False)  # noqa: E712
        .order_by(Reminder.time.asc())
        .all()
    )


def find_daily_status(reminder: Reminder, day: dt.date) -> Optional[DailyStatus]:
    """Entry for a calendar date, matched on the normalized YYYY-MM-DD string"""
    wanted = format_calendar_date(day)
    for entry in reminder.daily_statuses:
        if format_calendar_date(entry.date) == wanted:
            return entry
    return None


def set_prescription_reminders_status(db: Session, prescription_id: int, status: str) -> None:
    db.execute(
        update(Reminder)
        .where(Reminder.prescription_id == prescription_id)
        .values(status=status, updated_at=utcnow())
    )


def soft_delete_prescription_reminders(db: Session, prescription_id: int) -> None:
    now = utcnow()
    db.execute(
        update(Reminder)
        .where(Reminder.prescription_id == prescription_id)
        .values(is_deleted=True, deleted_at=now, updated_at=now)
    )
