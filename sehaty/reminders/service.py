"""
Reminder series generation and per-day status tracking
"""
import datetime as dt
import logging
from datetime import timedelta
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from .models import Reminder, DailyStatus, ReminderStatus
from .schemas import ReminderCreate, ReminderUpdate
from .repository import (
    find_daily_status,
    get_user_reminder,
    list_reminders_for_day,
)
from .metrics import (
    reminders_created_total,
    reminder_statuses_marked_total,
    reminder_daily_statuses_seeded_total,
)
from sehaty.models.user import User
from sehaty.models.prescription import Prescription
from sehaty.schemas.prescription import PrescriptionMedicine
from sehaty.utils.timezone import (
    combine_day_and_time,
    day_bounds,
    now_local,
    to_calendar_date,
    to_utc_naive,
    today_local,
    utcnow,
)

logger = logging.getLogger(__name__)


class InvalidScheduleError(ValueError):
    """Raised when a reminder series ends before it starts"""


class ReminderService:
    """Creates reminder series and tracks whether each day's dose was taken"""

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def create_series(self, user: User, data: ReminderCreate, prescription_id: Optional[int] = None) -> List[Reminder]:
        """
        Create one reminder per calendar day from start_date to end_date inclusive.

        Every day is committed on its own: if a later day fails, the days already
        written stay persisted.
        """
        first_day = to_calendar_date(data.start_date)
        last_day = to_calendar_date(data.end_date)
        if first_day > last_day:
            raise InvalidScheduleError(
                f"start_date {first_day.isoformat()} is after end_date {last_day.isoformat()}"
            )

        reminders: List[Reminder] = []
        current_day = first_day
        while current_day <= last_day:
            day_start, day_end = day_bounds(current_day)
            reminder = Reminder(
                user_id=user.id,
                medicine_id=data.medicine_id,
                prescription_id=prescription_id,
                product=data.product,
                title=data.title,
                description=data.description,
                time=combine_day_and_time(current_day, data.time),
                frequency=data.frequency,
                start_date=day_start,
                end_date=day_end,
                dosage=data.dosage,
                notes=data.notes,
                notification_preferences=data.notification_preferences,
                status=ReminderStatus.ACTIVE.value,
                is_taken=False,
                daily_statuses=[
                    DailyStatus(date=current_day, status=ReminderStatus.ACTIVE.value, is_taken=False)
                ],
            )
            self.db.add(reminder)
            self.db.commit()
            self.db.refresh(reminder)
            reminders.append(reminder)
            reminders_created_total.inc()
            current_day += timedelta(days=1)

        self._register_with_user(user, reminders)
        logger.info(
            f"Created {len(reminders)} reminders for user {user.id} "
            f"({first_day.isoformat()} .. {last_day.isoformat()})"
        )
        return reminders

    def create_for_prescription(
        self, patient: User, prescription: Prescription, medicines: List[PrescriptionMedicine]
    ) -> List[Reminder]:
        """
        Daily reminders for every prescribed medicine that references the catalog,
        from today until the prescription's valid_until (today only when it has none
        or it already lapsed).
        """
        now = now_local()
        today = now.date()
        valid_until = to_calendar_date(prescription.valid_until)
        last_day = valid_until if valid_until and valid_until >= today else today
        intake_time = now.time()

        created: List[Reminder] = []
        for item in medicines:
            if not item.medicine_id:
                continue
            schedule = ReminderCreate(
                title=prescription.title or item.name,
                medicine_id=item.medicine_id,
                time=intake_time,
                frequency=item.frequency,
                start_date=today,
                end_date=last_day,
                dosage=item.dosage,
                notes=item.notes,
            )
            created.extend(self.create_series(patient, schedule, prescription_id=prescription.id))
        return created

    def _register_with_user(self, user: User, reminders: List[Reminder]) -> None:
        known = {r.id for r in user.reminders}
        for reminder in reminders:
            if reminder.id not in known:
                user.reminders.append(reminder)
        self.db.add(user)
        self.db.commit()

    # ------------------------------------------------------------------
    # Daily status tracking
    # ------------------------------------------------------------------
    def get_by_date(self, user: User, day: dt.date) -> List[Tuple[Reminder, DailyStatus]]:
        """Reminders active on a day, each paired with that day's status entry"""
        reminders = list_reminders_for_day(self.db, user.id, day)
        results: List[Tuple[Reminder, DailyStatus]] = []
        seeded = 0
        for reminder in reminders:
            entry = find_daily_status(reminder, day)
            if entry is None:
                entry = DailyStatus(date=day, status=ReminderStatus.ACTIVE.value, is_taken=False)
                reminder.daily_statuses.append(entry)
                seeded += 1
            results.append((reminder, entry))

        if seeded:
            self.db.commit()
            reminder_daily_statuses_seeded_total.inc(seeded)
            logger.info(f"Seeded {seeded} daily statuses for user {user.id} on {day.isoformat()}")
        return results

    def mark_taken(
        self, user: User, reminder_id: int, day: dt.date, status: ReminderStatus
    ) -> Optional[Tuple[Reminder, DailyStatus]]:
        """
        Set the status of one day. When that day is today the reminder's own
        status/is_taken are updated too. Returns None when the reminder is not found.
        """
        reminder = get_user_reminder(self.db, reminder_id, user.id)
        if not reminder:
            return None

        entry = find_daily_status(reminder, day)
        if entry is None:
            entry = DailyStatus(date=day, status=ReminderStatus.ACTIVE.value, is_taken=False)
            reminder.daily_statuses.append(entry)

        is_taken = status == ReminderStatus.COMPLETED
        entry.status = status.value
        entry.is_taken = is_taken

        if day == today_local():
            reminder.status = status.value
            reminder.is_taken = is_taken

        self.db.add(reminder)
        self.db.commit()
        self.db.refresh(reminder)
        reminder_statuses_marked_total.labels(status=status.value).inc()
        return reminder, entry

    # ------------------------------------------------------------------
    # Plain CRUD
    # ------------------------------------------------------------------
    def update_reminder(self, user: User, reminder_id: int, data: ReminderUpdate) -> Optional[Reminder]:
        reminder = get_user_reminder(self.db, reminder_id, user.id)
        if not reminder:
            return None

        update_data = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        for field in ("time", "start_date", "end_date"):
            if field in update_data:
                update_data[field] = to_utc_naive(update_data[field])
        first_day = to_calendar_date(update_data.get("start_date", reminder.start_date))
        last_day = to_calendar_date(update_data.get("end_date", reminder.end_date))
        if first_day and last_day and first_day > last_day:
            raise InvalidScheduleError(
                f"start_date {first_day.isoformat()} is after end_date {last_day.isoformat()}"
            )
        if "status" in update_data:
            update_data["status"] = ReminderStatus(update_data["status"]).value

        for field, value in update_data.items():
            setattr(reminder, field, value)

        self.db.add(reminder)
        self.db.commit()
        self.db.refresh(reminder)
        return reminder

    def delete_reminder(self, user: User, reminder_id: int) -> Optional[Reminder]:
        """Soft delete; the reminder stops showing up in listings"""
        reminder = get_user_reminder(self.db, reminder_id, user.id)
        if not reminder:
            return None
        now = utcnow()
        reminder.is_deleted = True
        reminder.deleted_at = now
        self.db.add(reminder)
        self.db.commit()
        self.db.refresh(reminder)
        logger.info(f"Reminder {reminder.id} deleted by user {user.id}")
        return reminder
