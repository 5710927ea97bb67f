import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from sehaty.api import deps
from sehaty.models.user import User
from sehaty.utils.timezone import parse_calendar_date
from .models import Reminder, DailyStatus, ReminderStatus
from .schemas import ReminderCreate, ReminderRead, ReminderUpdate, MarkTakenRequest, DailyStatusRead
from .repository import get_user_reminder, list_user_reminders
from .service import ReminderService, InvalidScheduleError

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_read(reminder: Reminder, entry: Optional[DailyStatus] = None) -> ReminderRead:
    result = ReminderRead.model_validate(reminder)
    if entry is not None:
        result.current_status = DailyStatusRead.model_validate(entry)
    return result


@router.post("", response_model=List[ReminderRead], status_code=status.HTTP_201_CREATED)
def create_reminders(
    *,
    db: Session = Depends(deps.get_db),
    payload: ReminderCreate,
    current_user: User = Depends(deps.get_current_active_user),
):
    """Create one reminder for every day between start_date and end_date."""
    try:
        reminders = ReminderService(db).create_series(current_user, payload)
        return [_to_read(r, r.daily_statuses[0] if r.daily_statuses else None) for r in reminders]
    except InvalidScheduleError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating reminders for user {current_user.id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create reminders: {str(e)}")


@router.get("", response_model=List[ReminderRead])
def get_reminders(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    try:
        return [_to_read(r) for r in list_user_reminders(db, current_user.id)]
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch reminders: {str(e)}")


@router.get("/date/{date}", response_model=List[ReminderRead])
def get_reminders_by_date(
    date: str,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """Reminders active on a calendar day (YYYY-MM-DD), each with that day's status."""
    try:
        day = parse_calendar_date(date)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {date}. Expected YYYY-MM-DD")

    try:
        pairs = ReminderService(db).get_by_date(current_user, day)
        return [_to_read(reminder, entry) for reminder, entry in pairs]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching reminders of user {current_user.id} for {date}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch reminders by date: {str(e)}")


@router.post("/{reminder_id}/mark-taken", response_model=ReminderRead)
def mark_reminder_taken(
    reminder_id: int,
    payload: MarkTakenRequest,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    """Set the status of one day of a reminder."""
    received = payload.model_dump()
    if not payload.date or not payload.status:
        raise HTTPException(
            status_code=400,
            detail={"message": "Date and status are required", "received": received},
        )
    try:
        new_status = ReminderStatus(payload.status)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail={
                "message": f"Invalid status. Must be one of: {', '.join(s.value for s in ReminderStatus)}",
                "received": received,
            },
        )
    try:
        day = parse_calendar_date(payload.date)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail={"message": "Invalid date. Expected YYYY-MM-DD", "received": received},
        )

    try:
        result = ReminderService(db).mark_taken(current_user, reminder_id, day, new_status)
        if result is None:
            raise HTTPException(status_code=404, detail="Reminder not found")
        reminder, entry = result
        return _to_read(reminder, entry)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error marking reminder {reminder_id} for user {current_user.id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to update reminder status: {str(e)}")


@router.get("/{reminder_id}", response_model=ReminderRead)
def get_reminder(
    reminder_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    reminder = get_user_reminder(db, reminder_id, current_user.id)
    if not reminder:
        raise HTTPException(status_code=404, detail="Reminder not found")
    return _to_read(reminder)


@router.put("/{reminder_id}", response_model=ReminderRead)
def update_reminder(
    reminder_id: int,
    payload: ReminderUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    try:
        reminder = ReminderService(db).update_reminder(current_user, reminder_id, payload)
        if not reminder:
            raise HTTPException(status_code=404, detail="Reminder not found")
        return _to_read(reminder)
    except InvalidScheduleError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update reminder: {str(e)}")


@router.delete("/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reminder(
    reminder_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    try:
        reminder = ReminderService(db).delete_reminder(current_user, reminder_id)
        if not reminder:
            raise HTTPException(status_code=404, detail="Reminder not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete reminder: {str(e)}")
