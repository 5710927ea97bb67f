"""
Schemas for reminder series, single-day reminders and their daily statuses
"""
import datetime as dt
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

from .models import ReminderStatus


class DailyStatusRead(BaseModel):
    date: dt.date
    status: ReminderStatus
    is_taken: bool

    class Config:
        from_attributes = True


class ReminderMedicine(BaseModel):
    id: int
    name: str
    image: Optional[str] = None

    class Config:
        from_attributes = True


class ReminderCreate(BaseModel):
    """Schedule of a reminder series; one reminder is created per day in range"""
    title: Optional[str] = None
    description: Optional[str] = None
    product: Optional[Any] = None
    medicine_id: Optional[int] = None
    time: Union[dt.datetime, dt.time] = Field(..., description="Time of day to take the dose (ISO datetime or HH:MM)")
    frequency: Optional[str] = None
    start_date: Union[dt.datetime, dt.date]
    end_date: Union[dt.datetime, dt.date]
    dosage: Optional[Union[Dict[str, Any], str]] = None
    notes: Optional[str] = None
    notification_preferences: Optional[Dict[str, Any]] = None


class ReminderUpdate(BaseModel):
    """Partial update; fields left out or null are not touched"""
    title: Optional[str] = None
    description: Optional[str] = None
    time: Optional[dt.datetime] = None
    frequency: Optional[str] = None
    start_date: Optional[dt.datetime] = None
    end_date: Optional[dt.datetime] = None
    dosage: Optional[Union[Dict[str, Any], str]] = None
    notes: Optional[str] = None
    product: Optional[Any] = None
    notification_preferences: Optional[Dict[str, Any]] = None
    status: Optional[ReminderStatus] = None


class MarkTakenRequest(BaseModel):
    # Both fields are checked by the endpoint so a bad payload can be echoed back
    date: Optional[str] = None
    status: Optional[str] = None


class ReminderRead(BaseModel):
    id: int
    user_id: Optional[int] = None
    medicine_id: Optional[int] = None
    prescription_id: Optional[int] = None
    medicine: Optional[ReminderMedicine] = None
    product: Optional[Any] = None
    title: Optional[str] = None
    description: Optional[str] = None
    time: Optional[dt.datetime] = None
    frequency: Optional[str] = None
    start_date: Optional[dt.datetime] = None
    end_date: Optional[dt.datetime] = None
    dosage: Optional[Union[Dict[str, Any], str]] = None
    notes: Optional[str] = None
    notification_preferences: Optional[Dict[str, Any]] = None
    status: ReminderStatus
    is_taken: bool
    daily_statuses: List[DailyStatusRead] = []
    current_status: Optional[DailyStatusRead] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True
