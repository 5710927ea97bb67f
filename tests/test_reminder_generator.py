from datetime import date, time

import pytest
from prometheus_client import REGISTRY

from sehaty.reminders.models import Reminder, DailyStatus
from sehaty.reminders.schemas import ReminderCreate
from sehaty.reminders.service import ReminderService, InvalidScheduleError

URL = "/api/v1/reminders"


def _payload(**overrides):
    payload = {
        "title": "Vitamin D",
        "time": "08:30",
        "frequency": "daily",
        "start_date": "2025-01-01",
        "end_date": "2025-01-03",
        "dosage": {"amount": "1 tablet", "frequency": "daily"},
    }
    payload.update(overrides)
    return payload


def test_one_reminder_per_calendar_day(client, auth_headers, user):
    response = client.post(URL, json=_payload(), headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    assert len(body) == 3
    for index, reminder in enumerate(body):
        day = f"2025-01-0{index + 1}"
        assert reminder["user_id"] == user.id
        assert reminder["start_date"] == f"{day}T00:00:00"
        assert reminder["end_date"] == f"{day}T23:59:59.999999"
        assert reminder["time"] == f"{day}T08:30:00"
        assert reminder["status"] == "active"
        assert reminder["is_taken"] is False
        assert reminder["daily_statuses"] == [{"date": day, "status": "active", "is_taken": False}]


def test_single_day_range_creates_one_reminder(client, auth_headers):
    response = client.post(URL, json=_payload(end_date="2025-01-01"), headers=auth_headers)

    assert response.status_code == 201
    assert len(response.json()) == 1


def test_start_after_end_is_rejected(client, auth_headers, db):
    response = client.post(
        URL, json=_payload(start_date="2025-01-05", end_date="2025-01-01"), headers=auth_headers
    )

    assert response.status_code == 400
    assert db.query(Reminder).count() == 0


def test_datetime_time_of_day_drops_seconds(client, auth_headers):
    response = client.post(
        URL,
        json=_payload(time="2024-12-25T21:15:45Z", end_date="2025-01-02"),
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert [r["time"] for r in response.json()] == ["2025-01-01T21:15:00", "2025-01-02T21:15:00"]


def test_requires_authentication(client):
    response = client.post(URL, json=_payload())

    assert response.status_code == 401


def test_service_registers_series_with_user(db, user):
    before = REGISTRY.get_sample_value("reminders_created_total") or 0.0
    schedule = ReminderCreate(
        title="Antibiotic",
        time=time(9, 0),
        start_date=date(2025, 3, 30),
        end_date=date(2025, 4, 2),
    )

    reminders = ReminderService(db).create_series(user, schedule)

    assert [r.start_date.date() for r in reminders] == [
        date(2025, 3, 30), date(2025, 3, 31), date(2025, 4, 1), date(2025, 4, 2)
    ]
    assert {r.id for r in user.reminders} == {r.id for r in reminders}
    assert db.query(DailyStatus).count() == 4
    assert REGISTRY.get_sample_value("reminders_created_total") == before + 4


def test_service_rejects_inverted_range(db, user):
    schedule = ReminderCreate(time=time(9, 0), start_date=date(2025, 1, 2), end_date=date(2025, 1, 1))

    with pytest.raises(InvalidScheduleError):
        ReminderService(db).create_series(user, schedule)


def test_earlier_days_survive_a_failure_mid_series(db, user, monkeypatch):
    service = ReminderService(db)
    original_commit = db.commit
    calls = {"count": 0}

    def failing_commit():
        calls["count"] += 1
        if calls["count"] == 3:
            raise RuntimeError("database went away")
        original_commit()

    monkeypatch.setattr(db, "commit", failing_commit)
    schedule = ReminderCreate(time=time(7, 0), start_date=date(2025, 1, 1), end_date=date(2025, 1, 5))

    with pytest.raises(RuntimeError):
        service.create_series(user, schedule)

    monkeypatch.setattr(db, "commit", original_commit)
    db.rollback()
    assert db.query(Reminder).count() == 2
