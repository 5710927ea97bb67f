from datetime import date, timedelta

from prometheus_client import REGISTRY

from sehaty.reminders.models import Reminder, DailyStatus
from sehaty.utils.timezone import today_local

URL = "/api/v1/reminders"


def _create(client, headers, start, end, time="08:00"):
    response = client.post(
        URL,
        json={"title": "Metformin", "time": time, "start_date": start, "end_date": end},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


def test_get_by_date_returns_that_days_reminder_with_status(client, auth_headers):
    _create(client, auth_headers, "2025-02-01", "2025-02-03")

    response = client.get(f"{URL}/date/2025-02-02", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["time"] == "2025-02-02T08:00:00"
    assert body[0]["current_status"] == {"date": "2025-02-02", "status": "active", "is_taken": False}


def test_get_by_date_orders_by_time(client, auth_headers):
    _create(client, auth_headers, "2025-02-01", "2025-02-01", time="20:00")
    _create(client, auth_headers, "2025-02-01", "2025-02-01", time="07:30")

    body = client.get(f"{URL}/date/2025-02-01", headers=auth_headers).json()

    assert [r["time"] for r in body] == ["2025-02-01T07:30:00", "2025-02-01T20:00:00"]


def test_get_by_date_seeds_missing_entry_once(client, auth_headers, db):
    created = _create(client, auth_headers, "2025-02-01", "2025-02-01")
    reminder_id = created[0]["id"]
    db.query(DailyStatus).filter(DailyStatus.reminder_id == reminder_id).delete()
    db.commit()
    seeded_before = REGISTRY.get_sample_value("reminder_daily_statuses_seeded_total") or 0.0

    first = client.get(f"{URL}/date/2025-02-01", headers=auth_headers)
    second = client.get(f"{URL}/date/2025-02-01", headers=auth_headers)

    assert first.status_code == second.status_code == 200
    assert first.json()[0]["current_status"]["status"] == "active"
    assert db.query(DailyStatus).filter(DailyStatus.reminder_id == reminder_id).count() == 1
    assert REGISTRY.get_sample_value("reminder_daily_statuses_seeded_total") == seeded_before + 1


def test_get_by_date_only_returns_own_reminders(client, auth_headers, other_headers):
    _create(client, other_headers, "2025-02-01", "2025-02-01")

    body = client.get(f"{URL}/date/2025-02-01", headers=auth_headers).json()

    assert body == []


def test_get_by_date_rejects_malformed_date(client, auth_headers):
    for bad in ("2025-2-1", "not-a-date", "2025-13-01"):
        response = client.get(f"{URL}/date/{bad}", headers=auth_headers)
        assert response.status_code == 400


def test_mark_taken_for_another_day_leaves_reminder_untouched(client, auth_headers, db):
    reminder_id = _create(client, auth_headers, "2025-02-01", "2025-02-01")[0]["id"]

    response = client.post(
        f"{URL}/{reminder_id}/mark-taken",
        json={"date": "2025-02-01", "status": "completed"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["current_status"] == {"date": "2025-02-01", "status": "completed", "is_taken": True}
    assert body["status"] == "active"
    assert body["is_taken"] is False


def test_mark_taken_today_mirrors_onto_reminder(client, auth_headers):
    today = today_local().isoformat()
    reminder_id = _create(client, auth_headers, today, today)[0]["id"]

    response = client.post(
        f"{URL}/{reminder_id}/mark-taken",
        json={"date": today, "status": "completed"},
        headers=auth_headers,
    )

    body = response.json()
    assert body["status"] == "completed"
    assert body["is_taken"] is True

    response = client.post(
        f"{URL}/{reminder_id}/mark-taken",
        json={"date": today, "status": "missed"},
        headers=auth_headers,
    )

    body = response.json()
    assert body["current_status"]["is_taken"] is False
    assert body["status"] == "missed"
    assert body["is_taken"] is False


def test_mark_taken_creates_entry_for_unseen_date(client, auth_headers, db):
    reminder_id = _create(client, auth_headers, "2025-02-01", "2025-02-01")[0]["id"]
    later = (date(2025, 2, 1) + timedelta(days=10)).isoformat()

    response = client.post(
        f"{URL}/{reminder_id}/mark-taken",
        json={"date": later, "status": "missed"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    dates = {e["date"] for e in response.json()["daily_statuses"]}
    assert dates == {"2025-02-01", later}
    assert db.query(DailyStatus).filter(DailyStatus.reminder_id == reminder_id).count() == 2


def test_mark_taken_requires_date_and_status(client, auth_headers):
    reminder_id = _create(client, auth_headers, "2025-02-01", "2025-02-01")[0]["id"]

    response = client.post(
        f"{URL}/{reminder_id}/mark-taken", json={"status": "completed"}, headers=auth_headers
    )

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Date and status are required"
    assert body["received"] == {"date": None, "status": "completed"}


def test_mark_taken_rejects_unknown_status(client, auth_headers):
    reminder_id = _create(client, auth_headers, "2025-02-01", "2025-02-01")[0]["id"]

    response = client.post(
        f"{URL}/{reminder_id}/mark-taken",
        json={"date": "2025-02-01", "status": "skipped"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["received"]["status"] == "skipped"


def test_mark_taken_unknown_or_foreign_reminder_is_404(client, auth_headers, other_headers):
    reminder_id = _create(client, other_headers, "2025-02-01", "2025-02-01")[0]["id"]
    payload = {"date": "2025-02-01", "status": "completed"}

    assert client.post(f"{URL}/{reminder_id}/mark-taken", json=payload, headers=auth_headers).status_code == 404
    assert client.post(f"{URL}/999999/mark-taken", json=payload, headers=auth_headers).status_code == 404


def test_deleted_reminder_disappears(client, auth_headers, db):
    reminder_id = _create(client, auth_headers, "2025-02-01", "2025-02-01")[0]["id"]

    assert client.delete(f"{URL}/{reminder_id}", headers=auth_headers).status_code == 204

    assert client.get(URL, headers=auth_headers).json() == []
    assert client.get(f"{URL}/date/2025-02-01", headers=auth_headers).json() == []
    assert client.get(f"{URL}/{reminder_id}", headers=auth_headers).status_code == 404
    db.expire_all()
    assert db.get(Reminder, reminder_id).is_deleted is True


def test_update_ignores_null_fields(client, auth_headers):
    reminder_id = _create(client, auth_headers, "2025-02-01", "2025-02-01")[0]["id"]

    response = client.put(
        f"{URL}/{reminder_id}",
        json={"title": "Metformin 850", "notes": None},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Metformin 850"


def test_update_rejects_inverted_range(client, auth_headers):
    reminder_id = _create(client, auth_headers, "2025-02-01", "2025-02-01")[0]["id"]

    response = client.put(
        f"{URL}/{reminder_id}",
        json={"start_date": "2025-02-05T00:00:00"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    reminder = client.get(f"{URL}/{reminder_id}", headers=auth_headers).json()
    assert reminder["start_date"] == "2025-02-01T00:00:00"
