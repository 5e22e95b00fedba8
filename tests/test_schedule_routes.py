"""Tests for sessions, bookings and self-logged workouts"""
from datetime import datetime, timedelta

from coachrpg.models.character import RPGCharacter, XPLogEntry


def _create_session(client, admin_headers, client_id, **overrides):
    body = {
        "client_id": client_id,
        "date_time": (datetime.now() + timedelta(days=1)).replace(microsecond=0).isoformat(),
        "duration": 60,
        "session_type": "ONE_ON_ONE",
        "focus_type": "STRENGTH",
    }
    body.update(overrides)
    return client.post("/api/schedule", json=body, headers=admin_headers)


def test_admin_creates_confirmed_session(client, admin_headers, client_user):
    resp = _create_session(client, admin_headers, client_user.id)

    assert resp.status_code == 201
    appointment = resp.get_json()["appointment"]
    assert appointment["status"] == "CONFIRMED"
    assert appointment["booked_by"] == "ADMIN"


def test_create_session_validates_duration(client, admin_headers, client_user):
    resp = _create_session(client, admin_headers, client_user.id, duration=5)
    assert resp.status_code == 400


def test_completing_session_awards_rpg(client, admin_headers, client_user):
    appointment_id = _create_session(client, admin_headers, client_user.id).get_json()[
        "appointment"
    ]["id"]

    resp = client.put(
        f"/api/schedule/{appointment_id}", json={"status": "COMPLETED"}, headers=admin_headers
    )

    assert resp.status_code == 200
    rpg = resp.get_json()["rpg"]
    assert rpg["success"] is True
    assert rpg["xp_awarded"] == 100
    assert rpg["stats_updated"] == {"strength": 1}

    character = RPGCharacter.query.filter_by(user_id=client_user.id).one()
    assert character.xp == 100
    assert XPLogEntry.query.one().reference_id == str(appointment_id)


def test_completing_twice_awards_once(client, admin_headers, client_user):
    appointment_id = _create_session(client, admin_headers, client_user.id).get_json()[
        "appointment"
    ]["id"]

    client.put(f"/api/schedule/{appointment_id}", json={"status": "COMPLETED"}, headers=admin_headers)
    resp = client.put(
        f"/api/schedule/{appointment_id}", json={"status": "COMPLETED"}, headers=admin_headers
    )

    assert "rpg" not in resp.get_json()
    assert XPLogEntry.query.count() == 1


def test_client_sees_only_own_sessions(client, admin_headers, client_headers, client_user, other_client):
    _create_session(client, admin_headers, client_user.id)
    _create_session(client, admin_headers, other_client.id)

    resp = client.get("/api/schedule", headers=client_headers)

    assert resp.status_code == 200
    appointments = resp.get_json()["appointments"]
    assert len(appointments) == 1
    assert appointments[0]["client_id"] == client_user.id


def test_cancel_is_soft_delete(client, admin_headers, client_user):
    appointment_id = _create_session(client, admin_headers, client_user.id).get_json()[
        "appointment"
    ]["id"]

    resp = client.delete(f"/api/schedule/{appointment_id}?reason=sick", headers=admin_headers)

    assert resp.status_code == 200
    appointment = resp.get_json()["appointment"]
    assert appointment["status"] == "CANCELLED"
    assert appointment["cancel_reason"] == "sick"


def test_client_booking_pending_approval(client, client_headers):
    resp = client.post(
        "/api/client/booking",
        json={
            "date_time": (datetime.now() + timedelta(days=2)).replace(microsecond=0).isoformat(),
            "duration": 45,
            "session_type": "ONE_ON_ONE",
        },
        headers=client_headers,
    )

    assert resp.status_code == 201
    assert resp.get_json()["appointment"]["status"] == "PENDING_APPROVAL"


def test_client_booking_rejects_past(client, client_headers):
    resp = client.post(
        "/api/client/booking",
        json={
            "date_time": (datetime.now() - timedelta(days=1)).replace(microsecond=0).isoformat(),
            "duration": 45,
            "session_type": "ONE_ON_ONE",
        },
        headers=client_headers,
    )
    assert resp.status_code == 400


def test_log_workout_awards_self_logged_xp(client, client_headers, client_user):
    resp = client.post(
        "/api/client/log-workout",
        json={
            "date": datetime.now().replace(microsecond=0).isoformat(),
            "focus_type": "CARDIO",
            "duration": "45",
        },
        headers=client_headers,
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["appointment"]["workout_type"] == "SELF_LOGGED"
    assert body["appointment"]["status"] == "COMPLETED"
    assert body["rpg"]["xp_awarded"] == 75
    assert body["rpg"]["stats_updated"] == {"endurance": 1}
    assert body["rpg"]["streak_update"]["current_streak"] == 1


def test_log_workout_rejects_old_dates(client, client_headers):
    resp = client.post(
        "/api/client/log-workout",
        json={
            "date": (datetime.now() - timedelta(days=10)).replace(microsecond=0).isoformat(),
            "focus_type": "STRENGTH",
        },
        headers=client_headers,
    )
    assert resp.status_code == 400
