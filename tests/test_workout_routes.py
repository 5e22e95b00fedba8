"""Tests for the workout journal"""
from datetime import datetime

from coachrpg.models.character import XPLogEntry


def _workout_body(**overrides):
    body = {
        "name": "Leg day",
        "date": datetime.now().replace(microsecond=0).isoformat(),
        "focus_type": "STRENGTH",
        "exercises": [
            {
                "name": "Squat",
                "category": "STRENGTH",
                "sets": [{"reps": 5, "weight": 100, "weight_unit": "kg"}],
            }
        ],
    }
    body.update(overrides)
    return body


def test_completed_workout_awards_xp(client, client_headers, client_user):
    resp = client.post("/api/workouts", json=_workout_body(), headers=client_headers)

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["xp_awarded"] == 75
    assert body["rpg"]["success"] is True
    assert body["workout"]["exercises"][0]["sets"][0]["set_number"] == 1

    entry = XPLogEntry.query.one()
    assert entry.reference_id == f"workout-{body['workout']['id']}"


def test_planned_workout_awards_nothing_until_completed(client, client_headers):
    resp = client.post(
        "/api/workouts", json=_workout_body(status="PLANNED"), headers=client_headers
    )
    workout = resp.get_json()["workout"]
    assert workout["xp_awarded"] == 0
    assert XPLogEntry.query.count() == 0

    resp = client.put(
        f"/api/workouts/{workout['id']}", json={"status": "COMPLETED"}, headers=client_headers
    )
    assert resp.status_code == 200
    assert resp.get_json()["workout"]["xp_awarded"] == 75
    assert XPLogEntry.query.count() == 1


def test_workout_needs_an_exercise(client, client_headers):
    resp = client.post("/api/workouts", json=_workout_body(exercises=[]), headers=client_headers)
    assert resp.status_code == 400


def test_workout_rejects_bad_rpe(client, client_headers):
    body = _workout_body(
        exercises=[{"name": "Row", "sets": [{"reps": 8, "rpe": 14}]}],
    )
    resp = client.post("/api/workouts", json=body, headers=client_headers)
    assert resp.status_code == 400


def test_list_workouts_paginates(client, client_headers):
    for i in range(3):
        client.post(
            "/api/workouts", json=_workout_body(name=f"W{i}", status="PLANNED"), headers=client_headers
        )

    body = client.get("/api/workouts?limit=2", headers=client_headers).get_json()
    assert len(body["workouts"]) == 2
    assert body["pagination"]["total"] == 3
    assert body["pagination"]["has_more"] is True


def test_other_users_workout_is_forbidden(client, client_headers, other_client):
    from coachrpg.auth import issue_token

    resp = client.post(
        "/api/workouts", json=_workout_body(status="PLANNED"), headers=client_headers
    )
    workout_id = resp.get_json()["workout"]["id"]

    other_headers = {"Authorization": f"Bearer {issue_token(other_client)}"}
    assert client.get(f"/api/workouts/{workout_id}", headers=other_headers).status_code == 403


def test_delete_workout(client, client_headers):
    workout_id = client.post(
        "/api/workouts", json=_workout_body(status="PLANNED"), headers=client_headers
    ).get_json()["workout"]["id"]

    assert client.delete(f"/api/workouts/{workout_id}", headers=client_headers).status_code == 200
    assert client.get(f"/api/workouts/{workout_id}", headers=client_headers).status_code == 404


def test_reopened_workout_is_not_rewarded_twice(client, client_headers, client_user):
    from coachrpg.models.character import RPGCharacter

    workout_id = client.post(
        "/api/workouts", json=_workout_body(type="COACHED"), headers=client_headers
    ).get_json()["workout"]["id"]

    client.put(f"/api/workouts/{workout_id}", json={"status": "PLANNED"}, headers=client_headers)
    resp = client.put(
        f"/api/workouts/{workout_id}", json={"status": "COMPLETED"}, headers=client_headers
    )

    assert resp.status_code == 200
    assert "rpg" not in resp.get_json()
    assert resp.get_json()["workout"]["xp_awarded"] == 100
    assert RPGCharacter.query.filter_by(user_id=client_user.id).one().xp == 100
    assert XPLogEntry.query.count() == 1
