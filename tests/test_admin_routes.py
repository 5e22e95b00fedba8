"""Tests for the coach dashboard endpoints"""
from coachrpg.rpg.session_integration import on_session_complete


def test_list_clients_with_search(client, admin_headers, client_user, other_client):
    resp = client.get("/api/admin/clients", headers=admin_headers)
    assert resp.status_code == 200
    assert len(resp.get_json()["clients"]) == 2

    resp = client.get("/api/admin/clients?search=jamie", headers=admin_headers)
    clients = resp.get_json()["clients"]
    assert [c["email"] for c in clients] == ["client@example.com"]
    assert 0 <= clients[0]["profile_completion"] <= 100


def test_client_detail_includes_rpg(client, admin_headers, client_user):
    on_session_complete(1, client_user.id, "CARDIO")

    resp = client.get(f"/api/admin/clients/{client_user.id}", headers=admin_headers)

    assert resp.status_code == 200
    rpg = resp.get_json()["rpg"]
    assert rpg["character"]["xp"] == 100
    assert rpg["tiers"]["leanness_tier"] == "standard"
    assert rpg["streak"]["current_streak"] == 1


def test_client_detail_without_character(client, admin_headers, client_user):
    resp = client.get(f"/api/admin/clients/{client_user.id}", headers=admin_headers)
    assert resp.get_json()["rpg"] is None


def test_unknown_client(client, admin_headers):
    assert client.get("/api/admin/clients/999", headers=admin_headers).status_code == 404


def test_schedule_stats_shape(client, admin_headers):
    resp = client.get("/api/admin/schedule/stats", headers=admin_headers)

    assert resp.status_code == 200
    stats = resp.get_json()["stats"]
    assert stats == {
        "total_upcoming": 0,
        "today_sessions": 0,
        "this_week_sessions": 0,
        "this_month_sessions": 0,
        "pending_approvals": 0,
    }
