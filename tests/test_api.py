# tests/test_api.py
"""API tests — routing, principal resolution and error mapping over HTTP."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.models.profile import Profile
from app.models.vehicle import Vehicle
from conftest import as_user

API = "/api/v1"


def create_unit(client, admin, unit="7", **extra):
    body = {"unit_number": unit, "make": "Ford", "model": "Transit", "year": 2021, **extra}
    resp = client.post(f"{API}/vehicles", json=body, headers=as_user(admin.id))
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestAuthentication:
    def test_missing_principal_is_401(self, client):
        assert client.get(f"{API}/vehicles").status_code == 401

    def test_unknown_principal_is_401(self, client):
        assert client.get(f"{API}/vehicles", headers=as_user("ghost")).status_code == 401

    def test_me(self, client, user):
        resp = client.get(f"{API}/profiles/me", headers=as_user(user.id))
        assert resp.status_code == 200
        assert resp.json()["full_name"] == "Uma User"

    def test_health_is_open(self, client):
        resp = client.get(f"{API}/health")
        assert resp.status_code == 200
        assert resp.json()["database"] == "ok"


class TestFleetScenario:
    def test_vehicle_out_of_service_to_completed_work_order(self, client, admin, user):
        vehicle = create_unit(client, admin)
        assert vehicle["status"] == "available"

        resp = client.put(f"{API}/vehicles/{vehicle['id']}/status",
                          json={"status": "out_of_service", "current_location": "Shop A"},
                          headers=as_user(admin.id))
        assert resp.status_code == 200
        assert resp.json()["suggest_work_order"] is True
        assert resp.json()["vehicle"]["current_location"] == "Shop A"

        resp = client.post(f"{API}/work-orders",
                           json={"vehicle_id": vehicle["id"], "description": "Brake issue",
                                 "priority": "high", "location": "Shop A", "mileage": 48200},
                           headers=as_user(user.id))
        assert resp.status_code == 201
        order = resp.json()
        assert (order["work_order_number"], order["status"]) == (1, "pending")
        assert order["vehicle"]["unit_number"] == "7"
        assert order["creator"]["full_name"] == "Uma User"

        resp = client.post(f"{API}/work-orders/{order['id']}/complete",
                           json={"resolution_notes": "Pads replaced"}, headers=as_user(admin.id))
        assert resp.status_code == 200
        done = resp.json()
        assert done["status"] == "completed"
        assert done["resolved_at"] is not None
        assert done["resolver"]["id"] == admin.id

        resp = client.get(f"{API}/vehicles/{vehicle['id']}", headers=as_user(user.id))
        assert resp.json()["status"] == "available"

        history = client.get(f"{API}/vehicles/{vehicle['id']}/history", headers=as_user(user.id)).json()
        assert [h["new_status"] for h in history] == ["available", "out_of_service", "available"]
        assert history[-1]["previous_status"] is None

    def test_complete_without_body(self, client, admin, user):
        vehicle = create_unit(client, admin)
        order = client.post(f"{API}/work-orders",
                            json={"vehicle_id": vehicle["id"], "description": "Tyre", "location": "Yard",
                                  "mileage": 10},
                            headers=as_user(user.id)).json()
        resp = client.post(f"{API}/work-orders/{order['id']}/complete", headers=as_user(admin.id))
        assert resp.status_code == 200
        assert resp.json()["resolution_notes"] is None


class TestErrorMapping:
    def test_non_admin_vehicle_create_is_403(self, client, user):
        resp = client.post(f"{API}/vehicles", json={"unit_number": "9", "make": "Ford", "model": "T", "year": 2020},
                           headers=as_user(user.id))
        assert resp.status_code == 403
        assert resp.json()["error"] == "authorization_denied"
        assert resp.json()["detail"].startswith("Failed to create vehicle")

    def test_non_admin_work_order_status_is_403(self, client, admin, user):
        vehicle = create_unit(client, admin)
        order = client.post(f"{API}/work-orders",
                            json={"vehicle_id": vehicle["id"], "description": "Noise", "location": "Yard",
                                  "mileage": 5},
                            headers=as_user(user.id)).json()
        resp = client.put(f"{API}/work-orders/{order['id']}/status", json={"status": "completed"},
                          headers=as_user(user.id))
        assert resp.status_code == 403

    def test_non_admin_role_update_is_403(self, client, user):
        resp = client.patch(f"{API}/profiles/{user.id}", json={"role": "admin"}, headers=as_user(user.id))
        assert resp.status_code == 403

    def test_missing_assignee_is_422(self, client, admin):
        vehicle = create_unit(client, admin)
        resp = client.put(f"{API}/vehicles/{vehicle['id']}/status", json={"status": "assigned"},
                          headers=as_user(admin.id))
        assert resp.status_code == 422
        assert resp.json()["error"] == "validation_failed"

    def test_bad_status_value_rejected_by_schema(self, client, admin):
        vehicle = create_unit(client, admin)
        resp = client.put(f"{API}/vehicles/{vehicle['id']}/status", json={"status": "stolen"},
                          headers=as_user(admin.id))
        assert resp.status_code == 422

    def test_duplicate_unit_is_409(self, client, admin):
        create_unit(client, admin)
        resp = client.post(f"{API}/vehicles", json={"unit_number": "7", "make": "Ford", "model": "T", "year": 2020},
                           headers=as_user(admin.id))
        assert resp.status_code == 409
        assert resp.json()["error"] == "conflict"

    def test_unknown_work_order_is_404(self, client, admin):
        resp = client.put(f"{API}/work-orders/999/status", json={"status": "completed"},
                          headers=as_user(admin.id))
        assert resp.status_code == 404

    def test_database_error_before_write_is_503(self, client, db, admin):
        admin_id = admin.id
        db.commit()
        Vehicle.__table__.drop(db.get_bind())
        resp = client.post(f"{API}/vehicles", json={"unit_number": "9", "make": "Ford", "model": "T", "year": 2020},
                           headers=as_user(admin_id))
        assert resp.status_code == 503
        assert resp.json()["error"] == "transient"
        assert resp.json()["detail"].startswith("Failed to")

    def test_database_error_on_read_path_is_503(self, client, db, user):
        user_id = user.id
        db.commit()
        Profile.__table__.drop(db.get_bind())
        resp = client.get(f"{API}/vehicles", headers=as_user(user_id))
        assert resp.status_code == 503
        assert resp.json()["error"] == "transient"


class TestListsAndSettings:
    def test_vehicle_filters(self, client, admin, user):
        create_unit(client, admin, "1")
        create_unit(client, admin, "2", status="assigned", assigned_to=user.id)
        resp = client.get(f"{API}/vehicles", params={"status": "assigned"}, headers=as_user(user.id))
        assert [v["unit_number"] for v in resp.json()] == ["2"]
        assert resp.json()[0]["assignee"]["badge_number"] == "B-17"

    def test_settings_round_trip(self, client, admin, user):
        resp = client.get(f"{API}/settings/work-orders", headers=as_user(user.id))
        assert resp.json()["id"] is None
        assert resp.json()["default_priority"] == "normal"

        body = {"default_priority": "high", "require_mileage": False, "require_location": True,
                "auto_assign_numbers": True, "notification_enabled": False}
        assert client.put(f"{API}/settings/work-orders", json=body, headers=as_user(user.id)).status_code == 403
        resp = client.put(f"{API}/settings/work-orders", json=body, headers=as_user(admin.id))
        assert resp.status_code == 200
        assert resp.json()["id"] == 1

        resp = client.get(f"{API}/settings/work-orders", headers=as_user(user.id))
        assert resp.json()["default_priority"] == "high"
        assert resp.json()["require_mileage"] is False

    def test_dashboard(self, client, admin, user):
        create_unit(client, admin, "1")
        vehicle = create_unit(client, admin, "2", status="out_of_service", current_location="Shop A")
        client.post(f"{API}/work-orders",
                    json={"vehicle_id": vehicle["id"], "description": "Engine light", "priority": "urgent",
                          "location": "Shop A", "mileage": 900},
                    headers=as_user(user.id))

        stats = client.get(f"{API}/dashboard", headers=as_user(user.id)).json()
        assert stats["total_vehicles"] == 2
        assert stats["available_vehicles"] == 1
        assert stats["out_of_service_vehicles"] == 1
        assert stats["pending_work_orders"] == 1
        assert stats["urgent_work_orders"] == 1
        assert stats["status_breakdown"] == {"pending": 1}
        assert stats["recent_work_orders"][0]["description"] == "Engine light"
