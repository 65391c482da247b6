import uuid

import pytest

from shared.utils.app_status_code import AppStatusCode
from asset_service.app.models.assets import Asset
from asset_service.app.models.maintenance_records import MaintenanceRecord


def open_ticket(client, user, asset_id, **extra):
    payload = {"asset_id": asset_id, "issue": "Screen flicker", "priority": "high"}
    payload.update(extra)
    return client.post("/api/maintenance", json=payload, headers=user["headers"])


def update(client, user, record_id, **payload):
    return client.put(f"/api/maintenance/{record_id}", json=payload, headers=user["headers"])


def asset_status(db_session, asset_id):
    db_session.expire_all()
    return db_session.get(Asset, uuid.UUID(asset_id)).status


class TestCreateMaintenance:

    def test_admin_opens_ticket_on_assigned_asset(self, client, admin, make_asset, db_session):
        asset = make_asset(status="in-use", current_owner="Someone")
        resp = open_ticket(client, admin, asset["id"])
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["status"] == "scheduled"
        assert data["priority"] == "high"
        assert data["asset"]["asset_tag"] == "A-1"
        assert asset_status(db_session, asset["id"]) == "maintenance"

    def test_employee_reports_issue_on_own_asset(self, client, employee, make_asset):
        asset = make_asset(status="in-use", current_owner="eve@example.com")
        resp = open_ticket(client, employee, asset["id"])
        assert resp.status_code == 201
        assert resp.json()["data"]["created_by"] == employee["user"]["id"]

    def test_employee_cannot_report_on_others_asset(self, client, employee, make_asset, db_session):
        asset = make_asset(status="in-use", current_owner="Somebody Else")
        resp = open_ticket(client, employee, asset["id"])
        assert resp.status_code == 403
        assert asset_status(db_session, asset["id"]) == "in-use"
        assert db_session.query(MaintenanceRecord).count() == 0

    def test_unknown_asset(self, client, admin):
        resp = open_ticket(client, admin, str(uuid.uuid4()))
        assert resp.status_code == 404
        assert resp.json()["message"] == "Asset not found"

    def test_priority_defaults_to_medium(self, client, admin, make_asset):
        asset = make_asset()
        resp = client.post("/api/maintenance", json={"asset_id": asset["id"], "issue": "Noisy fan"},
                           headers=admin["headers"])
        assert resp.json()["data"]["priority"] == "medium"


class TestListMaintenance:

    def test_employee_sees_tickets_for_owned_assets_only(self, client, admin, employee, make_asset):
        mine = make_asset(asset_tag="A-1", serial_number="S-1", current_owner="Eve Employee")
        theirs = make_asset(asset_tag="A-2", serial_number="S-2", current_owner="Oscar Other")
        open_ticket(client, admin, mine["id"])
        open_ticket(client, admin, theirs["id"])

        data = client.get("/api/maintenance", headers=employee["headers"]).json()["data"]
        assert data["total"] == 1
        assert data["records"][0]["asset"]["asset_tag"] == "A-1"

        everything = client.get("/api/maintenance", headers=admin["headers"]).json()["data"]
        assert everything["total"] == 2

    def test_employee_without_assets_sees_nothing(self, client, admin, employee, make_asset):
        asset = make_asset()
        open_ticket(client, admin, asset["id"])
        data = client.get("/api/maintenance", headers=employee["headers"]).json()["data"]
        assert data == {"records": [], "total": 0}


class TestUpdateMaintenance:

    def test_completion_releases_asset_without_restoring_prior_status(self, client, admin, make_asset, db_session):
        asset = make_asset(status="in-use", current_owner="Eve Employee")
        ticket = open_ticket(client, admin, asset["id"]).json()["data"]

        resp = update(client, admin, ticket["id"], status="completed", cost=120.5)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["status"] == "completed"
        assert data["cost"] == 120.5
        assert data["completion_date"] is not None
        assert asset_status(db_session, asset["id"]) == "available"

    def test_explicit_completion_date_is_kept(self, client, admin, make_asset):
        asset = make_asset()
        ticket = open_ticket(client, admin, asset["id"]).json()["data"]
        resp = update(client, admin, ticket["id"], status="completed",
                      completion_date="2025-03-01T10:00:00")
        assert resp.status_code == 200
        assert resp.json()["data"]["completion_date"].startswith("2025-03-01T10:00:00")

    def test_malformed_record_id_is_invalid_input(self, client, admin):
        resp = update(client, admin, "not-a-uuid", status="completed")
        assert resp.status_code == 400
        assert resp.json()["status_code"] == AppStatusCode.INVALID_INPUT

    def test_in_progress_keeps_asset_in_maintenance(self, client, admin, make_asset, db_session):
        asset = make_asset()
        ticket = open_ticket(client, admin, asset["id"]).json()["data"]
        resp = update(client, admin, ticket["id"], status="in-progress")
        assert resp.json()["data"]["status"] == "in-progress"
        assert asset_status(db_session, asset["id"]) == "maintenance"

    def test_zero_cost_is_written(self, client, admin, make_asset):
        asset = make_asset()
        ticket = open_ticket(client, admin, asset["id"]).json()["data"]
        update(client, admin, ticket["id"], cost=50)
        resp = update(client, admin, ticket["id"], cost=0)
        assert resp.json()["data"]["cost"] == 0

    def test_omitted_cost_is_left_alone(self, client, admin, make_asset):
        asset = make_asset()
        ticket = open_ticket(client, admin, asset["id"]).json()["data"]
        update(client, admin, ticket["id"], cost=50)
        resp = update(client, admin, ticket["id"], status="in-progress")
        assert resp.json()["data"]["cost"] == 50

    @pytest.mark.parametrize("terminal", ["completed", "cancelled"])
    def test_terminal_states_are_final(self, client, admin, make_asset, terminal):
        asset = make_asset()
        ticket = open_ticket(client, admin, asset["id"]).json()["data"]
        update(client, admin, ticket["id"], status=terminal)
        resp = update(client, admin, ticket["id"], status="in-progress")
        assert resp.status_code == 400
        assert resp.json()["status_code"] == AppStatusCode.INVALID_STATE

    def test_in_progress_cannot_go_back_to_scheduled(self, client, admin, make_asset):
        asset = make_asset()
        ticket = open_ticket(client, admin, asset["id"]).json()["data"]
        update(client, admin, ticket["id"], status="in-progress")
        resp = update(client, admin, ticket["id"], status="scheduled")
        assert resp.status_code == 400

    def test_same_status_is_a_no_op(self, client, admin, make_asset):
        asset = make_asset()
        ticket = open_ticket(client, admin, asset["id"]).json()["data"]
        update(client, admin, ticket["id"], status="completed")
        resp = update(client, admin, ticket["id"], status="completed")
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "completed"

    def test_cancel_releases_asset(self, client, admin, make_asset, db_session):
        asset = make_asset()
        ticket = open_ticket(client, admin, asset["id"]).json()["data"]
        update(client, admin, ticket["id"], status="cancelled")
        assert asset_status(db_session, asset["id"]) == "available"

    def test_cancel_keeps_asset_with_another_open_ticket(self, client, admin, make_asset, db_session):
        asset = make_asset()
        first = open_ticket(client, admin, asset["id"]).json()["data"]
        open_ticket(client, admin, asset["id"], issue="Battery")
        update(client, admin, first["id"], status="cancelled")
        assert asset_status(db_session, asset["id"]) == "maintenance"

    def test_unknown_status_value(self, client, admin, make_asset):
        asset = make_asset()
        ticket = open_ticket(client, admin, asset["id"]).json()["data"]
        resp = update(client, admin, ticket["id"], status="paused")
        assert resp.status_code == 400
        assert resp.json()["status_code"] == AppStatusCode.INVALID_INPUT

    def test_employee_cannot_update(self, client, admin, employee, make_asset, db_session):
        asset = make_asset(current_owner="Eve Employee")
        ticket = open_ticket(client, admin, asset["id"]).json()["data"]

        resp = update(client, employee, ticket["id"], status="completed")
        assert resp.status_code == 403

        db_session.expire_all()
        record = db_session.get(MaintenanceRecord, uuid.UUID(ticket["id"]))
        assert record.status == "scheduled"
        assert asset_status(db_session, asset["id"]) == "maintenance"

    def test_unknown_record(self, client, admin):
        resp = update(client, admin, uuid.uuid4(), status="completed")
        assert resp.status_code == 404
