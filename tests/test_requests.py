import uuid

import pytest

from shared.core.exceptions import InvalidStateError
from shared.core.schemas import UserToken
from shared.utils.app_status_code import AppStatusCode
from asset_service.app.crud import requests_crud
from asset_service.app.models.asset_requests import AssetRequest
from asset_service.app.models.assets import Asset
from conftest import TestingSessionLocal


def submit(client, user, **payload):
    return client.post("/api/requests", json=payload, headers=user["headers"])


def decide(client, user, request_id, status):
    return client.put(f"/api/requests/{request_id}/status",
                      json={"status": status}, headers=user["headers"])


class TestCreateRequest:

    def test_general_request(self, client, employee):
        resp = submit(client, employee, asset_type="Laptop", reason="new hire")
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["status"] == "pending"
        assert data["asset_type"] == "Laptop"
        assert data["employee_name"] == "Eve Employee"
        assert data["department"] == "Engineering"
        assert data["request_no"].startswith("REQ-")

    def test_department_defaults_to_general(self, client, other_employee):
        resp = submit(client, other_employee, asset_type="Phone", reason="on call")
        assert resp.json()["data"]["department"] == "General"

    def test_specific_request_snapshots_category(self, client, employee, make_asset):
        asset = make_asset()
        resp = submit(client, employee, specific_asset_id=asset["id"], reason="need it")
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["status"] == "pending"
        assert data["asset_type"] == "Laptop"
        assert data["specific_asset_id"] == asset["id"]

    def test_specific_request_against_busy_asset(self, client, employee, make_asset, db_session):
        asset = make_asset(status="in-use")
        resp = submit(client, employee, specific_asset_id=asset["id"], reason="need it")
        assert resp.status_code == 400
        assert resp.json()["message"] == "This asset is not available for request."
        assert resp.json()["status_code"] == AppStatusCode.INVALID_STATE
        assert db_session.query(AssetRequest).count() == 0

    def test_specific_request_against_unknown_asset(self, client, employee):
        resp = submit(client, employee, specific_asset_id=str(uuid.uuid4()), reason="need it")
        assert resp.status_code == 400

    def test_reason_is_required(self, client, employee):
        resp = submit(client, employee, asset_type="Laptop")
        assert resp.status_code == 400
        assert resp.json()["status_code"] == AppStatusCode.INVALID_INPUT

    def test_type_and_asset_are_exclusive(self, client, employee, make_asset):
        asset = make_asset()
        both = submit(client, employee, asset_type="Laptop",
                      specific_asset_id=asset["id"], reason="x")
        neither = submit(client, employee, reason="x")
        assert both.status_code == 400
        assert neither.status_code == 400


class TestListRequests:

    def test_employee_sees_only_own_requests(self, client, admin, employee, other_employee):
        submit(client, employee, asset_type="Laptop", reason="a")
        submit(client, other_employee, asset_type="Phone", reason="b")

        mine = client.get("/api/requests", headers=employee["headers"]).json()["data"]
        assert mine["total"] == 1
        assert mine["requests"][0]["employee_name"] == "Eve Employee"

        everything = client.get("/api/requests", headers=admin["headers"]).json()["data"]
        assert everything["total"] == 2
        assert everything["requests"][0]["employee_name"] == "Oscar Other"


class TestDecideRequest:

    def test_approval_assigns_asset(self, client, admin, employee, make_asset, db_session):
        asset = make_asset()
        request = submit(client, employee, specific_asset_id=asset["id"],
                         reason="need it").json()["data"]

        resp = decide(client, admin, request["id"], "approved")
        assert resp.status_code == 200
        assert resp.json()["status_code"] == AppStatusCode.UPDATED_SUCCESSFULLY
        data = resp.json()["data"]
        assert data["status"] == "approved"
        assert data["decided_by"] == admin["user"]["id"]
        assert data["decided_at"] is not None

        row = db_session.get(Asset, uuid.UUID(asset["id"]))
        assert row.status == "in-use"
        assert row.current_owner == "Eve Employee"
        assert str(row.owner_id) == employee["user"]["id"]

    def test_approving_general_request_touches_no_asset(self, client, admin, employee, make_asset, db_session):
        asset = make_asset()
        request = submit(client, employee, asset_type="Laptop", reason="x").json()["data"]
        assert decide(client, admin, request["id"], "approved").status_code == 200
        assert db_session.get(Asset, uuid.UUID(asset["id"])).status == "available"

    def test_rejection_leaves_asset_available(self, client, admin, employee, make_asset, db_session):
        asset = make_asset()
        request = submit(client, employee, specific_asset_id=asset["id"], reason="x").json()["data"]
        resp = decide(client, admin, request["id"], "rejected")
        assert resp.json()["data"]["status"] == "rejected"
        assert db_session.get(Asset, uuid.UUID(asset["id"])).status == "available"

    def test_second_approval_for_same_asset_conflicts(self, client, admin, employee, other_employee, make_asset, db_session):
        asset = make_asset()
        first = submit(client, employee, specific_asset_id=asset["id"], reason="a").json()["data"]
        second = submit(client, other_employee, specific_asset_id=asset["id"], reason="b").json()["data"]

        assert decide(client, admin, first["id"], "approved").status_code == 200
        resp = decide(client, admin, second["id"], "approved")
        assert resp.status_code == 409
        assert resp.json()["message"] == "The requested asset is no longer available."

        db_session.expire_all()
        still_pending = db_session.get(AssetRequest, uuid.UUID(second["id"]))
        assert still_pending.status == "pending"
        assert db_session.get(Asset, uuid.UUID(asset["id"])).current_owner == "Eve Employee"

    def test_only_pending_requests_can_be_decided(self, client, admin, employee):
        request = submit(client, employee, asset_type="Laptop", reason="x").json()["data"]
        decide(client, admin, request["id"], "rejected")
        resp = decide(client, admin, request["id"], "approved")
        assert resp.status_code == 400
        assert resp.json()["status_code"] == AppStatusCode.INVALID_STATE

    def test_employee_cannot_decide(self, client, employee):
        request = submit(client, employee, asset_type="Laptop", reason="x").json()["data"]
        resp = decide(client, employee, request["id"], "approved")
        assert resp.status_code == 403
        assert resp.json()["message"] == "Not authorized."

    def test_invalid_status(self, client, admin, employee):
        request = submit(client, employee, asset_type="Laptop", reason="x").json()["data"]
        for status in ("pending", "done", None):
            resp = decide(client, admin, request["id"], status)
            assert resp.status_code == 400
            assert resp.json()["message"] == "Invalid status."

    def test_unknown_request(self, client, admin):
        resp = decide(client, admin, uuid.uuid4(), "approved")
        assert resp.status_code == 404
        assert resp.json()["message"] == "Request not found."

    def test_malformed_request_id_is_invalid_input(self, client, admin):
        resp = decide(client, admin, "not-a-uuid", "approved")
        assert resp.status_code == 400
        assert resp.json()["status_code"] == AppStatusCode.INVALID_INPUT


class TestConcurrentDecisions:

    def test_racing_rejection_cannot_undo_an_approval(self, client, admin, employee, make_asset):
        asset = make_asset()
        request = submit(client, employee, specific_asset_id=asset["id"], reason="x").json()["data"]
        request_id = uuid.UUID(request["id"])
        principal = UserToken(
            user_id=admin["user"]["id"], name=admin["user"]["name"],
            email=admin["user"]["email"], role="ADMIN")

        first, second = TestingSessionLocal(), TestingSessionLocal()
        try:
            # Both admins have the pending request loaded
            assert requests_crud.get_request_by_id(first, request_id).status == "pending"
            assert requests_crud.get_request_by_id(second, request_id).status == "pending"

            requests_crud.update_request_status(first, principal, request_id, "approved")
            with pytest.raises(InvalidStateError):
                requests_crud.update_request_status(second, principal, request_id, "rejected")
        finally:
            first.close()
            second.close()

        fresh = TestingSessionLocal()
        try:
            assert fresh.get(AssetRequest, request_id).status == "approved"
            row = fresh.get(Asset, uuid.UUID(asset["id"]))
            assert row.status == "in-use"
            assert row.current_owner == "Eve Employee"
        finally:
            fresh.close()
