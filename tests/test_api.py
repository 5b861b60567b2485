"""HTTP-level tests: envelope, status codes and auth."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from auth import repository as auth_repository
from auth import security
from core import applog, db
from crud import repository as crud_repository
from main import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict:
    token = security.build_access_token(user_id=1, userid="finance")
    return {"Authorization": f"Bearer {token}"}


def _assert_error(response, status_code: int, message: str) -> None:
    assert response.status_code == status_code
    body = response.json()
    assert body["status"] == "error"
    assert body["message"] == message
    assert body["jobId"] == response.headers["JobID"]


class TestEnvelope:
    def test_unknown_route(self, client):
        _assert_error(client.get("/nowhere"), 404, "Page Not found")

    def test_wrong_method(self, client, auth_headers):
        _assert_error(client.post("/budgets/7", headers=auth_headers, json={}), 405, "Method Not Allowed")

    def test_each_response_gets_its_own_job_id(self, client):
        first = client.get("/health")
        second = client.get("/health")
        assert first.headers["JobID"] != second.headers["JobID"]

    def test_success_shape(self, client, auth_headers, monkeypatch, fake_db):
        async def get_row(meta, row_id):
            return {"id": row_id, "name": "Training"}

        monkeypatch.setattr(crud_repository, "get_row", get_row)
        response = client.get("/activities/2", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {
            "status": "success",
            "data": {"id": 2, "name": "Training"},
            "jobId": response.headers["JobID"],
        }

    def test_missing_row_returns_null_data(self, client, auth_headers, monkeypatch, fake_db):
        async def get_row(meta, row_id):
            return None

        monkeypatch.setattr(crud_repository, "get_row", get_row)
        response = client.get("/activities/99", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"] is None


class TestAuthRequired:
    def test_missing_header(self, client):
        _assert_error(client.get("/budgets"), 401, "Authorization required")

    def test_garbage_token(self, client):
        _assert_error(client.get("/budgets", headers={"Authorization": "Bearer abc"}), 401, "Invalid token")


class TestValidation:
    def test_non_numeric_id(self, client, auth_headers):
        _assert_error(client.delete("/budget-caps/abc", headers=auth_headers), 400, "invalid ID")

    def test_field_rule_message(self, client, auth_headers):
        response = client.post("/budget-caps", headers=auth_headers, json={"budgets_id": 7})
        _assert_error(response, 400, "budget posts id must be greater than 0")

    def test_malformed_json(self, client, auth_headers):
        response = client.post(
            "/budget-caps",
            headers={**auth_headers, "Content-Type": "application/json"},
            content=b"{not json",
        )
        _assert_error(response, 400, "invalid data request")


class TestReferentialIntegrity:
    def test_create_with_missing_budget_post(self, client, auth_headers, fake_db):
        response = client.post(
            "/budget-caps",
            headers=auth_headers,
            json={"budgets_id": 7, "budget_posts_id": 42, "amount": 100},
        )
        _assert_error(response, 404, "data budget post not found")

    def test_create_with_existing_references(self, client, auth_headers, monkeypatch, fake_db):
        async def insert_row(meta, values):
            return {"id": 12, **values}

        monkeypatch.setattr(crud_repository, "insert_row", insert_row)
        response = client.post(
            "/budget-caps",
            headers=auth_headers,
            json={"budgets_id": 7, "budget_posts_id": 3, "amount": 100},
        )
        assert response.status_code == 200
        assert response.json()["data"] == {"id": 12, "budgets_id": 7, "budget_posts_id": 3, "amount": 100.0}

    def test_delete_missing_row(self, client, auth_headers, monkeypatch, fake_db):
        deleted = []

        async def delete_row(meta, row_id):
            deleted.append(row_id)
            return {"id": row_id}

        monkeypatch.setattr(crud_repository, "delete_row", delete_row)
        _assert_error(client.delete("/budget-caps/5", headers=auth_headers), 404, "budget caps not found")
        assert deleted == []

    def test_approve_flag(self, client, auth_headers, monkeypatch, fake_db):
        async def update_row(meta, row_id, values):
            return {"id": row_id, **values}

        monkeypatch.setattr(crud_repository, "update_row", update_row)
        response = client.put("/budgets/approve/7", headers=auth_headers, json={"is_approved": True})
        assert response.status_code == 200
        assert response.json()["data"] == {"id": 7, "is_approved": True}

    def test_database_failure(self, client, auth_headers, fake_db):
        fake_db.fail_on = "budget_caps"
        _assert_error(client.delete("/budget-caps/11", headers=auth_headers), 500, "database error")

    def test_database_failure_on_list(self, client, auth_headers, monkeypatch):
        async def fetch_all(sql, *args):
            raise TimeoutError("query timed out")

        monkeypatch.setattr(db, "fetch_all", fetch_all)
        _assert_error(client.get("/activities", headers=auth_headers), 500, "database error")


class TestLogin:
    @pytest.fixture
    def user(self, monkeypatch):
        row = {"id": 4, "userid": "finance", "password": security.hash_password("s3cret")}

        async def get_user_by_userid(userid):
            return row if userid == "finance" else None

        monkeypatch.setattr(auth_repository, "get_user_by_userid", get_user_by_userid)
        return row

    def test_login_returns_token(self, client, user):
        response = client.post("/user/login", json={"userid": "finance", "password": "s3cret"})
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert security.decode_access_token(body["token"])["account"]["userid"] == "finance"

    def test_token_opens_protected_routes(self, client, user, monkeypatch):
        async def fetch_all(sql, *args):
            return []

        monkeypatch.setattr(db, "fetch_all", fetch_all)
        token = client.post("/user/login", json={"userid": "finance", "password": "s3cret"}).json()["token"]
        response = client.get("/fund-requests", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_wrong_password(self, client, user):
        response = client.post("/user/login", json={"userid": "finance", "password": "nope"})
        _assert_error(response, 401, "user not found")

    def test_unknown_user(self, client, user):
        response = client.post("/user/login", json={"userid": "ghost", "password": "s3cret"})
        _assert_error(response, 401, "user not found")


class TestServerFailures:
    @pytest.fixture
    def audit_lines(self, monkeypatch) -> list:
        lines = []

        def log_request_response(request_log, response_log):
            lines.append(response_log)
            return ""

        monkeypatch.setattr(applog, "log_request_response", log_request_response)
        return lines

    @pytest.fixture
    def lenient_client(self) -> TestClient:
        return TestClient(app, raise_server_exceptions=False)

    def test_query_timeout(self, client, auth_headers, monkeypatch, audit_lines):
        async def fetch_all(sql, *args):
            raise asyncio.TimeoutError()

        monkeypatch.setattr(db, "fetch_all", fetch_all)
        _assert_error(client.get("/activities", headers=auth_headers), 500, "database error")
        assert audit_lines[-1]["message"] == "database error"

    def test_pool_not_initialized(self, lenient_client, auth_headers, monkeypatch, audit_lines):
        monkeypatch.setattr(db, "_pool", None)
        _assert_error(lenient_client.get("/activities", headers=auth_headers), 500, "internal error")
        assert audit_lines[-1]["status"] == "error"
        assert "DB pool is not initialized" in audit_lines[-1]["detail"]

    def test_insert_returning_nothing(self, lenient_client, auth_headers, monkeypatch, fake_db, audit_lines):
        async def insert_row(meta, values):
            raise RuntimeError(f"Failed to insert into {meta.table}.")

        monkeypatch.setattr(crud_repository, "insert_row", insert_row)
        response = lenient_client.post(
            "/budget-caps",
            headers=auth_headers,
            json={"budgets_id": 7, "budget_posts_id": 3, "amount": 100},
        )
        _assert_error(response, 500, "internal error")
        assert audit_lines[-1]["detail"] == "RuntimeError('Failed to insert into budget_caps.')"
