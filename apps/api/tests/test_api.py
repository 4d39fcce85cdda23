"""
End-to-end tests for the HTTP API.

Each test runs the full application (lifespan included) against a fresh
SQLite database via FastAPI's TestClient.
"""

import csv
import io
import os

import pytest

ADMIN_EMAIL = os.environ["ADMIN_EMAIL"]
ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]

EXPORT_HEADER = [
    "id",
    "studentName",
    "dob",
    "classApplying",
    "parentName",
    "parentPhone",
    "parentEmail",
    "address",
    "message",
    "createdAt",
]


def _submit(client, payload):
    response = client.post("/api/applications", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["id"]


def _list(client, headers, **params):
    response = client.get("/api/admin/applications", headers=headers, params=params)
    assert response.status_code == 200, response.text
    return response.json()


def _export_rows(client, headers):
    response = client.get("/api/admin/applications/export", headers=headers)
    assert response.status_code == 200, response.text
    return list(csv.reader(io.StringIO(response.text)))


class TestIntake:
    """POST /api/applications"""

    def test_submit_then_list_shows_one_pending_record(
        self, client, auth_headers, application_payload
    ):
        response = client.post("/api/applications", json=application_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert isinstance(body["id"], int)

        records = _list(client, auth_headers)
        assert len(records) == 1
        assert records[0]["id"] == body["id"]
        assert records[0]["status"] == "pending"
        assert records[0]["studentName"] == "Asha"

    def test_missing_parent_email_is_named(self, client, auth_headers, application_payload):
        del application_payload["parentEmail"]

        response = client.post("/api/applications", json=application_payload)

        assert response.status_code == 400
        assert response.json()["error"] == "parentEmail is required"
        assert _list(client, auth_headers) == []

    @pytest.mark.parametrize(
        "field",
        ["studentName", "dateOfBirth", "classApplying", "parentName", "parentPhone", "parentEmail"],
    )
    def test_each_required_field_is_enforced(
        self, client, auth_headers, application_payload, field
    ):
        application_payload[field] = "   "

        response = client.post("/api/applications", json=application_payload)

        assert response.status_code == 400
        assert response.json() == {"error": f"{field} is required", "code": "MISSING_FIELD"}
        assert _list(client, auth_headers) == []

    def test_empty_body_reports_first_required_field(self, client):
        response = client.post("/api/applications")

        assert response.status_code == 400
        assert response.json()["error"] == "studentName is required"

    def test_missing_field_wins_over_malformed_email(
        self, client, auth_headers, application_payload
    ):
        del application_payload["studentName"]
        application_payload["parentEmail"] = "bad"

        response = client.post("/api/applications", json=application_payload)

        assert response.status_code == 400
        assert response.json() == {"error": "studentName is required", "code": "MISSING_FIELD"}
        assert _list(client, auth_headers) == []

    def test_email_is_stored_as_submitted(self, client, auth_headers, application_payload):
        application_payload["parentEmail"] = "Rao@Example.COM"

        _submit(client, application_payload)

        assert _list(client, auth_headers)[0]["parentEmail"] == "Rao@Example.COM"
        assert _export_rows(client, auth_headers)[1][6] == "Rao@Example.COM"

    def test_legacy_field_names_are_accepted(self, client, auth_headers, application_payload):
        application_payload["dob"] = application_payload.pop("dateOfBirth")
        application_payload["fatherName"] = application_payload.pop("parentName")

        _submit(client, application_payload)

        record = _list(client, auth_headers)[0]
        assert record["dateOfBirth"] == "2015-04-01"
        assert record["parentName"] == "Rao"

    def test_invalid_email_is_a_validation_error(
        self, client, auth_headers, application_payload
    ):
        application_payload["parentEmail"] = "not-an-email"

        response = client.post("/api/applications", json=application_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["error"].startswith("parentEmail")
        assert _list(client, auth_headers) == []

    def test_identical_submissions_get_distinct_ids(
        self, client, auth_headers, application_payload
    ):
        ids = [_submit(client, application_payload) for _ in range(3)]

        assert len(set(ids)) == 3
        assert len(_list(client, auth_headers)) == 3


class TestAuthGate:
    """Every admin endpoint rejects requests without a valid token."""

    ADMIN_REQUESTS = [
        ("get", "/api/applications"),
        ("get", "/api/applications/export"),
        ("get", "/api/admin/applications"),
        ("get", "/api/admin/applications/stats"),
        ("get", "/api/admin/applications/export"),
        ("get", "/api/admin/applications/1"),
        ("patch", "/api/admin/applications/1/status"),
        ("delete", "/api/admin/applications/1"),
        ("delete", "/api/admin/applications"),
        ("delete", "/api/applications"),
        ("get", "/api/admin/me"),
    ]

    @pytest.mark.parametrize("method,path", ADMIN_REQUESTS)
    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"Authorization": "Bearer"},
            {"Authorization": "Token abc"},
            {"Authorization": "Bearer not-a-real-token"},
        ],
    )
    def test_rejected_without_valid_token(self, client, method, path, headers):
        kwargs = {"headers": headers}
        if method == "patch":
            kwargs["json"] = {"status": "approved"}

        response = client.request(method.upper(), path, **kwargs)

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized", "code": "UNAUTHORIZED"}

    def test_rejected_requests_have_no_side_effects(
        self, client, auth_headers, application_payload
    ):
        application_id = _submit(client, application_payload)

        client.delete("/api/admin/applications")
        client.delete(f"/api/admin/applications/{application_id}")
        client.delete("/api/applications", headers={"Authorization": "Bearer wrong"})
        client.patch(
            f"/api/admin/applications/{application_id}/status", json={"status": "rejected"}
        )

        records = _list(client, auth_headers)
        assert len(records) == 1
        assert records[0]["status"] == "pending"


class TestLogin:
    """POST /api/admin/login and GET /api/admin/me"""

    def test_login_returns_token(self, client, admin_token):
        assert admin_token

    def test_login_is_case_insensitive_on_email(self, client):
        response = client.post(
            "/api/admin/login",
            json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD},
        )

        assert response.status_code == 200
        assert response.json()["email"] == ADMIN_EMAIL

    def test_wrong_password(self, client):
        response = client.post(
            "/api/admin/login", json={"email": ADMIN_EMAIL, "password": "wrong-password"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid email or password"

    def test_missing_credentials(self, client):
        response = client.post("/api/admin/login", json={"email": ADMIN_EMAIL})

        assert response.status_code == 400
        assert response.json()["error"] == "Email and password required"

    def test_me_returns_profile(self, client, auth_headers):
        response = client.get("/api/admin/me", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["email"] == ADMIN_EMAIL
        assert body["fullName"] == "Test Admin"


class TestSignup:
    """POST /api/admin/signup"""

    def test_duplicate_email_is_rejected(self, client):
        payload = {"fullName": "Office", "email": "office@test.school", "password": "office-pass"}

        first = client.post("/api/admin/signup", json=payload)
        second = client.post("/api/admin/signup", json=payload)

        assert first.status_code == 201
        assert first.json()["user"]["email"] == "office@test.school"
        assert second.status_code == 400
        assert "already registered" in second.json()["error"]

    def test_new_account_can_log_in(self, client):
        client.post(
            "/api/admin/signup",
            json={"fullName": "Office", "email": "office@test.school", "password": "office-pass"},
        )

        response = client.post(
            "/api/admin/login", json={"email": "office@test.school", "password": "office-pass"}
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Office"

    def test_short_password(self, client):
        response = client.post(
            "/api/admin/signup",
            json={"fullName": "Office", "email": "office@test.school", "password": "12345"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Password must be at least 6 characters"


class TestAdminApplications:
    """Admin list, detail, status, stats and delete endpoints."""

    def test_delete_unknown_id_is_not_found(self, client, auth_headers, application_payload):
        _submit(client, application_payload)

        response = client.delete("/api/admin/applications/999999", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "Application not found"
        assert len(_list(client, auth_headers)) == 1

    def test_delete_one(self, client, auth_headers, application_payload):
        keep = _submit(client, application_payload)
        drop = _submit(client, application_payload)

        response = client.delete(f"/api/admin/applications/{drop}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert [r["id"] for r in _list(client, auth_headers)] == [keep]

    @pytest.mark.parametrize("bad_id", ["abc", "0", "-1"])
    def test_invalid_id(self, client, auth_headers, bad_id):
        response = client.get(f"/api/admin/applications/{bad_id}", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid id"

    @pytest.mark.parametrize("method", ["get", "delete", "patch"])
    def test_id_beyond_column_range_is_invalid(
        self, client, auth_headers, application_payload, method
    ):
        _submit(client, application_payload)
        path = "/api/admin/applications/99999999999999999999"
        if method == "patch":
            path += "/status"

        response = client.request(
            method.upper(), path, headers=auth_headers, json={"status": "approved"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid id", "code": "INVALID_ID"}
        assert len(_list(client, auth_headers)) == 1

    def test_get_one(self, client, auth_headers, application_payload):
        application_id = _submit(client, application_payload)

        response = client.get(f"/api/admin/applications/{application_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["parentEmail"] == "rao@example.com"

    def test_list_is_newest_first_by_default(self, client, auth_headers, application_payload):
        first = _submit(client, application_payload)
        second = _submit(client, application_payload)

        assert [r["id"] for r in _list(client, auth_headers)] == [second, first]
        assert [r["id"] for r in _list(client, auth_headers, order="asc")] == [first, second]

    def test_update_status(self, client, auth_headers, application_payload):
        application_id = _submit(client, application_payload)

        response = client.patch(
            f"/api/admin/applications/{application_id}/status",
            headers=auth_headers,
            json={"status": "approved"},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        assert _list(client, auth_headers, status="approved")[0]["id"] == application_id
        assert _list(client, auth_headers, status="pending") == []

    @pytest.mark.parametrize("value", ["archived", "APPROVED", "", None])
    def test_invalid_status_leaves_record_unchanged(
        self, client, auth_headers, application_payload, value
    ):
        application_id = _submit(client, application_payload)

        response = client.patch(
            f"/api/admin/applications/{application_id}/status",
            headers=auth_headers,
            json={"status": value},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_STATUS"
        record = client.get(
            f"/api/admin/applications/{application_id}", headers=auth_headers
        ).json()
        assert record["status"] == "pending"

    def test_update_status_unknown_id(self, client, auth_headers):
        response = client.patch(
            "/api/admin/applications/424242/status",
            headers=auth_headers,
            json={"status": "rejected"},
        )

        assert response.status_code == 404

    def test_stats(self, client, auth_headers, application_payload):
        first = _submit(client, application_payload)
        _submit(client, application_payload)
        client.patch(
            f"/api/admin/applications/{first}/status",
            headers=auth_headers,
            json={"status": "rejected"},
        )

        response = client.get("/api/admin/applications/stats", headers=auth_headers)

        assert response.json() == {"total": 2, "pending": 1, "approved": 0, "rejected": 1}


class TestBulkDeleteAndExport:
    """DELETE /api/admin/applications, DELETE /api/applications and CSV export."""

    def test_delete_all_then_export_is_header_only(
        self, client, auth_headers, application_payload
    ):
        _submit(client, application_payload)
        _submit(client, application_payload)

        response = client.delete("/api/admin/applications", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "deleted": 2}
        assert _list(client, auth_headers) == []
        assert _export_rows(client, auth_headers) == [EXPORT_HEADER]

    def test_public_clear_requires_token(self, client, auth_headers, application_payload):
        _submit(client, application_payload)

        assert client.delete("/api/applications").status_code == 401

        response = client.delete("/api/applications", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["deleted"] == 1
        assert _list(client, auth_headers) == []

    def test_export_headers(self, client, auth_headers):
        response = client.get("/api/admin/applications/export", headers=auth_headers)

        assert response.headers["content-type"].startswith("text/csv")
        assert (
            response.headers["content-disposition"] == 'attachment; filename="applications.csv"'
        )
        assert response.text.startswith('"id","studentName","dob"')

    def test_export_reproduces_stored_values(self, client, auth_headers, application_payload):
        application_payload["studentName"] = 'Asha "Ash" Rao'
        application_payload["message"] = "Prefers mornings, if possible.\nThanks"
        application_id = _submit(client, application_payload)

        rows = _export_rows(client, auth_headers)

        assert rows[0] == EXPORT_HEADER
        assert len(rows) == 2
        row = dict(zip(EXPORT_HEADER, rows[1]))
        assert row["id"] == str(application_id)
        assert row["studentName"] == 'Asha "Ash" Rao'
        assert row["dob"] == "2015-04-01"
        assert row["classApplying"] == "II"
        assert row["parentName"] == "Rao"
        assert row["parentPhone"] == "9990001111"
        assert row["parentEmail"] == "rao@example.com"
        assert row["address"] == ""
        assert row["message"] == "Prefers mornings, if possible.\nThanks"
        assert row["createdAt"]

    def test_export_is_oldest_first(self, client, auth_headers, application_payload):
        first = _submit(client, application_payload)
        second = _submit(client, application_payload)

        rows = _export_rows(client, auth_headers)

        assert [row[0] for row in rows[1:]] == [str(first), str(second)]


class TestPublicPathReads:
    """GET /api/applications and GET /api/applications/export (admin token required)."""

    def test_list(self, client, auth_headers, application_payload):
        application_id = _submit(client, application_payload)

        response = client.get("/api/applications", headers=auth_headers)

        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [application_id]

    def test_export(self, client, auth_headers, application_payload):
        _submit(client, application_payload)

        response = client.get("/api/applications/export", headers=auth_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[0] == EXPORT_HEADER
        assert len(rows) == 2


class TestHealth:
    def test_root(self, client):
        assert client.get("/").json()["status"] == "running"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_ready(self, client):
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready"}
