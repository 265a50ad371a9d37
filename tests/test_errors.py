"""
Tests for error handling: structured error responses, HTTP status codes,
and the custom exception classes.
"""
import pytest
from app.core.errors import (
    BadRequestError,
    ErrorKind,
    NotFoundError,
    UnauthenticatedError,
    UnauthorizedError,
)


# ---------------------------------------------------------------------------
# Unit tests on exception classes
# ---------------------------------------------------------------------------

class TestExceptionClasses:
    def test_bad_request_error_with_list(self):
        err = BadRequestError(["Name is required", "Email is required"])
        assert err.http_status == 400
        assert err.code == "BAD_REQUEST"
        assert err.kind is ErrorKind.BAD_REQUEST
        assert err.message == "Name is required, Email is required"
        d = err.to_dict()
        assert d["details"]["errors"] == ["Name is required", "Email is required"]

    def test_single_message_becomes_list(self):
        err = UnauthorizedError("Not authorized to access this route")
        assert err.messages == ["Not authorized to access this route"]
        assert err.message == "Not authorized to access this route"

    def test_unauthorized_error(self):
        err = UnauthorizedError("nope")
        assert err.http_status == 403
        assert err.code == "UNAUTHORIZED"
        assert err.kind is ErrorKind.UNAUTHORIZED

    def test_not_found_error(self):
        err = NotFoundError(["No job exists for given id 5"])
        assert err.http_status == 404
        assert err.code == "NOT_FOUND"
        assert err.kind is ErrorKind.NOT_FOUND

    def test_unauthenticated_error(self):
        err = UnauthenticatedError()
        assert err.http_status == 401
        assert err.code == "UNAUTHENTICATED"
        assert err.message == "authentication invalid"

    def test_to_dict_without_details(self):
        d = UnauthenticatedError("invalid credentials").to_dict()
        assert d == {"code": "UNAUTHENTICATED", "message": "invalid credentials"}


# ---------------------------------------------------------------------------
# Integration tests on HTTP error responses
# ---------------------------------------------------------------------------

class TestErrorEnvelope:
    def test_gate_error_envelope(self, client):
        r = client.post("/auth/login", json={})
        assert r.status_code == 400
        body = r.json()
        assert body["code"] == "BAD_REQUEST"
        assert body["details"]["errors"] == [
            "Email is required",
            "Invalid email format",
            "Password is required",
        ]

    def test_non_object_body_rejected_by_gate(self, client):
        r = client.post("/auth/login", json=["ana@mail.com", "secret123"])
        assert r.status_code == 400
        assert r.json()["details"]["errors"] == ["Request body must be a JSON object"]

    def test_malformed_json_returns_validation_error(self, client):
        r = client.post(
            "/auth/login",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_no_session_returns_401(self, client):
        r = client.get("/jobs")
        assert r.status_code == 401
        assert r.json()["code"] == "UNAUTHENTICATED"

    def test_invalid_query_enum_returns_validation_error(self, owner):
        r = owner.get("/jobs?sort=sideways")
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        fields = [e["field"] for e in body["details"]["errors"]]
        assert any("sort" in f for f in fields)
