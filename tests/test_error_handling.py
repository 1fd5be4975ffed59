import logging

from showcase.errors import ApiError, NotFound, ValidationError
from showcase.logging_config import RequestIdFilter


class TestApiErrorShape:
    def test_defaults(self):
        error = NotFound("Order not found")
        assert error.status_code == 404
        assert error.to_dict() == {"error": "Order not found", "code": "NOT_FOUND"}

    def test_field_and_payload(self):
        error = ValidationError("Missing required fields", field="email", payload={"missing": ["email"]})
        assert error.to_dict() == {
            "error": "Missing required fields",
            "code": "VALIDATION_ERROR",
            "field": "email",
            "missing": ["email"],
        }

    def test_overrides(self):
        error = ApiError("Nope", status_code=418, code="TEAPOT")
        assert (error.status_code, error.code) == (418, "TEAPOT")


class TestErrorResponses:
    def test_unknown_route_is_json(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.get_json()["code"] == "NOT_FOUND"

    def test_method_not_allowed(self, client):
        response = client.delete("/api/orders")
        assert response.status_code == 405
        assert response.get_json()["code"] == "METHOD_NOT_ALLOWED"

    def test_non_json_body_is_treated_as_empty(self, client):
        response = client.post("/api/orders", data="not json", content_type="text/plain")

        assert response.status_code == 400
        assert response.get_json()["error"] == "Name and phone required"

    def test_malformed_token(self, client):
        response = client.get("/api/creator/settings", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code in (401, 422)
        assert "error" in response.get_json()

    def test_unhandled_exception_is_generic_500(self, app, client):
        @app.route("/api/boom")
        def boom():
            raise RuntimeError("secret internals")

        response = client.get("/api/boom")

        assert response.status_code == 500
        assert response.get_json() == {"error": "An unexpected error occurred", "code": "INTERNAL_ERROR"}


class TestResponseHeaders:
    def test_request_id_generated(self, client):
        response = client.get("/api/menu")
        assert response.headers["X-Request-ID"]

    def test_request_id_propagated(self, client):
        response = client.get("/api/menu", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_security_headers(self, client):
        response = client.get("/api/menu")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestRequestIdLogging:
    def make_record(self):
        return logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

    def test_outside_request(self):
        record = self.make_record()
        assert RequestIdFilter().filter(record) is True
        assert record.request_id is None

    def test_inside_request(self, app):
        with app.test_request_context("/api/orders"):
            from flask import g
            g.request_id = "req-456"
            record = self.make_record()
            RequestIdFilter().filter(record)

        assert record.request_id == "req-456"
