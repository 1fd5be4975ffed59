from unittest.mock import patch

import stripe


class TestHealth:
    def test_healthy(self, app, client):
        with patch("stripe.Balance.retrieve", return_value={"object": "balance"}):
            response = client.get("/api/health")
        data = response.get_json()

        assert response.status_code == 200
        assert data["status"] == "ok"
        assert data["version"] == app.config["APP_VERSION"]
        assert data["checks"]["database"]["status"] == "ok"
        assert data["checks"]["redis"]["status"] == "skipped"
        assert data["checks"]["stripe"]["status"] == "ok"

    def test_stripe_unreachable(self, client):
        with patch("stripe.Balance.retrieve", side_effect=stripe.APIConnectionError("down")):
            response = client.get("/api/health")

        assert response.status_code == 503
        assert response.get_json()["status"] == "degraded"
        assert response.get_json()["checks"]["stripe"]["status"] == "error"

    def test_database_down(self, client):
        failed = {"status": "error", "message": "Database connection failed"}
        with patch("showcase.health.check_database", return_value=failed), \
                patch("stripe.Balance.retrieve", return_value={}):
            response = client.get("/api/health")

        assert response.status_code == 503
        assert response.get_json()["checks"]["database"] == failed

    def test_stripe_skipped_without_key(self, app, client):
        app.config["STRIPE_SECRET_KEY"] = None
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.get_json()["checks"]["stripe"]["status"] == "skipped"
