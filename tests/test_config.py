import pytest
from flask import request

from showcase import create_app
from showcase.config import ConfigurationError, get_config
from showcase.config.production import ProductionConfig
from showcase.config.testing import TestingConfig


class TestGetConfig:
    def test_explicit_name(self):
        assert get_config("testing") is TestingConfig

    def test_name_is_case_insensitive(self):
        assert get_config("Production") is ProductionConfig

    def test_falls_back_to_app_env(self, monkeypatch):
        monkeypatch.setenv("APP_ENV", "testing")
        assert get_config() is TestingConfig

    def test_unknown_environment(self):
        with pytest.raises(ConfigurationError):
            get_config("staging")


class TestProductionValidation:
    def test_missing_settings_fail_fast(self, monkeypatch):
        monkeypatch.setattr(ProductionConfig, "SECRET_KEY", None)
        monkeypatch.setattr(ProductionConfig, "STRIPE_WEBHOOK_SECRET", None)

        with pytest.raises(ConfigurationError) as exc_info:
            create_app("production")

        assert "SECRET_KEY" in str(exc_info.value)
        assert "STRIPE_WEBHOOK_SECRET" in str(exc_info.value)

    def test_testing_app(self, app):
        assert app.config["TESTING"] is True
        assert app.config["NOTIFICATIONS_ASYNC"] is False


def add_whoami_route(app):
    @app.route("/whoami")
    def whoami():
        return request.remote_addr


class TestProxyFix:
    def test_trusted_hop_sets_remote_addr(self, app):
        add_whoami_route(app)

        response = app.test_client().get(
            "/whoami",
            headers={"X-Forwarded-For": "6.6.6.6, 203.0.113.7"},
            environ_base={"REMOTE_ADDR": "10.1.1.1"},
        )

        assert response.get_data(as_text=True) == "203.0.113.7"

    def test_no_trusted_hops_ignores_header(self, monkeypatch):
        monkeypatch.setattr(TestingConfig, "TRUSTED_PROXY_HOPS", 0)
        app = create_app("testing")
        add_whoami_route(app)

        response = app.test_client().get(
            "/whoami",
            headers={"X-Forwarded-For": "6.6.6.6"},
            environ_base={"REMOTE_ADDR": "10.1.1.1"},
        )

        assert response.get_data(as_text=True) == "10.1.1.1"
