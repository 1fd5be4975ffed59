"""
Flask application factory for the showcase platform API.
"""

import logging
from typing import Optional

import sentry_sdk
from flask import Flask
from sentry_sdk.integrations.flask import FlaskIntegration

from showcase.config import get_config, validate_config
from showcase.errors import register_error_handlers
from showcase.extensions import init_extensions
from showcase.logging_config import setup_logging
from showcase.middleware.request_id import init_request_id_middleware
from showcase.routes import register_blueprints
from showcase.security.rate_limit import init_proxy_fix

logger = logging.getLogger(__name__)


def setup_sentry(app: Flask) -> None:
    """Initialize Sentry error tracking"""
    sentry_dsn = app.config.get("SENTRY_DSN")

    if sentry_dsn and app.config.get("ENVIRONMENT") == "production":
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment="production",
            release=app.config.get("APP_VERSION", "1.0.0"),
            send_default_pii=False,
        )
        logger.info("Sentry error tracking initialized")


def setup_security_headers(app: Flask) -> None:
    """Add security headers to all responses"""

    @app.after_request
    def add_security_headers(response):
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


def create_app(config_name: Optional[str] = None) -> Flask:
    """
    Build the application.

    ``config_name`` selects the config class (development, testing,
    production); without it APP_ENV decides.
    """
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    validate_config(app)

    init_proxy_fix(app)
    init_request_id_middleware(app)
    setup_logging(app)
    setup_sentry(app)

    init_extensions(app)
    setup_security_headers(app)
    register_error_handlers(app)
    register_blueprints(app)

    # Models must be imported for create_all and migrations to see them
    from showcase import models  # noqa: F401

    logger.info(f"Application created in {app.config.get('ENVIRONMENT')} mode")
    return app
