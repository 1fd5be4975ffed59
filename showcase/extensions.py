# showcase/extensions.py
"""
Flask extensions initialization module.

Extensions are created unbound here and attached to the application in
``init_extensions`` so that models and blueprints can import them freely.
"""

import logging

from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_mail import Mail
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
jwt = JWTManager()
cors = CORS()
migrate = Migrate()
mail = Mail()
limiter = Limiter(key_func=get_remote_address)

logger = logging.getLogger(__name__)


def init_extensions(app):
    """Initialize all Flask extensions against ``app``."""

    db.init_app(app)
    migrate.init_app(app, db)
    logger.info("SQLAlchemy and Flask-Migrate initialized")

    jwt.init_app(app)
    setup_jwt_callbacks()
    logger.info("JWT Manager initialized")

    init_cors(app)

    mail.init_app(app)
    logger.info("Flask-Mail initialized")

    init_rate_limiter(app)

    return app


def init_cors(app):
    """Restrict CORS to the configured origins on API routes only."""
    origins = app.config.get("CORS_ORIGINS", [])
    if "*" in origins and app.config.get("ENVIRONMENT") == "production":
        raise RuntimeError("Wildcard CORS origin '*' is not allowed in production")

    cors.init_app(app, resources={
        r"/api/*": {
            "origins": origins,
            "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization", "X-Request-ID", "Stripe-Signature"],
            "expose_headers": ["X-Request-ID", "Retry-After"],
            "supports_credentials": True,
            "max_age": 600,
        }
    })
    logger.info(f"CORS configured for origins: {origins}")


def init_rate_limiter(app):
    """Bind the limiter; storage comes from RATELIMIT_STORAGE_URI."""
    storage_uri = app.config.get("RATELIMIT_STORAGE_URI", "memory://")
    if storage_uri == "memory://" and app.config.get("ENVIRONMENT") == "production":
        logger.warning("Using in-memory rate limiting storage - NOT RECOMMENDED FOR PRODUCTION")

    limiter.init_app(app)
    logger.info(f"Rate limiter initialized with storage {storage_uri.split('@')[-1]}")


def setup_jwt_callbacks():
    """Render JWT failures in the same JSON shape as the rest of the API."""
    from flask import jsonify

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({
            "error": "The token has expired",
            "code": "TOKEN_EXPIRED",
        }), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify({
            "error": "Invalid token",
            "code": "INVALID_TOKEN",
        }), 401

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return jsonify({
            "error": "Unauthorized",
            "code": "UNAUTHORIZED",
        }), 401


__all__ = ["db", "jwt", "cors", "migrate", "mail", "limiter", "init_extensions"]
