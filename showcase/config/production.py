import os

from .base import BaseConfig


class ProductionConfig(BaseConfig):
    """
    Production configuration.
    """

    DEBUG = False
    ENVIRONMENT = "production"

    SESSION_COOKIE_SECURE = True

    # No SQLite fallback outside development
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")

    # MUST be set via environment variables in real production
    REQUIRED_SETTINGS = ("SECRET_KEY", "SQLALCHEMY_DATABASE_URI", "JWT_SECRET_KEY", "STRIPE_WEBHOOK_SECRET")
