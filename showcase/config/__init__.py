import os

from .base import ConfigurationError
from .development import DevelopmentConfig
from .production import ProductionConfig
from .testing import TestingConfig


CONFIGS = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config(name=None):
    """
    Resolve and return the correct configuration class.

    ``name`` wins over the APP_ENV environment variable. Supported values:
    - development
    - testing
    - production
    """

    env = (name or os.getenv("APP_ENV", "development")).lower()

    try:
        return CONFIGS[env]
    except KeyError:
        raise ConfigurationError(f"Invalid APP_ENV value: {env}")


def validate_config(app):
    """Fail fast when a required setting is missing."""
    missing = [key for key in app.config.get("REQUIRED_SETTINGS", ()) if not app.config.get(key)]
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")


__all__ = ["ConfigurationError", "get_config", "validate_config", "CONFIGS"]
