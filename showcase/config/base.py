import os


class ConfigurationError(Exception):
    """
    Raised when an invalid or unsupported configuration is requested.
    """
    pass


def _env_list(name, default=""):
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class BaseConfig:
    """
    Base configuration shared by all environments.
    """

    # Flask
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv("SECRET_KEY")
    ENVIRONMENT = "base"

    # Security
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"

    # Application
    APP_NAME = "Showcase Platform"
    APP_URL = os.getenv("APP_URL", "http://localhost:3000")

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///showcase.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"
    JWT_ERROR_MESSAGE_KEY = "error"

    # CORS
    CORS_ORIGINS = _env_list("CORS_ORIGINS", "http://localhost:3000")

    # Rate limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv("REDIS_URL", "memory://")
    RATELIMIT_STRATEGY = "fixed-window"
    RATELIMIT_HEADERS_ENABLED = True
    INTAKE_RATE_LIMIT = os.getenv("INTAKE_RATE_LIMIT", "5 per minute")
    # Proxies in front of the app whose X-Forwarded-For entries are trusted
    TRUSTED_PROXY_HOPS = int(os.getenv("TRUSTED_PROXY_HOPS", "0"))
    REDIS_URL = os.getenv("REDIS_URL")

    # Stripe
    STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY")
    STRIPE_WEBHOOK_SECRET = os.getenv("STRIPE_WEBHOOK_SECRET")
    STRIPE_GENERATOR_PRO_PRICE_ID = os.getenv("STRIPE_GENERATOR_PRO_PRICE_ID")

    # Orders
    ORDER_TAX_RATE = float(os.getenv("ORDER_TAX_RATE", "0.085"))

    # Mail
    MAIL_SERVER = os.getenv("SMTP_HOST", "localhost")
    MAIL_PORT = int(os.getenv("SMTP_PORT", "587"))
    MAIL_USE_TLS = os.getenv("SMTP_USE_TLS", "true").lower() == "true"
    MAIL_USERNAME = os.getenv("SMTP_USER")
    MAIL_PASSWORD = os.getenv("SMTP_PASS")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "orders@showcase.dev")
    TEAM_EMAIL = os.getenv("TEAM_EMAIL", "team@showcase.dev")
    KITCHEN_EMAIL = os.getenv("KITCHEN_EMAIL", "kitchen@showcase.dev")
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")

    # Outbound webhooks
    SLACK_WEBHOOK_URL = os.getenv("SLACK_WEBHOOK_URL")
    DISCORD_WEBHOOK_URL = os.getenv("DISCORD_WEBHOOK_URL")
    KITCHEN_WEBHOOK_URL = os.getenv("KITCHEN_WEBHOOK_URL")
    WEBHOOK_TIMEOUT_SECONDS = 5
    NOTIFICATIONS_ASYNC = True

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_REQUESTS = os.getenv("LOG_REQUESTS", "false").lower() == "true"

    # Observability
    SENTRY_DSN = os.getenv("SENTRY_DSN")
    APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

    REQUIRED_SETTINGS = ()
