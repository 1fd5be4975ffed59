from .base import BaseConfig


class TestingConfig(BaseConfig):
    """
    Test configuration: in-memory database, no outbound mail, inline notifications.
    """

    TESTING = True
    ENVIRONMENT = "testing"

    SECRET_KEY = "test-secret-key"
    JWT_SECRET_KEY = "super-secret-test-key-2024"

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"

    RATELIMIT_STORAGE_URI = "memory://"
    TRUSTED_PROXY_HOPS = 1
    REDIS_URL = None

    STRIPE_SECRET_KEY = "sk_test_mock"
    STRIPE_WEBHOOK_SECRET = "whsec_test"
    STRIPE_GENERATOR_PRO_PRICE_ID = "price_pro_test"

    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = "test@example.com"
    ADMIN_EMAIL = "admin@example.com"

    SLACK_WEBHOOK_URL = None
    DISCORD_WEBHOOK_URL = None
    KITCHEN_WEBHOOK_URL = None
    NOTIFICATIONS_ASYNC = False

    CORS_ORIGINS = ["http://localhost:3000"]
    SENTRY_DSN = None
