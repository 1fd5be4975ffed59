# showcase/health.py
"""Dependency health checks. Each returns a ``{"status": ..., "message": ...}`` dict."""

import logging
from typing import Dict

import redis
import stripe
from flask import current_app
from sqlalchemy import text

from showcase.extensions import db

logger = logging.getLogger(__name__)


def check_database() -> Dict[str, str]:
    try:
        db.session.execute(text("SELECT 1"))
        return {"status": "ok", "message": "Database connection successful"}
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        db.session.rollback()
        return {"status": "error", "message": "Database connection failed"}


def check_redis() -> Dict[str, str]:
    url = current_app.config.get("REDIS_URL")
    if not url:
        return {"status": "skipped", "message": "REDIS_URL not configured"}

    try:
        client = redis.from_url(url, socket_connect_timeout=2)
        client.ping()
        return {"status": "ok", "message": "Redis connection successful"}
    except redis.exceptions.RedisError as e:
        logger.error(f"Redis health check failed: {str(e)}")
        return {"status": "error", "message": "Redis connection failed"}


def check_stripe() -> Dict[str, str]:
    secret_key = current_app.config.get("STRIPE_SECRET_KEY")
    if not secret_key:
        return {"status": "skipped", "message": "STRIPE_SECRET_KEY not configured"}

    try:
        stripe.Balance.retrieve(api_key=secret_key)
        return {"status": "ok", "message": "Stripe API reachable"}
    except stripe.StripeError as e:
        logger.error(f"Stripe health check failed: {str(e)}")
        return {"status": "error", "message": "Stripe API unreachable"}


def run_health_checks() -> Dict[str, object]:
    checks = {
        "database": check_database(),
        "redis": check_redis(),
        "stripe": check_stripe(),
    }
    healthy = all(check["status"] != "error" for check in checks.values())
    return {
        "status": "ok" if healthy else "degraded",
        "version": current_app.config.get("APP_VERSION"),
        "checks": checks,
    }
