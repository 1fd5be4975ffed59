# showcase/logging_config.py
import logging
import logging.config
import os
from datetime import datetime

from flask import g, has_request_context, request
from pythonjsonlogger import jsonlogger


class RequestIdFilter(logging.Filter):
    """
    Inject request_id into every log record if present.
    """

    def filter(self, record):
        record.request_id = g.get("request_id") if has_request_context() else None
        return True


def build_logging_config(level):
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {
                "()": RequestIdFilter,
            },
        },
        "formatters": {
            "json": {
                "()": jsonlogger.JsonFormatter,
                "fmt": (
                    "%(asctime)s "
                    "%(levelname)s "
                    "%(name)s "
                    "%(message)s "
                    "%(request_id)s "
                    "%(module)s "
                    "%(funcName)s "
                    "%(lineno)d"
                ),
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "filters": ["request_id"],
            },
        },
        "loggers": {
            "werkzeug": {"level": "WARNING"},
            "sqlalchemy.engine": {"level": "WARNING"},
            "urllib3": {"level": "WARNING"},
            "stripe": {"level": "WARNING"},
        },
        "root": {
            "level": level,
            "handlers": ["default"],
        },
    }


def setup_logging(app):
    """Configure structured JSON logging for the application"""
    level = app.config.get("LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.config.dictConfig(build_logging_config(level))

    @app.before_request
    def log_request():
        if app.config.get("DEBUG") or app.config.get("LOG_REQUESTS"):
            g.start_time = datetime.now()
            app.logger.info(
                f"Request: {request.method} {request.path}",
                extra={
                    "ip": request.remote_addr,
                    "user_agent": request.user_agent.string if request.user_agent else None,
                },
            )

    @app.after_request
    def log_response(response):
        if (app.config.get("DEBUG") or app.config.get("LOG_REQUESTS")) and "start_time" in g:
            duration = (datetime.now() - g.start_time).total_seconds() * 1000
            app.logger.info(
                f"Response: {request.method} {request.path} - {response.status_code}",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": round(duration, 2),
                    "method": request.method,
                    "path": request.path,
                },
            )
        return response

    return app


def configure_logging_for_cli():
    """Configure logging for management commands run outside a request."""
    logging.config.dictConfig(build_logging_config(os.getenv("LOG_LEVEL", "INFO").upper()))
