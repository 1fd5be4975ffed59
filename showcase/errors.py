# showcase/errors.py
"""
API error types and the JSON error handlers that render them.

Route handlers raise ``ApiError`` subclasses; everything else that escapes a
handler is logged with its traceback and mapped to a generic 500.
"""

import logging
import math
import time

from flask import jsonify, request
from flask_limiter.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message, status_code=None, code=None, field=None, payload=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.field = field
        self.payload = payload

    def to_dict(self):
        body = {"error": self.message, "code": self.code}
        if self.field:
            body["field"] = self.field
        if self.payload:
            body.update(self.payload)
        return body


class ValidationError(ApiError):
    status_code = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(ApiError):
    status_code = 401
    code = "UNAUTHORIZED"


class PermissionDenied(ApiError):
    status_code = 403
    code = "FORBIDDEN"


class NotFound(ApiError):
    status_code = 404
    code = "NOT_FOUND"


class Conflict(ApiError):
    status_code = 409
    code = "CONFLICT"


class ExternalServiceError(ApiError):
    status_code = 502
    code = "UPSTREAM_ERROR"


def retry_after_seconds(limiter):
    """Seconds until the breached window resets, never less than one."""
    current = limiter.current_limit
    if current is not None:
        return max(1, math.ceil(current.reset_at - time.time()))
    return 60


def register_error_handlers(app):
    """Register all error handlers for the application"""
    from showcase.extensions import db, limiter

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            logger.error(f"{error.code}: {error.message} - Path: {request.path}")
        else:
            logger.warning(f"{error.code}: {error.message} - Path: {request.path}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(RateLimitExceeded)
    def handle_rate_limit(error):
        retry_after = retry_after_seconds(limiter)
        logger.warning(f"Rate limit exceeded: {error.description} - Path: {request.path}")
        response = jsonify({
            "error": "Too many submissions. Please try again later.",
            "code": "RATE_LIMITED",
            "retryAfter": retry_after,
        })
        response.status_code = 429
        response.headers["Retry-After"] = str(retry_after)
        return response

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        db.session.rollback()
        logger.warning(f"Integrity error: {error.orig} - Path: {request.path}")
        return jsonify({
            "error": "A record with these values already exists",
            "code": "DUPLICATE_ENTRY",
        }), 409

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({
            "error": error.description,
            "code": error.name.upper().replace(" ", "_"),
        }), error.code

    @app.errorhandler(Exception)
    def handle_exception(error):
        db.session.rollback()
        logger.exception(f"Unhandled exception on {request.method} {request.path}")
        return jsonify({
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }), 500
