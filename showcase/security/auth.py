# showcase/security/auth.py
"""
Request authentication helpers.

Identity is issued by the hosted auth provider as a bearer JWT whose subject
is the user's email. The local ``User`` row is looked up, or created on first
sight, from that subject.
"""

from functools import wraps

from flask import g
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from showcase.errors import AuthenticationError, PermissionDenied
from showcase.extensions import db
from showcase.models.user import User, UserRole


def resolve_user(create=True):
    """Return the ``User`` for the verified token, creating it if allowed."""
    identity = get_jwt_identity()
    if not identity:
        raise AuthenticationError("Unauthorized")

    email = str(identity).strip().lower()
    user = User.query.filter_by(email=email).first()
    if user is None and create:
        claims = get_jwt()
        user = User(email=email, name=claims.get("name"))
        db.session.add(user)
        db.session.commit()
    return user


def login_required(fn):
    """Require a valid bearer token and expose the user as ``g.current_user``."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        g.current_user = resolve_user()
        return fn(*args, **kwargs)

    return wrapper


def admin_required(fn):
    """Require a bearer token belonging to an existing ADMIN user."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        user = resolve_user(create=False)
        if user is None or user.role != UserRole.ADMIN.value:
            raise PermissionDenied("Forbidden")
        g.current_user = user
        return fn(*args, **kwargs)

    return wrapper


def current_user():
    return g.current_user
