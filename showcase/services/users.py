import logging

from showcase.extensions import db
from showcase.models.user import User

logger = logging.getLogger(__name__)


def find_or_create_by_email(email, name=None):
    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(email=email, name=name)
        db.session.add(user)
        db.session.flush()
        logger.info(f"Created user {user.id} for {email}")
    return user
