from showcase.errors import ValidationError
from showcase.extensions import db
from showcase.services.payouts import get_creator, get_or_create_creator


def age_restricted(user):
    creator = get_creator(user)
    return bool(creator and creator.age_restricted)


def set_age_restricted(user, value):
    if not isinstance(value, bool):
        raise ValidationError("ageRestricted boolean required", field="ageRestricted")
    creator = get_or_create_creator(user)
    creator.age_restricted = value
    db.session.commit()
    return creator.age_restricted
