from enum import Enum

from showcase.extensions import db
from showcase.models.base import TimestampMixin, isoformat, new_id


class UserRole(str, Enum):
    USER = "USER"
    CREATOR = "CREATOR"
    CLIENT = "CLIENT"
    ADMIN = "ADMIN"


class User(TimestampMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(120), nullable=True)
    role = db.Column(db.String(20), nullable=False, default=UserRole.USER.value)

    creator = db.relationship("Creator", back_populates="user", uselist=False)
    affiliates = db.relationship("Affiliate", back_populates="user", lazy=True)

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN.value

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "createdAt": isoformat(self.created_at),
        }

    def __repr__(self):
        return f"<User {self.email}>"
