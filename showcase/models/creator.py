from enum import Enum

from showcase.extensions import db
from showcase.models.base import TimestampMixin, isoformat, new_id, utcnow


class PayoutMethod(str, Enum):
    STRIPE_CONNECT = "STRIPE_CONNECT"
    BANK_WIRE = "BANK_WIRE"
    PAYPAL = "PAYPAL"


class PayoutCadence(str, Enum):
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"


PAYOUT_METHODS = [m.value for m in PayoutMethod]
PAYOUT_CADENCES = [c.value for c in PayoutCadence]


class Creator(TimestampMixin, db.Model):
    __tablename__ = "creators"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), unique=True, nullable=False)
    display_name = db.Column(db.String(120), nullable=False)
    bio = db.Column(db.Text, nullable=True)
    revenue_share_percent = db.Column(db.Integer, nullable=True)
    promo_ends_at = db.Column(db.DateTime, nullable=True)
    age_restricted = db.Column(db.Boolean, nullable=False, default=False)
    payout_method = db.Column(db.String(20), nullable=False, default=PayoutMethod.STRIPE_CONNECT.value)
    payout_cadence = db.Column(db.String(20), nullable=False, default=PayoutCadence.MONTHLY.value)

    user = db.relationship("User", back_populates="creator")
    plans = db.relationship("Plan", back_populates="creator", lazy=True)
    payout_requests = db.relationship("PayoutRequest", back_populates="creator", lazy=True)

    def summary(self):
        return {"id": self.id, "displayName": self.display_name, "userId": self.user_id}

    def to_dict(self):
        return {
            **self.summary(),
            "bio": self.bio,
            "revenueSharePercent": self.revenue_share_percent,
            "promoEndsAt": isoformat(self.promo_ends_at),
            "ageRestricted": self.age_restricted,
            "payoutMethod": self.payout_method,
            "payoutCadence": self.payout_cadence,
        }


class Plan(TimestampMixin, db.Model):
    """A creator's subscription tier, mirrored from the payment provider."""

    __tablename__ = "plans"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    creator_id = db.Column(db.String(36), db.ForeignKey("creators.id"), nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, nullable=True)
    price_cents = db.Column(db.Integer, nullable=False)
    currency = db.Column(db.String(10), nullable=False, default="usd")
    interval = db.Column(db.String(20), nullable=False, default="month")
    stripe_price_id = db.Column(db.String(120), nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    creator = db.relationship("Creator", back_populates="plans")

    def to_dict(self):
        return {
            "id": self.id,
            "creatorId": self.creator_id,
            "name": self.name,
            "description": self.description,
            "priceCents": self.price_cents,
            "currency": self.currency,
            "interval": self.interval,
            "isActive": self.is_active,
        }


class Post(TimestampMixin, db.Model):
    __tablename__ = "posts"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    author_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=True)
    content = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.String(1024), nullable=True)
    video_url = db.Column(db.String(1024), nullable=True)
    is_premium = db.Column(db.Boolean, nullable=False, default=False)
    is_published = db.Column(db.Boolean, nullable=False, default=True)

    author = db.relationship("User")
    likes = db.relationship("PostLike", back_populates="post", cascade="all, delete-orphan", lazy=True)

    @property
    def like_count(self):
        return len(self.likes)

    def to_dict(self):
        return {
            "id": self.id,
            "authorId": self.author_id,
            "author": {"id": self.author.id, "name": self.author.name} if self.author else None,
            "title": self.title,
            "content": self.content,
            "imageUrl": self.image_url,
            "videoUrl": self.video_url,
            "isPremium": self.is_premium,
            "isPublished": self.is_published,
            "likeCount": self.like_count,
            "createdAt": isoformat(self.created_at),
        }


class PostLike(db.Model):
    __tablename__ = "post_likes"
    __table_args__ = (db.UniqueConstraint("post_id", "user_id", name="uq_post_like"),)

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    post_id = db.Column(db.String(36), db.ForeignKey("posts.id"), nullable=False)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    post = db.relationship("Post", back_populates="likes")
