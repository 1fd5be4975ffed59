from showcase.extensions import db
from showcase.models.base import TimestampMixin, isoformat, new_id


class Payment(TimestampMixin, db.Model):
    """
    A settled checkout.

    ``stripe_payment_id`` holds the payment intent id and is unique, which is
    what keeps replayed webhook deliveries from recording a payment twice.
    """

    __tablename__ = "payments"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    order_id = db.Column(db.String(36), db.ForeignKey("orders.id"), nullable=True, index=True)
    amount_cents = db.Column(db.Integer, nullable=False)
    currency = db.Column(db.String(10), nullable=False, default="usd")
    stripe_payment_id = db.Column(db.String(255), unique=True, nullable=True)
    stripe_session_id = db.Column(db.String(255), unique=True, nullable=False)
    # "metadata" is reserved on declarative models
    payment_metadata = db.Column("metadata", db.JSON, nullable=False, default=dict)

    user = db.relationship("User")
    order = db.relationship("Order")

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "orderId": self.order_id,
            "amountCents": self.amount_cents,
            "currency": self.currency,
            "stripePaymentId": self.stripe_payment_id,
            "stripeSessionId": self.stripe_session_id,
            "metadata": self.payment_metadata or {},
            "createdAt": isoformat(self.created_at),
        }
