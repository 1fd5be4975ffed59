from enum import Enum

from showcase.extensions import db
from showcase.models.base import TimestampMixin, isoformat, new_id, utcnow


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"


ORDER_STATUSES = [s.value for s in OrderStatus]


class Order(TimestampMixin, db.Model):
    __tablename__ = "orders"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    customer_name = db.Column(db.String(200), nullable=False)
    customer_email = db.Column(db.String(255), nullable=True)
    customer_phone = db.Column(db.String(40), nullable=False, index=True)
    subtotal_cents = db.Column(db.Integer, nullable=False, default=0)
    tax_cents = db.Column(db.Integer, nullable=False, default=0)
    tip_cents = db.Column(db.Integer, nullable=False, default=0)
    total_cents = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(db.String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    payment_status = db.Column(db.String(20), nullable=False, default=PaymentStatus.UNPAID.value)
    pickup_at = db.Column(db.DateTime, nullable=True)
    special_instructions = db.Column(db.Text, nullable=True)
    stripe_session_id = db.Column(db.String(255), nullable=True, index=True)

    items = db.relationship("OrderItem", back_populates="order", cascade="all, delete-orphan", lazy=True)
    history = db.relationship(
        "OrderStatusHistory",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderStatusHistory.created_at.desc()",
        lazy=True,
    )

    def to_dict(self, include_items=True):
        data = {
            "id": self.id,
            "customerName": self.customer_name,
            "customerEmail": self.customer_email,
            "customerPhone": self.customer_phone,
            "subtotalCents": self.subtotal_cents,
            "taxCents": self.tax_cents,
            "tipCents": self.tip_cents,
            "totalCents": self.total_cents,
            "status": self.status,
            "paymentStatus": self.payment_status,
            "pickupAt": isoformat(self.pickup_at),
            "specialInstructions": self.special_instructions,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_items:
            data["items"] = [item.to_dict() for item in self.items]
            data["history"] = [entry.to_dict() for entry in self.history]
        return data


class OrderItem(db.Model):
    __tablename__ = "order_items"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    order_id = db.Column(db.String(36), db.ForeignKey("orders.id"), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    sku = db.Column(db.String(100), nullable=True)
    qty = db.Column(db.Integer, nullable=False, default=1)
    unit_cents = db.Column(db.Integer, nullable=False)
    # [{"name": str, "priceCents": int}]
    customizations = db.Column(db.JSON, nullable=False, default=list)
    special_request = db.Column(db.Text, nullable=True)

    order = db.relationship("Order", back_populates="items")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "sku": self.sku,
            "qty": self.qty,
            "unitCents": self.unit_cents,
            "customizations": self.customizations or [],
            "specialRequest": self.special_request,
        }


class OrderStatusHistory(db.Model):
    __tablename__ = "order_status_history"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    order_id = db.Column(db.String(36), db.ForeignKey("orders.id"), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    order = db.relationship("Order", back_populates="history")

    def to_dict(self):
        return {
            "status": self.status,
            "notes": self.notes,
            "createdAt": isoformat(self.created_at),
        }
