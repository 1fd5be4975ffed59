from showcase.extensions import db
from showcase.models.base import TimestampMixin, new_id


class MenuCategory(TimestampMixin, db.Model):
    __tablename__ = "menu_categories"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, nullable=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    active = db.Column(db.Boolean, nullable=False, default=True)

    items = db.relationship(
        "MenuItem",
        back_populates="category",
        order_by="MenuItem.display_order",
        lazy=True,
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "displayOrder": self.display_order,
            "items": [item.to_dict() for item in self.items if item.available],
        }


class MenuItem(TimestampMixin, db.Model):
    __tablename__ = "menu_items"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    category_id = db.Column(db.String(36), db.ForeignKey("menu_categories.id"), nullable=False, index=True)
    sku = db.Column(db.String(100), unique=True, nullable=False)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    price_cents = db.Column(db.Integer, nullable=False)
    available = db.Column(db.Boolean, nullable=False, default=True)
    prep_time_mins = db.Column(db.Integer, nullable=True)
    allergens = db.Column(db.String(255), nullable=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)

    category = db.relationship("MenuCategory", back_populates="items")
    customizations = db.relationship("MenuCustomization", back_populates="item", lazy=True)

    def customization_prices(self):
        """Available customization name to price in cents."""
        return {c.name: c.price_cents for c in self.customizations if c.available}

    def to_dict(self):
        return {
            "id": self.id,
            "sku": self.sku,
            "name": self.name,
            "description": self.description,
            "priceCents": self.price_cents,
            "prepTimeMins": self.prep_time_mins,
            "allergens": self.allergens,
            "customizations": [c.to_dict() for c in self.customizations if c.available],
        }


class MenuCustomization(db.Model):
    __tablename__ = "menu_customizations"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    item_id = db.Column(db.String(36), db.ForeignKey("menu_items.id"), nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)
    price_cents = db.Column(db.Integer, nullable=False, default=0)
    available = db.Column(db.Boolean, nullable=False, default=True)

    item = db.relationship("MenuItem", back_populates="customizations")

    def to_dict(self):
        return {"id": self.id, "name": self.name, "priceCents": self.price_cents}
