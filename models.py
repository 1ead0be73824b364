"""
Project: Restaurant Ordering Storefront & Back Office
Date: October 2026

Description:
Database models for the catalog (categories, products, extras and their
options) and for submitted orders. Carts are never stored here.
"""

from datetime import datetime

from flask_sqlalchemy import SQLAlchemy

from customization import AddOnGroup, AddOnOption, ProductSnapshot

db = SQLAlchemy()

ORDER_STATUSES = ("pending", "preparing", "ready", "delivered", "cancelled")
DELIVERY_TYPES = ("pickup", "delivery")
PAYMENT_METHODS = ("cash", "transfer")


class Category(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(80), unique=True, nullable=False)
    description = db.Column(db.String(255), nullable=True)
    icon = db.Column(db.String(40), nullable=True)
    display_order = db.Column(db.Integer, default=0)
    active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    products = db.relationship("Product", backref="category", lazy=True)
    extras = db.relationship("Extra", backref="category", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "display_order": self.display_order,
            "active": self.active,
        }


class Product(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.String(500), default="")
    price = db.Column(db.Numeric(10, 2), nullable=False)
    image_url = db.Column(db.String(255), default="")
    category_id = db.Column(db.Integer, db.ForeignKey("category.id"), nullable=True)
    available = db.Column(db.Boolean, default=True)
    is_promotion = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def snapshot(self):
        return ProductSnapshot(id=str(self.id), name=self.name, base_price=self.price)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description or "",
            "price": self.price,
            "image_url": self.image_url or "",
            "category_id": self.category_id,
            "category": self.category.name if self.category else "Uncategorized",
            "available": self.available,
            "is_promotion": self.is_promotion,
        }


class Extra(db.Model):
    """A group of add-on options offered for every product of a category."""

    id = db.Column(db.Integer, primary_key=True)
    category_id = db.Column(db.Integer, db.ForeignKey("category.id"), nullable=True)
    name = db.Column(db.String(120), nullable=False)
    max_selections = db.Column(db.Integer, default=1)
    required = db.Column(db.Boolean, default=False)
    active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    options = db.relationship(
        "ExtraOption", backref="extra", cascade="all, delete-orphan", lazy=True, order_by="ExtraOption.id"
    )

    def active_options(self):
        return [o for o in self.options if o.active]

    def to_group(self):
        return AddOnGroup(
            id=str(self.id),
            name=self.name,
            required=bool(self.required),
            max_selections=self.max_selections or 1,
            options=tuple(
                AddOnOption(id=str(o.id), label=o.name, price=o.price) for o in self.active_options()
            ),
        )

    def to_dict(self, active_only=False):
        options = self.active_options() if active_only else self.options
        return {
            "id": self.id,
            "category_id": self.category_id,
            "category": self.category.name if self.category else None,
            "name": self.name,
            "max_selections": self.max_selections,
            "required": self.required,
            "active": self.active,
            "options": [o.to_dict() for o in options],
        }


class ExtraOption(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    extra_id = db.Column(db.Integer, db.ForeignKey("extra.id"), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    price = db.Column(db.Numeric(10, 2), default=0)
    active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {"id": self.id, "extra_id": self.extra_id, "name": self.name, "price": self.price, "active": self.active}


class Order(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    customer_name = db.Column(db.String(120), nullable=False)
    customer_phone = db.Column(db.String(40), nullable=False)
    customer_email = db.Column(db.String(120), nullable=True)
    customer_address = db.Column(db.String(255), nullable=True)
    delivery_type = db.Column(db.String(20), default="pickup")
    payment_method = db.Column(db.String(20), default="cash")
    special_instructions = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), default="pending")
    total_amount = db.Column(db.Numeric(10, 2), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    items = db.relationship("OrderItem", backref="order", cascade="all, delete-orphan", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "customer_email": self.customer_email,
            "customer_address": self.customer_address,
            "delivery_type": self.delivery_type,
            "payment_method": self.payment_method,
            "special_instructions": self.special_instructions,
            "status": self.status,
            "total_amount": self.total_amount,
            "created_at": self.created_at.isoformat(),
            "items": [i.to_dict() for i in self.items],
        }


class OrderItem(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("order.id"), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey("product.id"), nullable=True)
    name = db.Column(db.String(120), nullable=False)
    quantity = db.Column(db.Integer, default=1)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False)
    total_price = db.Column(db.Numeric(10, 2), nullable=False)
    special_instructions = db.Column(db.Text, nullable=True)
    extras = db.relationship("OrderItemExtra", backref="order_item", cascade="all, delete-orphan", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "order_id": self.order_id,
            "product_id": self.product_id,
            "name": self.name,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total_price": self.total_price,
            "special_instructions": self.special_instructions,
            "extras": [e.to_dict() for e in self.extras],
        }


class OrderItemExtra(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    order_item_id = db.Column(db.Integer, db.ForeignKey("order_item.id"), nullable=False)
    extra_option_id = db.Column(db.Integer, db.ForeignKey("extra_option.id"), nullable=True)
    name = db.Column(db.String(255), nullable=False)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False)

    def to_dict(self):
        return {"id": self.id, "extra_option_id": self.extra_option_id, "name": self.name, "unit_price": self.unit_price}
