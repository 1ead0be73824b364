"""
Project: Restaurant Ordering Storefront & Back Office
Date: October 2026

Description:
Shared fixtures: an app bound to an in-memory database, anonymous and
logged-in clients, and a small seeded catalog.
"""

import os
import sys
from decimal import Decimal

import pytest

# --- Make sure project root is importable ---
TESTS_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(TESTS_DIR, os.pardir, os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app import create_app  # noqa: E402
from models import db, Category, Product, Extra, ExtraOption  # noqa: E402


@pytest.fixture
def app():
    app = create_app(testing=True)
    with app.app_context():
        db.drop_all()
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    c = app.test_client()
    resp = c.post("/login", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200
    return c


@pytest.fixture
def catalog(app):
    """Burgers category with a Burger product and two extras groups."""
    with app.app_context():
        burgers = Category(name="Burgers", display_order=1)
        drinks = Category(name="Drinks", display_order=2)
        db.session.add_all([burgers, drinks])
        db.session.flush()

        burger = Product(name="Burger", price=Decimal("10.00"), category_id=burgers.id)
        cola = Product(name="Cola", price=Decimal("2.50"), category_id=drinks.id)
        hidden = Product(name="Old Burger", price=Decimal("9.00"), category_id=burgers.id, available=False)

        cheese = Extra(category_id=burgers.id, name="Cheese", max_selections=2)
        cheddar = ExtraOption(name="Cheddar", price=Decimal("1.50"))
        blue = ExtraOption(name="Blue", price=Decimal("2.00"))
        retired = ExtraOption(name="Brie", price=Decimal("3.00"), active=False)
        cheese.options = [cheddar, blue, retired]

        doneness = Extra(category_id=burgers.id, name="Doneness", required=True, max_selections=1)
        medium = ExtraOption(name="Medium", price=Decimal("0"))
        well = ExtraOption(name="Well done", price=Decimal("0"))
        doneness.options = [medium, well]

        db.session.add_all([burger, cola, hidden, cheese, doneness])
        db.session.commit()
        return {
            "burgers": burgers.id,
            "drinks": drinks.id,
            "burger": burger.id,
            "cola": cola.id,
            "hidden": hidden.id,
            "cheese": cheese.id,
            "cheddar": cheddar.id,
            "blue": blue.id,
            "retired": retired.id,
            "doneness": doneness.id,
            "medium": medium.id,
            "well": well.id,
        }
