from decimal import Decimal

from models import db, Category, Product, Extra, ExtraOption
from app import create_app


app = create_app()
with app.app_context():
    db.create_all()

    if Category.query.count() == 0:
        burgers = Category(name="Burgers", icon="burger", display_order=1)
        pizzas = Category(name="Pizzas", icon="pizza", display_order=2)
        salads = Category(name="Salads", icon="salad", display_order=3)
        drinks = Category(name="Drinks", icon="drink", display_order=4)
        db.session.add_all([burgers, pizzas, salads, drinks])
        db.session.flush()

        db.session.add_all([
            Product(name="Classic Burger", description="Beef, lettuce, tomato, onion and house sauce",
                    price=Decimal("12.99"), category_id=burgers.id),
            Product(name="Margherita Pizza", description="Tomato sauce, fresh mozzarella and basil",
                    price=Decimal("15.50"), category_id=pizzas.id),
            Product(name="Caesar Salad", description="Romaine, croutons, parmesan and caesar dressing",
                    price=Decimal("8.50"), category_id=salads.id),
            Product(name="Cola", description="Classic soda 350ml", price=Decimal("2.50"), category_id=drinks.id),
        ])

        cheese = Extra(category_id=burgers.id, name="Cheese", max_selections=2)
        cheese.options = [
            ExtraOption(name="Cheddar", price=Decimal("1.50")),
            ExtraOption(name="Blue cheese", price=Decimal("2.00")),
        ]
        doneness = Extra(category_id=burgers.id, name="Doneness", required=True, max_selections=1)
        doneness.options = [
            ExtraOption(name="Medium", price=Decimal("0")),
            ExtraOption(name="Well done", price=Decimal("0")),
        ]
        db.session.add_all([cheese, doneness])

    db.session.commit()
    print("Seeded. Username=%s" % app.config["ADMIN_USERNAME"])
