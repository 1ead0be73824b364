"""
Project: Restaurant Ordering Storefront & Back Office
Date: October 2026

Description:
Main application entry point. Initializes Flask, the database and Socket.IO,
and registers the storefront routes (catalog, cart, checkout) and the back
office routes (categories, products, extras, orders, sales reports).
"""

import logging
import uuid

from flask import Flask, Response, jsonify, request, session
from flask_socketio import SocketIO
from werkzeug.security import check_password_hash, generate_password_hash

from analytics import PERIODS, payment_method_stats, sales_by_period, sales_report_csv, summarize, top_products
from cart import Cart, CartRegistry
from composer import CheckoutDetails, compose_order_message, validate_checkout, whatsapp_url
from config import Config
from customization import Selection, build_line_item
from errors import CheckoutError, CustomizationError
from formatters import require_non_negative
from models import ORDER_STATUSES, Category, Extra, ExtraOption, Order, OrderItem, OrderItemExtra, Product, db

log = logging.getLogger(__name__)

# Create SocketIO once (no app yet), then bind inside factory
socketio = SocketIO(cors_allowed_origins="*")


def _int(value, name, default=None):
    if value is None:
        if default is None:
            raise ValueError(f"{name} is required")
        return default
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer") from None


def create_app(testing: bool = False):
    app = Flask(__name__)
    app.config.from_object(Config)

    if testing:
        app.config["TESTING"] = True
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"
        app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

    app.config["ADMIN_PASSWORD_HASH"] = generate_password_hash(app.config["ADMIN_PASSWORD"])

    db.init_app(app)
    socketio.init_app(app, async_mode=app.config["SOCKETIO_ASYNC_MODE"])
    app.extensions["carts"] = CartRegistry()

    with app.app_context():
        db.create_all()

    # --------- helpers ---------
    def require_admin():
        if not session.get("admin"):
            return jsonify({"error": "login_required"}), 401

    def current_cart(create=False):
        """The session's cart; reads without one get an unstored empty cart."""
        registry = app.extensions["carts"]
        key = session.get("cart_id")
        if not create:
            cart = registry.get(key)
            return cart if cart is not None else Cart()
        if key is None:
            key = session["cart_id"] = uuid.uuid4().hex
        return registry.for_session(key)

    def end_cart():
        key = session.pop("cart_id", None)
        if key is not None:
            app.extensions["carts"].discard(key)

    def emit(event_type, **payload):
        socketio.emit("event", {"type": event_type, **payload})

    # --------- errors ---------
    @app.errorhandler(CustomizationError)
    @app.errorhandler(CheckoutError)
    def unprocessable(err):
        body = {"error": err.code, "message": str(err)}
        if getattr(err, "field", None):
            body["field"] = err.field
        return jsonify(body), 422

    @app.errorhandler(ValueError)
    def bad_request(err):
        return jsonify({"error": "invalid_request", "message": str(err)}), 400

    # --------- auth ---------
    @app.post("/login")
    def login():
        data = request.form if request.form else (request.get_json(silent=True) or {})
        username = (data.get("username") or "").strip()
        password = data.get("password") or ""
        if username == app.config["ADMIN_USERNAME"] and check_password_hash(app.config["ADMIN_PASSWORD_HASH"], password):
            session["admin"] = True
            log.info("admin %s logged in", username)
            return jsonify({"ok": True})
        log.warning("rejected admin login for %r", username)
        return jsonify({"ok": False, "error": "Invalid credentials"}), 401

    @app.post("/logout")
    def logout():
        session.pop("admin", None)
        return jsonify({"ok": True})

    # ---------- CATALOG ----------
    @app.get("/api/categories")
    def list_categories():
        cats = Category.query.filter_by(active=True).order_by(Category.display_order, Category.id).all()
        return jsonify([c.to_dict() for c in cats])

    @app.get("/api/products")
    def list_products():
        q = Product.query.filter_by(available=True)
        if request.args.get("category"):
            q = q.filter_by(category_id=_int(request.args["category"], "category"))
        products = q.order_by(Product.created_at.desc(), Product.id.desc()).all()
        return jsonify([p.to_dict() for p in products])

    @app.get("/api/products/<int:product_id>/extras")
    def product_extras(product_id):
        product = db.get_or_404(Product, product_id)
        return jsonify([e.to_dict(active_only=True) for e in _extras_for(product)])

    def _extras_for(product):
        if product.category_id is None:
            return []
        return Extra.query.filter_by(category_id=product.category_id, active=True).order_by(Extra.id).all()

    # ---------- CART ----------
    @app.get("/api/cart")
    def get_cart():
        return jsonify(current_cart().to_dict())

    @app.post("/api/cart/items")
    def add_cart_item():
        data = request.get_json(silent=True) or {}
        product = db.session.get(Product, _int(data.get("product_id"), "product_id"))
        if product is None or not product.available:
            return jsonify({"error": "product_unavailable"}), 404

        instructions = data.get("special_instructions")
        if instructions is not None and not isinstance(instructions, str):
            raise ValueError("special_instructions must be text")
        selections = data.get("selections", [])
        if not isinstance(selections, list):
            raise ValueError("selections must be a list")

        groups = [e.to_group() for e in _extras_for(product)]
        candidate = build_line_item(
            product.snapshot(),
            _int(data.get("quantity"), "quantity", default=1),
            groups,
            [Selection.from_dict(s) for s in selections],
            special_instructions=instructions,
        )
        cart = current_cart(create=True)
        line = cart.add(candidate)
        return jsonify({"item": line.to_dict(), "cart": cart.to_dict()}), 201

    @app.patch("/api/cart/items/<line_id>")
    def update_cart_item(line_id):
        data = request.get_json(silent=True) or {}
        cart = current_cart()
        cart.update_quantity(line_id, _int(data.get("quantity"), "quantity"))
        return jsonify(cart.to_dict())

    @app.delete("/api/cart/items/<line_id>")
    def remove_cart_item(line_id):
        cart = current_cart()
        cart.remove(line_id)
        return jsonify(cart.to_dict())

    @app.delete("/api/cart")
    def clear_cart():
        current_cart().clear()
        end_cart()
        return jsonify(Cart().to_dict())

    # ---------- CHECKOUT ----------
    @app.post("/api/checkout")
    def checkout():
        data = request.get_json(silent=True) or {}
        cart = current_cart()
        details = CheckoutDetails.from_dict(data)
        validate_checkout(details, cart)

        # compose first so a bad cart can never leave a committed order behind
        message = compose_order_message(
            cart,
            details,
            business_name=app.config["BUSINESS_NAME"],
            transfer_alias=app.config["TRANSFER_ALIAS"],
            symbol=app.config["CURRENCY_SYMBOL"],
        )
        url = whatsapp_url(app.config["WHATSAPP_NUMBER"], message)

        o = Order(
            customer_name=details.name,
            customer_phone=details.phone,
            customer_email=details.email,
            customer_address=details.address,
            delivery_type=details.delivery_method,
            payment_method=details.payment_method,
            special_instructions=details.notes,
            status="pending",
            total_amount=cart.total_price(),
        )
        for line in cart:
            oi = OrderItem(
                product_id=int(line.product_id),
                name=line.name,
                quantity=line.quantity,
                unit_price=line.unit_price,
                total_price=line.total_price,
                special_instructions=line.special_instructions,
            )
            for a in line.add_ons:
                oi.extras.append(OrderItemExtra(extra_option_id=int(a.id), name=a.label, unit_price=a.unit_price))
            o.items.append(oi)
        db.session.add(o)
        db.session.commit()

        cart.clear()
        end_cart()
        log.info("order %s placed: %s items, total %s", o.id, len(o.items), o.total_amount)
        emit("order.created", order=o.to_dict())
        return jsonify({"order": o.to_dict(), "message": message, "whatsapp_url": url}), 201

    # ---------- ADMIN: CATEGORIES ----------
    @app.get("/api/admin/categories")
    def admin_list_categories():
        resp = require_admin()
        if resp:
            return resp
        cats = Category.query.order_by(Category.display_order, Category.id).all()
        return jsonify([c.to_dict() for c in cats])

    @app.post("/api/categories")
    def create_category():
        resp = require_admin()
        if resp:
            return resp
        data = request.get_json(silent=True) or {}
        name = (data.get("name") or "").strip()
        if not name:
            return jsonify({"error": "name_required"}), 400
        c = Category(
            name=name,
            description=data.get("description"),
            icon=data.get("icon"),
            display_order=_int(data.get("display_order"), "display_order", default=0),
            active=bool(data.get("active", True)),
        )
        db.session.add(c)
        db.session.commit()
        emit("category.created", category=c.to_dict())
        return jsonify(c.to_dict()), 201

    @app.put("/api/categories/<int:category_id>")
    def update_category(category_id):
        resp = require_admin()
        if resp:
            return resp
        c = db.get_or_404(Category, category_id)
        data = request.get_json(silent=True) or {}
        for k in ["name", "description", "icon"]:
            if k in data:
                setattr(c, k, data[k])
        if "display_order" in data:
            c.display_order = _int(data["display_order"], "display_order")
        if "active" in data:
            c.active = bool(data["active"])
        db.session.commit()
        emit("category.updated", category=c.to_dict())
        return jsonify(c.to_dict())

    @app.delete("/api/categories/<int:category_id>")
    def delete_category(category_id):
        resp = require_admin()
        if resp:
            return resp
        c = db.get_or_404(Category, category_id)
        db.session.delete(c)
        db.session.commit()
        emit("category.deleted", id=category_id)
        return jsonify({"ok": True})

    # ---------- ADMIN: PRODUCTS ----------
    @app.get("/api/admin/products")
    def admin_list_products():
        resp = require_admin()
        if resp:
            return resp
        q = Product.query
        search = (request.args.get("search") or "").strip()
        if search:
            q = q.filter(Product.name.ilike(f"%{search}%"))
        if request.args.get("category"):
            q = q.filter_by(category_id=_int(request.args["category"], "category"))
        status = request.args.get("status", "all")
        if status == "active":
            q = q.filter_by(available=True)
        elif status == "inactive":
            q = q.filter_by(available=False)
        products = q.order_by(Product.created_at.desc(), Product.id.desc()).all()
        return jsonify([p.to_dict() for p in products])

    @app.post("/api/products")
    def create_product():
        resp = require_admin()
        if resp:
            return resp
        data = request.get_json(silent=True) or {}
        name = (data.get("name") or "").strip()
        if not name:
            return jsonify({"error": "name_required"}), 400
        p = Product(
            name=name,
            description=data.get("description") or "",
            price=require_non_negative(data.get("price"), "price"),
            image_url=data.get("image_url") or "",
            category_id=data.get("category_id"),
            available=data.get("available") is not False,
            is_promotion=bool(data.get("is_promotion", False)),
        )
        db.session.add(p)
        db.session.commit()
        emit("product.created", product=p.to_dict())
        return jsonify(p.to_dict()), 201

    @app.put("/api/products/<int:product_id>")
    def update_product(product_id):
        resp = require_admin()
        if resp:
            return resp
        p = db.get_or_404(Product, product_id)
        data = request.get_json(silent=True) or {}
        for k in ["name", "description", "image_url", "category_id"]:
            if k in data:
                setattr(p, k, data[k])
        for k in ["available", "is_promotion"]:
            if k in data:
                setattr(p, k, bool(data[k]))
        if "price" in data:
            p.price = require_non_negative(data["price"], "price")
        db.session.commit()
        emit("product.updated", product=p.to_dict())
        return jsonify(p.to_dict())

    @app.post("/api/products/<int:product_id>/promotion")
    def toggle_promotion(product_id):
        resp = require_admin()
        if resp:
            return resp
        p = db.get_or_404(Product, product_id)
        p.is_promotion = not p.is_promotion
        db.session.commit()
        emit("product.updated", product=p.to_dict())
        return jsonify(p.to_dict())

    @app.delete("/api/products/<int:product_id>")
    def delete_product(product_id):
        resp = require_admin()
        if resp:
            return resp
        p = db.get_or_404(Product, product_id)
        db.session.delete(p)
        db.session.commit()
        emit("product.deleted", id=product_id)
        return jsonify({"ok": True})

    # ---------- ADMIN: EXTRAS ----------
    @app.get("/api/admin/extras")
    def admin_list_extras():
        resp = require_admin()
        if resp:
            return resp
        q = Extra.query
        if request.args.get("category"):
            q = q.filter_by(category_id=_int(request.args["category"], "category"))
        return jsonify([e.to_dict() for e in q.order_by(Extra.created_at, Extra.id).all()])

    @app.post("/api/extras")
    def create_extra():
        resp = require_admin()
        if resp:
            return resp
        data = request.get_json(silent=True) or {}
        name = (data.get("name") or "").strip()
        if not name:
            return jsonify({"error": "name_required"}), 400
        max_selections = _int(data.get("max_selections"), "max_selections", default=1)
        if max_selections < 1:
            raise ValueError("max_selections must be >= 1")
        e = Extra(
            category_id=data.get("category_id"),
            name=name,
            max_selections=max_selections,
            required=bool(data.get("required", False)),
            active=bool(data.get("active", True)),
        )
        db.session.add(e)
        db.session.commit()
        emit("extra.created", extra=e.to_dict())
        return jsonify(e.to_dict()), 201

    @app.put("/api/extras/<int:extra_id>")
    def update_extra(extra_id):
        resp = require_admin()
        if resp:
            return resp
        e = db.get_or_404(Extra, extra_id)
        data = request.get_json(silent=True) or {}
        for k in ["name", "category_id"]:
            if k in data:
                setattr(e, k, data[k])
        for k in ["required", "active"]:
            if k in data:
                setattr(e, k, bool(data[k]))
        if "max_selections" in data:
            max_selections = _int(data["max_selections"], "max_selections")
            if max_selections < 1:
                raise ValueError("max_selections must be >= 1")
            e.max_selections = max_selections
        db.session.commit()
        emit("extra.updated", extra=e.to_dict())
        return jsonify(e.to_dict())

    @app.delete("/api/extras/<int:extra_id>")
    def delete_extra(extra_id):
        resp = require_admin()
        if resp:
            return resp
        e = db.get_or_404(Extra, extra_id)
        db.session.delete(e)  # options go with it (delete-orphan)
        db.session.commit()
        emit("extra.deleted", id=extra_id)
        return jsonify({"ok": True})

    @app.post("/api/extras/<int:extra_id>/options")
    def create_extra_option(extra_id):
        resp = require_admin()
        if resp:
            return resp
        e = db.get_or_404(Extra, extra_id)
        data = request.get_json(silent=True) or {}
        name = (data.get("name") or "").strip()
        if not name:
            return jsonify({"error": "name_required"}), 400
        opt = ExtraOption(
            extra_id=e.id,
            name=name,
            price=require_non_negative(data.get("price", 0), "price"),
            active=bool(data.get("active", True)),
        )
        db.session.add(opt)
        db.session.commit()
        emit("extra_option.created", option=opt.to_dict())
        return jsonify(opt.to_dict()), 201

    @app.put("/api/extra-options/<int:option_id>")
    def update_extra_option(option_id):
        resp = require_admin()
        if resp:
            return resp
        opt = db.get_or_404(ExtraOption, option_id)
        data = request.get_json(silent=True) or {}
        if "name" in data:
            opt.name = data["name"]
        if "price" in data:
            opt.price = require_non_negative(data["price"], "price")
        if "active" in data:
            opt.active = bool(data["active"])
        db.session.commit()
        emit("extra_option.updated", option=opt.to_dict())
        return jsonify(opt.to_dict())

    @app.delete("/api/extra-options/<int:option_id>")
    def delete_extra_option(option_id):
        resp = require_admin()
        if resp:
            return resp
        opt = db.get_or_404(ExtraOption, option_id)
        db.session.delete(opt)
        db.session.commit()
        emit("extra_option.deleted", id=option_id)
        return jsonify({"ok": True})

    # ---------- ADMIN: ORDERS ----------
    @app.get("/api/orders")
    def list_orders():
        resp = require_admin()
        if resp:
            return resp
        q = Order.query
        status = request.args.get("status", "all")
        if status != "all":
            q = q.filter_by(status=status)
        orders = q.order_by(Order.created_at.desc(), Order.id.desc()).all()
        return jsonify([o.to_dict() for o in orders])

    @app.put("/api/orders/<int:order_id>/status")
    def update_order_status(order_id):
        resp = require_admin()
        if resp:
            return resp
        o = db.get_or_404(Order, order_id)
        data = request.get_json(silent=True) or {}
        status = data.get("status")
        if status not in ORDER_STATUSES:
            return jsonify({"error": "invalid_status", "allowed": list(ORDER_STATUSES)}), 400
        o.status = status
        db.session.commit()
        log.info("order %s marked %s", o.id, status)
        emit("order.updated", order=o.to_dict())
        return jsonify(o.to_dict())

    @app.delete("/api/orders/<int:order_id>")
    def delete_order(order_id):
        resp = require_admin()
        if resp:
            return resp
        o = db.get_or_404(Order, order_id)
        db.session.delete(o)
        db.session.commit()
        emit("order.deleted", id=order_id)
        return jsonify({"ok": True})

    # ---------- REPORTS ----------
    def _report_period():
        period = request.args.get("period", "daily")
        if period not in PERIODS:
            raise ValueError(f"period must be one of {', '.join(PERIODS)}")
        return period

    @app.get("/api/reports/sales")
    def sales_report():
        resp = require_admin()
        if resp:
            return resp
        period = _report_period()
        orders = Order.query.filter_by(status="delivered").all()
        rows = sales_by_period(orders, period)
        return jsonify({
            "period": period,
            "sales": rows,
            "summary": summarize(rows),
            "top_products": top_products(orders),
            "payment_methods": payment_method_stats(orders),
        })

    @app.get("/api/reports/sales.csv")
    def sales_report_download():
        resp = require_admin()
        if resp:
            return resp
        period = _report_period()
        rows = sales_by_period(Order.query.filter_by(status="delivered").all(), period)
        filename = f"sales-report-{period}.csv"
        return Response(
            sales_report_csv(rows),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    # ---------- HEALTH ----------
    @app.get("/api/health")
    def health():
        return jsonify({"ok": True})

    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    app = create_app()
    socketio.run(app, host="0.0.0.0", port=5013, debug=True, allow_unsafe_werkzeug=True)
