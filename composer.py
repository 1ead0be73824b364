"""
Project: Restaurant Ordering Storefront & Back Office
Date: October 2026

Description:
Turns a cart and the customer's checkout form into the order message sent
to the restaurant over WhatsApp.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from errors import CheckoutError
from formatters import money
from models import DELIVERY_TYPES, PAYMENT_METHODS


def _optional_text(data, key):
    value = data.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class CheckoutDetails:
    name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    delivery_method: str = "pickup"
    payment_method: str = "cash"
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        return cls(
            name=(data.get("name") or "").strip(),
            phone=(data.get("phone") or "").strip(),
            email=_optional_text(data, "email"),
            address=_optional_text(data, "address"),
            delivery_method=data.get("delivery_method") or "pickup",
            payment_method=data.get("payment_method") or "cash",
            notes=_optional_text(data, "notes"),
        )


def validate_checkout(details: CheckoutDetails, cart) -> None:
    if len(cart) == 0:
        raise CheckoutError("Your cart is empty", field="cart")
    if not details.name:
        raise CheckoutError("Name is required", field="name")
    if not details.phone:
        raise CheckoutError("Phone is required", field="phone")
    if details.delivery_method not in DELIVERY_TYPES:
        raise CheckoutError(f"Unknown delivery method {details.delivery_method!r}", field="delivery_method")
    if details.payment_method not in PAYMENT_METHODS:
        raise CheckoutError(f"Unknown payment method {details.payment_method!r}", field="payment_method")
    if details.delivery_method == "delivery" and details.address is None:
        raise CheckoutError("A delivery address is required", field="address")


def compose_order_message(cart, details: CheckoutDetails, business_name="Pedi2", transfer_alias=None, symbol="$") -> str:
    lines = [f"*NEW ORDER - {business_name}*", ""]

    lines.append(f"*Customer:* {details.name}")
    lines.append(f"*Phone:* {details.phone}")
    if details.email is not None:
        lines.append(f"*Email:* {details.email}")

    lines.append("")
    if details.delivery_method == "delivery":
        lines.append("*Delivery:* Home delivery")
        lines.append(f"*Address:* {details.address}")
    else:
        lines.append("*Delivery:* Pickup at the restaurant")
    lines.append("*Payment:* " + ("Cash" if details.payment_method == "cash" else "Bank transfer"))

    lines.append("")
    lines.append("*ORDER:*")
    for index, item in enumerate(cart, start=1):
        lines.append("")
        lines.append(f"{index}. *{item.name}* (x{item.quantity})")
        if item.add_ons:
            lines.append("   Extras: " + ", ".join(a.label for a in item.add_ons))
        if item.special_instructions is not None and item.special_instructions.strip():
            lines.append(f"   Instructions: {item.special_instructions}")
        lines.append(f"   Subtotal: {money(item.total_price, symbol)}")

    lines.append("")
    lines.append(f"*TOTAL: {money(cart.total_price(), symbol)}*")

    if details.payment_method == "transfer" and transfer_alias:
        lines.append("")
        lines.append("*Transfer details:*")
        lines.append(f"Alias: {transfer_alias}")
        lines.append("*Please send the payment receipt*")

    if details.notes is not None:
        lines.append("")
        lines.append(f"*Additional notes:* {details.notes}")

    lines.append("")
    lines.append("Thank you for your order!")
    return "\n".join(lines) + "\n"


def whatsapp_url(phone_number: str, message: str) -> str:
    digits = "".join(ch for ch in phone_number if ch.isdigit())
    return f"https://wa.me/{digits}?text={quote(message, safe='')}"
