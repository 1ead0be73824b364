"""
Project: Restaurant Ordering Storefront & Back Office
Date: October 2026

Description:
In-memory shopping cart. Holds the customer's line items for one storefront
session and owns merging, quantity updates, removal and totals. Nothing here
touches the database: product data is copied into each line when it is
added, so later catalog edits never change what is already in a cart.
"""

from __future__ import annotations

import logging
import uuid
from collections import Counter
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Dict, Iterator, Optional, Tuple

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddOn:
    id: str
    label: str
    unit_price: Decimal

    def to_dict(self):
        return {"id": self.id, "label": self.label, "unit_price": self.unit_price}


@dataclass
class LineItem:
    product_id: str
    name: str
    base_price: Decimal
    quantity: int = 1
    add_ons: Tuple[AddOn, ...] = ()
    special_instructions: Optional[str] = None
    id: Optional[str] = None

    @property
    def unit_price(self) -> Decimal:
        return self.base_price + sum((a.unit_price for a in self.add_ons), Decimal("0"))

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.quantity

    def merge_key(self):
        # add-on order is irrelevant; a Counter compares as a multiset
        return (
            self.product_id,
            Counter(a.id for a in self.add_ons),
            self.special_instructions,
        )

    def is_equivalent(self, other: "LineItem") -> bool:
        # unit price must match too: a catalog price change between two adds
        # starts a new line so each line's total stays quantity * unit price
        return self.merge_key() == other.merge_key() and self.unit_price == other.unit_price

    def to_dict(self):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "name": self.name,
            "base_price": self.base_price,
            "quantity": self.quantity,
            "add_ons": [a.to_dict() for a in self.add_ons],
            "special_instructions": self.special_instructions,
            "unit_price": self.unit_price,
            "total_price": self.total_price,
        }


class Cart:
    """Ordered line items for one session.

    Lookups by id that miss are silent no-ops, so repeated UI clicks
    (double remove, stale quantity change) never fail.
    """

    def __init__(self):
        self._lines = []

    @property
    def items(self) -> Tuple[LineItem, ...]:
        return tuple(replace(line) for line in self._lines)

    def __len__(self):
        return len(self._lines)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self.items)

    def _find(self, line_id: str) -> Optional[LineItem]:
        for line in self._lines:
            if line.id == line_id:
                return line
        return None

    def get(self, line_id: str) -> Optional[LineItem]:
        line = self._find(line_id)
        return replace(line) if line is not None else None

    def add(self, candidate: LineItem) -> LineItem:
        if candidate.quantity < 1:
            raise ValueError(f"quantity must be >= 1 (got {candidate.quantity})")

        for line in self._lines:
            if line.is_equivalent(candidate):
                line.quantity += candidate.quantity
                log.debug("merged %s into line %s (qty=%s)", candidate.product_id, line.id, line.quantity)
                return replace(line)

        line = replace(candidate, id=uuid.uuid4().hex, add_ons=tuple(candidate.add_ons))
        self._lines.append(line)
        log.debug("added line %s for product %s", line.id, line.product_id)
        return replace(line)

    def remove(self, line_id: str) -> None:
        self._lines = [line for line in self._lines if line.id != line_id]

    def update_quantity(self, line_id: str, new_quantity: int) -> None:
        if new_quantity <= 0:
            self.remove(line_id)
            return
        line = self._find(line_id)
        if line is None:
            return
        line.quantity = new_quantity

    def clear(self) -> None:
        self._lines = []

    def total_price(self) -> Decimal:
        return sum((line.total_price for line in self._lines), Decimal("0"))

    def total_item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    def to_dict(self):
        return {
            "items": [line.to_dict() for line in self._lines],
            "total_price": self.total_price(),
            "total_items": self.total_item_count(),
        }


@dataclass
class CartRegistry:
    """One cart per storefront session, owned by the Flask app."""

    carts: Dict[str, Cart] = field(default_factory=dict)

    def get(self, key: Optional[str]) -> Optional[Cart]:
        if key is None:
            return None
        return self.carts.get(key)

    def for_session(self, key: str) -> Cart:
        cart = self.carts.get(key)
        if cart is None:
            cart = self.carts[key] = Cart()
        return cart

    def discard(self, key: str) -> None:
        self.carts.pop(key, None)
