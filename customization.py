"""
Project: Restaurant Ordering Storefront & Back Office
Date: October 2026

Description:
Builds cart line items from a product, a quantity and the extras the
customer picked. Extras are grouped (e.g. "Sauce", "Size"); a group may be
required and caps how many of its options can be chosen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from cart import AddOn, LineItem
from errors import (
    CustomizationError,
    InvalidQuantity,
    MissingRequiredGroup,
    TooManySelections,
    UnknownOption,
)
from formatters import to_decimal


@dataclass(frozen=True)
class AddOnOption:
    id: str
    label: str
    price: Decimal


@dataclass(frozen=True)
class AddOnGroup:
    id: str
    name: str
    required: bool = False
    max_selections: int = 1
    options: Tuple[AddOnOption, ...] = ()

    def option(self, option_id: str) -> Optional[AddOnOption]:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None


@dataclass(frozen=True)
class Selection:
    group_id: str
    option_id: str

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict) or data.get("group_id") is None or data.get("option_id") is None:
            raise ValueError("each selection needs a group_id and an option_id")
        return cls(group_id=str(data["group_id"]), option_id=str(data["option_id"]))


@dataclass(frozen=True)
class ProductSnapshot:
    id: str
    name: str
    base_price: Decimal


@dataclass
class ValidationResult:
    errors: List[CustomizationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        if self.errors:
            raise self.errors[0]


def validate(groups: Sequence[AddOnGroup], selections: Iterable[Selection]) -> ValidationResult:
    by_id = {g.id: g for g in groups}
    counts = {g.id: 0 for g in groups}
    result = ValidationResult()

    for sel in selections:
        group = by_id.get(sel.group_id)
        if group is None or group.option(sel.option_id) is None:
            result.errors.append(UnknownOption(sel.group_id, sel.option_id))
            continue
        counts[group.id] += 1

    for group in groups:
        if group.required and counts[group.id] == 0:
            result.errors.append(MissingRequiredGroup(group.name))
        if counts[group.id] > group.max_selections:
            result.errors.append(TooManySelections(group.name, group.max_selections))
    return result


def compute_total(base_price, quantity: int, selections: Iterable[AddOnOption]) -> Decimal:
    extras = sum((to_decimal(opt.price) for opt in selections), Decimal("0"))
    return (to_decimal(base_price) + extras) * quantity


def resolve(groups: Sequence[AddOnGroup], selections: Iterable[Selection]) -> List[Tuple[AddOnGroup, AddOnOption]]:
    """Chosen (group, option) pairs, in group order then selection order."""
    chosen = list(selections)
    pairs = []
    for group in groups:
        for sel in chosen:
            if sel.group_id != group.id:
                continue
            opt = group.option(sel.option_id)
            if opt is not None:
                pairs.append((group, opt))
    return pairs


def build_line_item(
    product: ProductSnapshot,
    quantity: int,
    groups: Sequence[AddOnGroup],
    selections: Iterable[Selection],
    special_instructions: Optional[str] = None,
) -> LineItem:
    selections = list(selections)
    if quantity < 1:
        raise InvalidQuantity(quantity)
    validate(groups, selections).raise_for_errors()

    pairs = resolve(groups, selections)
    add_ons = tuple(
        AddOn(id=opt.id, label=f"{group.name}: {opt.label}", unit_price=to_decimal(opt.price))
        for group, opt in pairs
    )
    return LineItem(
        product_id=product.id,
        name=product.name,
        base_price=to_decimal(product.base_price),
        quantity=quantity,
        add_ons=add_ons,
        special_instructions=special_instructions,
    )
