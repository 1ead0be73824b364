from decimal import Decimal

import pytest

from customization import (
    AddOnGroup,
    AddOnOption,
    ProductSnapshot,
    Selection,
    build_line_item,
    compute_total,
    validate,
)
from errors import InvalidQuantity, MissingRequiredGroup, TooManySelections, UnknownOption

CHEDDAR = AddOnOption(id="cheddar", label="Cheddar", price=Decimal("1.50"))
BLUE = AddOnOption(id="blue", label="Blue", price=Decimal("2.00"))
MEDIUM = AddOnOption(id="medium", label="Medium", price=Decimal("0"))
WELL = AddOnOption(id="well", label="Well done", price=Decimal("0"))

CHEESE = AddOnGroup(id="g-cheese", name="Cheese", max_selections=1, options=(CHEDDAR, BLUE))
DONENESS = AddOnGroup(id="g-done", name="Doneness", required=True, max_selections=1, options=(MEDIUM, WELL))
GROUPS = [CHEESE, DONENESS]

BURGER = ProductSnapshot(id="p1", name="Burger", base_price=Decimal("10"))


def test_validate_accepts_complete_selection():
    result = validate(GROUPS, [Selection("g-done", "medium"), Selection("g-cheese", "cheddar")])
    assert result.ok
    result.raise_for_errors()


def test_validate_reports_missing_required_group():
    result = validate(GROUPS, [Selection("g-cheese", "cheddar")])
    assert not result.ok
    err = result.errors[0]
    assert isinstance(err, MissingRequiredGroup)
    assert err.group_name == "Doneness"
    with pytest.raises(MissingRequiredGroup):
        result.raise_for_errors()


def test_validate_rejects_over_selection():
    result = validate(GROUPS, [
        Selection("g-done", "well"),
        Selection("g-cheese", "cheddar"),
        Selection("g-cheese", "blue"),
    ])
    assert len(result.errors) == 1
    err = result.errors[0]
    assert isinstance(err, TooManySelections)
    assert err.group_name == "Cheese"
    assert err.max_selections == 1


def test_validate_flags_unknown_options():
    result = validate(GROUPS, [Selection("g-done", "rare"), Selection("nope", "medium")])
    kinds = [type(e) for e in result.errors]
    assert kinds.count(UnknownOption) == 2
    # the unknown doneness does not satisfy the required group
    assert MissingRequiredGroup in kinds


def test_validate_without_groups():
    assert validate([], []).ok


def test_compute_total_uses_decimal():
    total = compute_total(Decimal("0.10"), 3, [AddOnOption("x", "X", Decimal("0.20"))])
    assert total == Decimal("0.90")
    assert compute_total(10, 1, [CHEDDAR]) == Decimal("11.5")


def test_build_line_item_prices_and_labels():
    item = build_line_item(
        BURGER, 2, GROUPS,
        [Selection("g-done", "medium"), Selection("g-cheese", "cheddar")],
        special_instructions="no pickles",
    )
    assert item.id is None
    assert item.product_id == "p1"
    assert item.quantity == 2
    # group order, not selection order
    assert [a.label for a in item.add_ons] == ["Cheese: Cheddar", "Doneness: Medium"]
    assert item.total_price == compute_total(BURGER.base_price, 2, [CHEDDAR, MEDIUM])
    assert item.total_price == Decimal("23.00")
    assert item.special_instructions == "no pickles"


def test_build_line_item_raises_first_error():
    with pytest.raises(MissingRequiredGroup):
        build_line_item(BURGER, 1, GROUPS, [])


def test_build_line_item_rejects_zero_quantity():
    with pytest.raises(InvalidQuantity):
        build_line_item(BURGER, 0, GROUPS, [Selection("g-done", "medium")])


def test_errors_are_value_errors():
    assert issubclass(TooManySelections, ValueError)


def test_selection_from_dict():
    assert Selection.from_dict({"group_id": 3, "option_id": 7}) == Selection("3", "7")
    with pytest.raises(ValueError):
        Selection.from_dict({"group_id": 3})
