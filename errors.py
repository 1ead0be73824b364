"""
Project: Restaurant Ordering Storefront & Back Office
Date: October 2026

Description:
Exceptions raised while customizing items and checking out. All of them are
recoverable: routes turn them into 422 JSON responses.
"""


class CustomizationError(ValueError):
    code = "invalid_customization"


class MissingRequiredGroup(CustomizationError):
    code = "missing_required_group"

    def __init__(self, group_name):
        self.group_name = group_name
        super().__init__(f"Please choose an option for {group_name}")


class TooManySelections(CustomizationError):
    code = "too_many_selections"

    def __init__(self, group_name, max_selections):
        self.group_name = group_name
        self.max_selections = max_selections
        super().__init__(f"You can only select {max_selections} option(s) for {group_name}")


class UnknownOption(CustomizationError):
    code = "unknown_option"

    def __init__(self, group_id, option_id):
        self.group_id = group_id
        self.option_id = option_id
        super().__init__(f"Option {option_id!r} is not available in group {group_id!r}")


class InvalidQuantity(CustomizationError):
    code = "invalid_quantity"

    def __init__(self, quantity):
        self.quantity = quantity
        super().__init__(f"Quantity must be at least 1 (got {quantity})")


class CheckoutError(ValueError):
    code = "invalid_checkout"

    def __init__(self, message, field=None):
        self.field = field
        super().__init__(message)
