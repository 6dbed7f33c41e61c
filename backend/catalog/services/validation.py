"""Field constraints for product writes.

Every check runs on every call so that a rejected write reports all of its
violations at once.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from catalog.core.exceptions import FieldViolation, ProductValidationError

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
CATEGORY_MAX_LENGTH = 50
PRICE_MAX_INTEGER_DIGITS = 10
PRICE_MAX_FRACTION_DIGITS = 2

REQUIRED_FIELDS = ("name", "price", "stock")


def _check_name(value: Any, errors: list[FieldViolation]) -> str | None:
    if not isinstance(value, str) or not value.strip():
        errors.append(FieldViolation("name", "Product name is required"))
        return None
    value = value.strip()
    if len(value) > NAME_MAX_LENGTH:
        errors.append(
            FieldViolation(
                "name", f"Product name must not exceed {NAME_MAX_LENGTH} characters"
            )
        )
    return value


def _check_optional_text(
    field: str, label: str, value: Any, max_length: int, errors: list[FieldViolation]
) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        errors.append(FieldViolation(field, f"{label} must be text"))
        return None
    value = value.strip()
    if len(value) > max_length:
        errors.append(
            FieldViolation(field, f"{label} must not exceed {max_length} characters")
        )
    return value or None


def _check_price(value: Any, errors: list[FieldViolation]) -> Decimal | None:
    if value is None or isinstance(value, bool):
        errors.append(FieldViolation("price", "Price is required"))
        return None
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        errors.append(FieldViolation("price", "Price must be a number"))
        return None
    if not price.is_finite():
        errors.append(FieldViolation("price", "Price must be a number"))
        return None
    if price <= 0:
        errors.append(FieldViolation("price", "Price must be greater than 0"))
        return price

    _, digits, exponent = price.normalize().as_tuple()
    fraction_digits = max(0, -exponent)
    integer_digits = max(0, len(digits) + exponent)
    if (
        integer_digits > PRICE_MAX_INTEGER_DIGITS
        or fraction_digits > PRICE_MAX_FRACTION_DIGITS
    ):
        errors.append(
            FieldViolation(
                "price",
                f"Price must have at most {PRICE_MAX_INTEGER_DIGITS} integer digits "
                f"and {PRICE_MAX_FRACTION_DIGITS} decimal places",
            )
        )
    return price


def _check_stock(value: Any, errors: list[FieldViolation]) -> int | None:
    if value is None:
        errors.append(FieldViolation("stock", "Stock is required"))
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        errors.append(FieldViolation("stock", "Stock must be a whole number"))
        return None
    if value < 0:
        errors.append(FieldViolation("stock", "Stock must be non-negative"))
    return value


def clean_product_fields(
    values: Mapping[str, Any], *, partial: bool = False
) -> dict[str, Any]:
    """Validate and normalize product fields.

    With ``partial=True`` only the keys present in ``values`` are checked;
    a present-but-null required field is still a violation. Raises
    ProductValidationError listing every violated field.
    """
    errors: list[FieldViolation] = []
    cleaned: dict[str, Any] = {}

    if not partial:
        for field in REQUIRED_FIELDS:
            if field not in values:
                values = {**values, field: None}

    if "name" in values:
        cleaned["name"] = _check_name(values["name"], errors)
    if "description" in values:
        cleaned["description"] = _check_optional_text(
            "description",
            "Description",
            values["description"],
            DESCRIPTION_MAX_LENGTH,
            errors,
        )
    if "price" in values:
        cleaned["price"] = _check_price(values["price"], errors)
    if "category" in values:
        cleaned["category"] = _check_optional_text(
            "category", "Category", values["category"], CATEGORY_MAX_LENGTH, errors
        )
    if "stock" in values:
        cleaned["stock"] = _check_stock(values["stock"], errors)

    if errors:
        raise ProductValidationError(errors)
    return cleaned
