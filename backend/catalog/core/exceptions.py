"""Error taxonomy for catalog operations.

Routers translate these into HTTP statuses; the service layer never knows
about transport. A missing product is not an error: lookups return ``None``
and deletes return ``False``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


class CatalogError(Exception):
    """Base class for all catalog errors."""


@dataclass(frozen=True)
class FieldViolation:
    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ProductValidationError(CatalogError):
    """One or more field constraints were violated.

    Carries every violation found, not only the first.
    """

    def __init__(self, errors: Iterable[FieldViolation]) -> None:
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Invalid product data ({summary})")


class InvalidSortField(CatalogError):
    """The requested sort key is not a sortable product attribute."""

    def __init__(self, field: str, allowed: Iterable[str]) -> None:
        self.field = field
        self.allowed = sorted(allowed)
        super().__init__(
            f"Cannot sort by '{field}'. Must be one of: {', '.join(self.allowed)}"
        )


class StoreFailure(CatalogError):
    """The record store was unavailable or rejected the operation."""
