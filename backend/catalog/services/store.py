"""Abstract record store for products.

The service layer depends only on this contract, so it can run against the
SQLAlchemy store in production and an in-memory fake in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

from catalog.db.models.product import Product
from catalog.services.filters import ProductFilter

SortDirection = Literal["asc", "desc"]


@dataclass(frozen=True)
class SortKey:
    field: str
    direction: SortDirection = "asc"

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


class ProductStore(ABC):

    @abstractmethod
    def find_page(
        self,
        predicate: ProductFilter | None,
        sort: tuple[SortKey, ...],
        offset: int,
        limit: int | None,
    ) -> tuple[list[Product], int]:
        """Return one ordered slice of matching products plus the total match count.

        ``limit=None`` returns every match from ``offset`` onwards.
        """

    @abstractmethod
    def find_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Insert when the product has no ID yet, otherwise update it."""

    @abstractmethod
    def delete_by_id(self, product_id: int) -> bool:
        """Remove a product; False when nothing was there to remove."""

    @abstractmethod
    def distinct_categories(self) -> list[str]:
        """Return distinct non-null categories in ascending order."""

    @abstractmethod
    def count(self, predicate: ProductFilter | None = None) -> int:
        """Count products matching the predicate."""
