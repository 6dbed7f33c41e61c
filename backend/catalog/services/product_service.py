"""Catalog operations over the product record store."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Mapping

from catalog.core.exceptions import FieldViolation, ProductValidationError
from catalog.db.models.product import Product
from catalog.services.filters import CategoryEquals, PriceBetween, StockAtMost, TextSearch
from catalog.services.patch import ProductPatch
from catalog.services.query import TIE_BREAKER, Page, PageRequest, fetch_page
from catalog.services.records import ProductRecord
from catalog.services.store import ProductStore
from catalog.services.validation import clean_product_fields

logger = logging.getLogger(__name__)

DEFAULT_LOW_STOCK_THRESHOLD = 5


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_record(product: Product) -> ProductRecord:
    return ProductRecord.from_model(product)


class ProductService:
    """Stateless per request; the store is the only shared resource.

    Missing products are reported as ``None``/``False`` rather than raised.
    Validation and store failures propagate as exceptions.
    """

    def __init__(
        self,
        store: ProductStore,
        clock: Callable[[], datetime] = utcnow,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._store = store
        self._clock = clock
        self._low_stock_threshold = low_stock_threshold

    def list_products(self, request: PageRequest) -> Page[ProductRecord]:
        return fetch_page(self._store, request).map(to_record)

    def get_product(self, product_id: int) -> ProductRecord | None:
        product = self._store.find_by_id(product_id)
        return to_record(product) if product is not None else None

    def create_product(self, values: Mapping[str, Any]) -> ProductRecord:
        """Validate plain field values, stamp both timestamps and persist."""
        fields = clean_product_fields(values)
        now = self._clock()
        product = Product(**fields, created_at=now, updated_at=now)
        saved = self._store.save(product)
        logger.info(f"Created product {saved.id}")
        return to_record(saved)

    def update_product(self, product_id: int, patch: ProductPatch) -> ProductRecord | None:
        """Merge the supplied fields onto the stored product.

        Absent fields are untouched. A present null clears description or
        category and is rejected for name, price and stock. When no value
        actually changes, nothing is written and updated_at is kept.
        """
        changes = clean_product_fields(patch.provided(), partial=True)

        product = self._store.find_by_id(product_id)
        if product is None:
            return None
        if patch.is_empty():
            return to_record(product)

        changed = {
            field: value
            for field, value in changes.items()
            if getattr(product, field) != value
        }
        if not changed:
            return to_record(product)

        for field, value in changed.items():
            setattr(product, field, value)
        product.updated_at = self._clock()

        saved = self._store.save(product)
        logger.info(f"Updated product {product_id} fields {sorted(changed)}")
        return to_record(saved)

    def delete_product(self, product_id: int) -> bool:
        deleted = self._store.delete_by_id(product_id)
        if deleted:
            logger.info(f"Deleted product {product_id}")
        return deleted

    def search_products(self, term: str, request: PageRequest) -> Page[ProductRecord]:
        """Case-insensitive substring match on name or description, by name."""
        return fetch_page(
            self._store, request.sorted_by("name"), TextSearch(term)
        ).map(to_record)

    def products_by_category(
        self, category: str, request: PageRequest
    ) -> Page[ProductRecord]:
        return fetch_page(
            self._store, request.sorted_by("name"), CategoryEquals(category)
        ).map(to_record)

    def products_by_price_range(
        self, min_price: Decimal, max_price: Decimal, request: PageRequest
    ) -> Page[ProductRecord]:
        if min_price > max_price:
            raise ProductValidationError(
                [FieldViolation("min_price", "must not be greater than max_price")]
            )
        return fetch_page(
            self._store, request, PriceBetween(min_price, max_price)
        ).map(to_record)

    def list_categories(self) -> list[str]:
        return self._store.distinct_categories()

    def count_by_category(self, category: str) -> int:
        return self._store.count(CategoryEquals(category))

    def low_stock_products(self, threshold: int | None = None) -> list[ProductRecord]:
        """Products with stock at or below the threshold, in id order, unpaginated."""
        if threshold is None:
            threshold = self._low_stock_threshold
        products, _ = self._store.find_page(
            StockAtMost(threshold), (TIE_BREAKER,), 0, None
        )
        return [to_record(p) for p in products]
