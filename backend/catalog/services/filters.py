"""Composable filter specifications for product queries.

Each specification renders itself two ways: as a SQLAlchemy clause for the
database-backed store, and as a plain predicate for in-memory evaluation.
Specifications combine with ``&`` so the query translator only ever sees a
single filter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from sqlalchemy import and_, func, or_
from sqlalchemy.sql.elements import ColumnElement

from catalog.db.models.product import Product


class ProductFilter(ABC):

    @abstractmethod
    def clause(self) -> ColumnElement[bool]:
        """Return the SQL WHERE clause for this filter."""

    @abstractmethod
    def matches(self, product: Product) -> bool:
        """Evaluate the filter against an already loaded product."""

    def __and__(self, other: ProductFilter) -> ProductFilter:
        return AllOf(self, other)


class AllOf(ProductFilter):
    def __init__(self, *filters: ProductFilter) -> None:
        flattened: list[ProductFilter] = []
        for f in filters:
            flattened.extend(f.filters if isinstance(f, AllOf) else [f])
        self.filters = tuple(flattened)

    def clause(self) -> ColumnElement[bool]:
        return and_(*(f.clause() for f in self.filters))

    def matches(self, product: Product) -> bool:
        return all(f.matches(product) for f in self.filters)


class TextSearch(ProductFilter):
    """Case-insensitive substring match on name OR description."""

    def __init__(self, term: str) -> None:
        self.term = term.lower()

    def clause(self) -> ColumnElement[bool]:
        return or_(
            func.lower(Product.name).contains(self.term, autoescape=True),
            func.lower(Product.description).contains(self.term, autoescape=True),
        )

    def matches(self, product: Product) -> bool:
        return self.term in (product.name or "").lower() or (
            product.description is not None
            and self.term in product.description.lower()
        )


class CategoryEquals(ProductFilter):
    """Case-insensitive exact match on category. Uncategorized rows never match."""

    def __init__(self, category: str) -> None:
        self.category = category.lower()

    def clause(self) -> ColumnElement[bool]:
        return func.lower(Product.category) == self.category

    def matches(self, product: Product) -> bool:
        return product.category is not None and product.category.lower() == self.category


class StockAtMost(ProductFilter):
    def __init__(self, threshold: int) -> None:
        self.threshold = threshold

    def clause(self) -> ColumnElement[bool]:
        return Product.stock <= self.threshold

    def matches(self, product: Product) -> bool:
        return product.stock <= self.threshold


class PriceBetween(ProductFilter):
    """Inclusive price range."""

    def __init__(self, min_price: Decimal, max_price: Decimal) -> None:
        self.min_price = min_price
        self.max_price = max_price

    def clause(self) -> ColumnElement[bool]:
        return Product.price.between(self.min_price, self.max_price)

    def matches(self, product: Product) -> bool:
        return self.min_price <= Decimal(product.price) <= self.max_price
