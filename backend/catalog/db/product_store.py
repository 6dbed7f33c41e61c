"""SQLAlchemy-backed product record store."""

from __future__ import annotations

import logging
from typing import NoReturn

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.core.exceptions import StoreFailure
from catalog.db.models.product import Product
from catalog.services.filters import ProductFilter
from catalog.services.store import ProductStore, SortKey

logger = logging.getLogger(__name__)


class SqlProductStore(ProductStore):
    """Record store over a request-scoped session.

    Every SQLAlchemy error is rolled back, logged and re-raised as StoreFailure.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_page(
        self,
        predicate: ProductFilter | None,
        sort: tuple[SortKey, ...],
        offset: int,
        limit: int | None,
    ) -> tuple[list[Product], int]:
        try:
            query = select(Product)
            count_query = select(func.count(Product.id))
            if predicate is not None:
                query = query.where(predicate.clause())
                count_query = count_query.where(predicate.clause())
            total = self._db.scalar(count_query) or 0

            for key in sort:
                column = getattr(Product, key.field)
                query = query.order_by(column.desc() if key.descending else column.asc())
            query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)

            products = self._db.scalars(query).all()
            return list(products), total
        except SQLAlchemyError as e:
            self._fail("listing products", e)

    def find_by_id(self, product_id: int) -> Product | None:
        try:
            return self._db.get(Product, product_id)
        except SQLAlchemyError as e:
            self._fail(f"loading product {product_id}", e)

    def save(self, product: Product) -> Product:
        try:
            self._db.add(product)
            self._db.commit()
            self._db.refresh(product)
            return product
        except SQLAlchemyError as e:
            self._fail("saving product", e)

    def delete_by_id(self, product_id: int) -> bool:
        try:
            result = self._db.execute(delete(Product).where(Product.id == product_id))
            self._db.commit()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            self._fail(f"deleting product {product_id}", e)

    def distinct_categories(self) -> list[str]:
        try:
            query = (
                select(Product.category)
                .where(Product.category.is_not(None))
                .distinct()
                .order_by(Product.category)
            )
            return list(self._db.scalars(query).all())
        except SQLAlchemyError as e:
            self._fail("listing categories", e)

    def count(self, predicate: ProductFilter | None = None) -> int:
        try:
            query = select(func.count(Product.id))
            if predicate is not None:
                query = query.where(predicate.clause())
            return self._db.scalar(query) or 0
        except SQLAlchemyError as e:
            self._fail("counting products", e)

    def _fail(self, action: str, error: SQLAlchemyError) -> NoReturn:
        self._db.rollback()
        logger.error(f"Database error {action}: {error}", exc_info=True)
        raise StoreFailure(f"Database error {action}") from error
