"""Read model returned by catalog operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from catalog.db.models.product import Product


@dataclass(frozen=True)
class ProductRecord:
    """Detached snapshot of a stored product."""

    id: int
    name: str
    description: str | None
    price: Decimal
    category: str | None
    stock: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, product: Product) -> ProductRecord:
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category,
            stock=product.stock,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
