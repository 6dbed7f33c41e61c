"""Pydantic models describing Product payloads.

Field constraints (lengths, positive price, non-negative stock) are enforced
by the service layer so that every violation is reported together; these
schemas only fix the wire types.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer

from catalog.services.patch import ProductPatch


class ProductBase(BaseModel):
    name: str
    description: str | None = None
    price: Decimal
    category: str | None = None
    stock: int = Field(..., description="Units on hand")


class ProductCreate(ProductBase):
    """Schema for new product rows."""


class ProductUpdate(BaseModel):
    """Partial update. Omitted fields are left untouched; explicit nulls are kept."""

    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    category: str | None = None
    stock: int | None = None

    def to_patch(self) -> ProductPatch:
        return ProductPatch.from_mapping(
            {field: getattr(self, field) for field in self.model_fields_set}
        )


class ProductRead(ProductBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_serializer("price", when_used="json")
    def serialize_price(self, value: Decimal) -> float:
        return float(value)


class ProductPageResponse(BaseModel):
    items: list[ProductRead]
    total: int
    page: int
    size: int
    total_pages: int


class CategoryCount(BaseModel):
    category: str
    count: int
