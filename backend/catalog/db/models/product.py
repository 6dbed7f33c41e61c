"""SQLAlchemy model for product records."""

from sqlalchemy import CheckConstraint, Column, Index, Integer, Numeric, String, func
from sqlalchemy.types import DateTime

from catalog.db.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500))
    price = Column(Numeric(12, 2), nullable=False)
    category = Column(String(50))
    stock = Column(Integer, nullable=False, default=0)
    # Both timestamps are assigned by the service layer, not the database
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_products_price_positive"),
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        Index("ix_products_category_lower", func.lower(category)),
    )

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r}>"
