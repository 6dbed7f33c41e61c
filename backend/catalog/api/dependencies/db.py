"""Database session and catalog service dependencies."""

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from catalog.core.config import Settings, get_settings
from catalog.db.product_store import SqlProductStore
from catalog.db.session import get_db
from catalog.services.product_service import ProductService


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a managed SQLAlchemy session."""
    yield from get_db()


def get_product_service(
    db: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> ProductService:
    """Build a request-scoped service over the SQL record store."""
    return ProductService(
        SqlProductStore(db), low_stock_threshold=settings.low_stock_threshold
    )
