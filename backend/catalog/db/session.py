"""Engine and session factory configuration."""

from collections.abc import Generator
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

from catalog.core.config import Settings, get_settings
from catalog.db.base import Base

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """Create the pooled engine described by settings.

    pool_pre_ping tests connections before use; pool_recycle bounds the
    lifetime of a pooled connection.
    """
    if not settings.is_postgres:
        return create_engine(settings.database_url, echo=False, future=True)

    return create_engine(
        settings.database_url,
        echo=False,
        future=True,
        poolclass=QueuePool,
        pool_pre_ping=True,
        pool_recycle=settings.db_pool_recycle,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        connect_args={
            "connect_timeout": settings.db_connect_timeout,
            "keepalives": 1,
            "keepalives_idle": 30,
            "keepalives_interval": 10,
            "keepalives_count": 5,
        },
    )


engine = build_engine(get_settings())

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_db(bind: Engine | None = None) -> None:
    """Create missing tables. Existing tables are left untouched."""
    from catalog.db import models  # noqa: F401  registers tables on Base.metadata

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database schema verified")


def get_db() -> Generator[Session, None, None]:
    """Yield a transactional session for the request lifecycle."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
