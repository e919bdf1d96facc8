"""
Conexión a base de datos (SQLAlchemy)

Este módulo centraliza el acceso a la base de datos para el core de precios:
- Engine SQLAlchemy (creado en el primer uso)
- Session factory + dependency generator
- Unit of work transaccional para escrituras atómicas

Author: BBltZen
Updated: 2026-10-19
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import settings

logger = logging.getLogger(__name__)


# ============================================================================
# SQLAlchemy Configuration (for ORM models)
# ============================================================================

# Base para modelos
Base = declarative_base()

# Session Factory (bound to the engine on first use)
SessionLocal = sessionmaker(autocommit=False, autoflush=False)

_engine: Optional[Engine] = None


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Build a SQLAlchemy engine for the given URL

    Pool sizing only applies to server databases; SQLite (used by the test
    suite) keeps SQLAlchemy's default pool.

    Args:
        database_url: SQLAlchemy database URL
        echo: Log every SQL statement

    Returns:
        Engine instance
    """
    if not database_url:
        raise Exception("DATABASE_URL not configured")

    if database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo)

    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,  # Verificar conexión antes de usar
        pool_size=settings.DB_POOL_SIZE,  # Número de conexiones en el pool
        max_overflow=settings.DB_MAX_OVERFLOW,  # Conexiones extras si se necesitan
    )


def get_engine() -> Engine:
    """Return the process-wide engine, creating it from settings if needed"""
    global _engine
    if _engine is None:
        logger.debug("Creating database engine")
        _engine = create_db_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
        SessionLocal.configure(bind=_engine)
    return _engine


def get_db() -> Iterator[Session]:
    """
    Dependency generator yielding a SQLAlchemy session

    Usage:
        db = next(get_db())
        service = get_order_total_service(db)
    """
    get_engine()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Optional[Session] = None) -> Iterator[Session]:
    """
    Transactional scope around a series of operations

    Commits on success, rolls back on any error. When no session is given a
    new one is opened (and closed) from SessionLocal.

    Example:
        with unit_of_work() as db:
            OrderTotalService(db).update_order_total(42)
    """
    should_close = db is None
    if db is None:
        get_engine()
        db = SessionLocal()

    try:
        yield db
        db.commit()
    except Exception:
        logger.warning("Rolling back unit of work")
        db.rollback()
        raise
    finally:
        if should_close:
            db.close()


def init_db(engine: Optional[Engine] = None) -> None:
    """Create all tables registered on Base"""
    # Register every model on Base.metadata
    from bbltzen import models  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())
