"""
Process start-up for hosts embedding the pricing core

Usage:
    from bbltzen.bootstrap import bootstrap
    from bbltzen.core.database import unit_of_work
    from bbltzen.services import get_order_total_service

    bootstrap()
    with unit_of_work() as db:
        get_order_total_service(db).update_order_total(42)

Author: BBltZen
Date: 2026-10-19
"""
import logging
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.engine import Engine

from bbltzen import __version__
from bbltzen.core.database import get_engine, init_db
from bbltzen.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def bootstrap(
    create_tables: bool = False,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None
) -> Engine:
    """
    Load .env, configure logging and create the database engine

    Args:
        create_tables: Also create missing tables (development databases)
        log_level: Overrides settings.LOG_LEVEL
        log_file: Overrides settings.LOG_FILE

    Returns:
        The process-wide engine
    """
    load_dotenv()
    setup_logging(level=log_level, log_file=log_file)

    engine = get_engine()
    logger.info(f"BBltZen pricing core {__version__} started ({engine.url.get_backend_name()})")

    if create_tables:
        init_db(engine)
        logger.info("Database tables created")

    return engine
