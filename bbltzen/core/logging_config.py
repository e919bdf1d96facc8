"""
Logging setup for the BBltZen pricing core

Modules log through ``logging.getLogger(__name__)``; nothing is printed until
the host process calls setup_logging() (bbltzen.bootstrap does it on start-up).
"""
import logging
import sys
from pathlib import Path
from typing import Dict, Optional

from .config import settings

ROOT_LOGGER = "bbltzen"

DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(funcName)s:%(lineno)d - %(message)s"

# Marks handlers installed here so a second call replaces only those
_OWNED = "_bbltzen_owned"


def parse_level_overrides(raw: Optional[str]) -> Dict[str, int]:
    """
    Parse "module=LEVEL" pairs, e.g.
    "services.price_calculation_service=WARNING,repositories=DEBUG"

    Module names are relative to the bbltzen package. Unknown level names
    are ignored.
    """
    overrides = {}
    if not raw:
        return overrides

    for part in raw.split(","):
        if "=" not in part:
            continue
        name, level_name = (p.strip() for p in part.split("=", 1))
        level = logging.getLevelName(level_name.upper())
        if name and isinstance(level, int):
            overrides[f"{ROOT_LOGGER}.{name}"] = level
    return overrides


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    level_overrides: Optional[str] = None,
) -> logging.Logger:
    """
    Attach console (and optional file) handlers to the ``bbltzen`` logger

    Handlers installed by a previous call are replaced; handlers added by
    anyone else (test harnesses, the host application) are left alone.

    Args:
        level: Level name for the whole package. Defaults to settings.LOG_LEVEL.
        log_file: Optional log file path. Defaults to settings.LOG_FILE.
        level_overrides: Per-module levels, see parse_level_overrides.
            Defaults to settings.LOG_LEVEL_OVERRIDES.

    Returns:
        The ``bbltzen`` logger
    """
    level_num = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)
    log_file = log_file or settings.LOG_FILE
    if level_overrides is None:
        level_overrides = settings.LOG_LEVEL_OVERRIDES

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level_num)

    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(DEFAULT_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)

    for name, override in parse_level_overrides(level_overrides).items():
        logging.getLogger(name).setLevel(override)

    return logger
