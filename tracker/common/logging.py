"""
Logging setup for the API process and helpers shared by the pipelines.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that log every request or hash at INFO
NOISY_LOGGERS = ("multipart", "passlib", "sqlalchemy.engine", "uvicorn.access")

SECTION_WIDTH = 70


def resolve_level(level: Union[int, str]) -> int:
    """Accept 10 or "debug"; unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Route tracker logs to stdout and, when log_file is given, to that file too.

    Called once per app; calling again replaces the handlers.
    """
    level = resolve_level(level)
    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def log_section(logger: logging.Logger, title: str) -> None:
    """Write a boxed heading so pipeline steps stand out in the log."""
    logger.info("")
    logger.info("=" * SECTION_WIDTH)
    logger.info(f"  {title}")
    logger.info("=" * SECTION_WIDTH)
