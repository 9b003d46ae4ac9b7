"""
Logging setup shared by the entry points.
Library modules only create named loggers; handlers are installed here.
"""

import logging

from app.config import settings


def resolve_log_level(level: str = None) -> int:
    """Explicit level first, then DEBUG when settings.debug is on, then settings.log_level"""
    if level is None and settings.debug:
        return logging.DEBUG
    return getattr(logging, (level or settings.log_level).upper(), logging.INFO)


def configure_logging(level: str = None, fmt: str = None) -> None:
    """Setup logging with configured level and format"""
    logging.basicConfig(level=resolve_log_level(level), format=fmt or settings.log_format)
    if settings.db_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
