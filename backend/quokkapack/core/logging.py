"""
Logging setup for the application.
"""
import logging
from typing import Optional
from quokkapack.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once, using LOG_LEVEL from settings by default."""
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    # SQLAlchemy logs through its own echo flag
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
