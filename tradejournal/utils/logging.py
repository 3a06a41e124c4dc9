"""Process-wide logging setup."""

import logging

from tradejournal.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging():
    """Configure the root logger once, at the level from TJ_LOG_LEVEL."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # uvicorn installs its own handlers; keep SQL echo quiet unless debugging
    logging.getLogger("sqlalchemy.engine").setLevel(max(level, logging.WARNING))
