"""Logging bootstrap.

Configures the root logger once at startup. The level comes from the
explicit ``level`` argument, else the LOG_LEVEL setting, else INFO.
"""

import logging

from walkmate.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    log_level = (level or settings.log_level or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format=LOG_FORMAT,
    )
    # SQL echo is noisy at INFO; keep it at WARNING unless debugging
    if log_level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
