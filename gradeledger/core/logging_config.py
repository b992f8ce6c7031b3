# /gradeledger/core/logging_config.py

import logging
import sys

from .config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str = LOG_LEVEL) -> None:
    """
    Installs a single stdout handler on the root logger.

    Safe to call more than once (e.g. from the app lifespan and from scripts);
    a second call only adjusts the level.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if any(getattr(h, "_gradeledger", False) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._gradeledger = True
    root.addHandler(handler)

    # SQLAlchemy echoes every statement at INFO; keep it quiet unless asked.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
