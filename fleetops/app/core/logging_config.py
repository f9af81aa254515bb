"""
Logging configuration.

Configures root logging once at startup and hands back the "fleetops" logger.
"""

import logging
import sys
from typing import Optional

from fleetops.app.core.config import settings


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure application logging.

    Logs go to stdout with timestamps, levels and logger names so they are
    picked up by the container runtime. SQLAlchemy engine chatter is kept at
    WARNING unless `db_echo` is enabled.
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    if not settings.db_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logging.getLogger("fleetops")
