import logging
import os
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Optional[str] = None):
    """
    Configure root logging for the service.

    Lambda installs its own root handler before our code runs, which turns
    basicConfig into a no-op, so the level is also set on the root logger.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
