import os
import sys

from loguru import logger

from portal.core.config import Settings


def setup_logging(settings: Settings) -> None:
    log_dir = os.path.dirname(settings.LOG_PATH)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger.remove()
    logger.add(sys.stdout, level=settings.LOG_LEVEL)
    logger.add(settings.LOG_PATH, rotation="10 MB", level=settings.LOG_LEVEL)
