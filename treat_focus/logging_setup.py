import os
import logging
from logging.handlers import RotatingFileHandler

from .config import LOG_FILE
from .utils import ensure_dir

LOGGER_NAME = "TreatFocus"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def setup_logger(log_file: str = LOG_FILE, level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        ensure_dir(os.path.dirname(log_file))
        handler = RotatingFileHandler(
            log_file,
            maxBytes=1_000_000,
            backupCount=3,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
