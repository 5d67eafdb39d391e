"""Rotating file logger for the terminal and Tk front ends."""

import logging
import os
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "tictactoe_series"
LOG_FILE = "app.log"


def init_logger(log_dir: str, verbose: bool = False) -> logging.Logger:
    os.makedirs(log_dir, exist_ok=True)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    # Ensure fresh handler each launch; closed handlers can block writes.
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    log_path = os.path.join(log_dir, LOG_FILE)
    handler = RotatingFileHandler(log_path, maxBytes=200_000, backupCount=3, encoding="utf-8", delay=True)
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def shutdown_logger() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        h.flush()
        h.close()
        logger.removeHandler(h)
