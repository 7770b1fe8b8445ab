# utils/logging_utils.py
import logging
import os
from logging.handlers import RotatingFileHandler

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(threadName)s] - %(message)s"
CONSOLE_FORMAT = "%(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

def _file_handler(path):
    handler = RotatingFileHandler(path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    # The file keeps the full run detail, per-project skips included
    handler.setLevel(logging.DEBUG)
    return handler

def _console_handler(level):
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handler.setLevel(level)
    return handler

def setup_logger(name, verbose=False, log_dir="logs"):
    """
    Configure the reporter logger.

    Writes everything to a rotating <log_dir>/<name>.log and INFO and above
    to the console, or DEBUG and above when verbose. Calling it again
    replaces the handlers, so a second run in one process does not log twice.
    """
    os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_file_handler(os.path.join(log_dir, f"{name}.log")))
    logger.addHandler(_console_handler(logging.DEBUG if verbose else logging.INFO))

    # One connection pool message per worker thread drowns the console
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return logger
