import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("httpx", "anyio", "mcp")


def configure_logging(level: str = "INFO", log_file: str = "") -> None:
    """
    Configure application-wide logging.

    Status lines go to stdout next to the chat output; when a log file is
    given, the same records are also written to a rotating file.

    Args:
        level: Log level name (DEBUG, INFO, ...)
        log_file: Path of the rotating log file, or an empty string for none
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=10485760, backupCount=5)
        )

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
