"""Root logger configuration."""

import logging
import sys

from app.api.middleware.logging import JSONLogFormatter

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """
    Configure root logger.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        json_format: Emit one JSON object per line instead of plain text
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    if json_format:
        console_handler.setFormatter(JSONLogFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    # Replace handlers from a previous call (e.g. app reloads in tests).
    for handler in list(root_logger.handlers):
        if getattr(handler, "_expense_handler", False):
            root_logger.removeHandler(handler)
    console_handler._expense_handler = True
    root_logger.addHandler(console_handler)
