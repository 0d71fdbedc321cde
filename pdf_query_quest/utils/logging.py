"""
Logging setup for the PDF Query Quest service.
"""

import logging
import os
import sys
from typing import Optional, Union

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s"


def setup_logger(
    name: str = "pdf_query_quest",
    level: Union[int, str] = "INFO",
    log_file: Optional[str] = None,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Attach the service's handlers to a logger, replacing any it already has.

    Args:
        name: Logger name, normally the package name so module loggers inherit it
        level: Level name from LOG_LEVEL or a logging constant; unknown names mean INFO
        log_file: Optional LOG_FILE path; its directory is created if needed
        log_to_console: Also write to stdout

    Returns:
        The configured logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Reconfiguring must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = []
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    if log_to_console:
        handlers.append(logging.StreamHandler(sys.stdout))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def preview(text: str, limit: int = 50) -> str:
    """Shorten user text for log lines."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."
