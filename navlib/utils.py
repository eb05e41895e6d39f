"""
Utilities for the menu navigation application
"""

import logging
import re

LOGGER_NAME = "AccessibleMenuNav"
DEBUG_LOG_FILE = "nav_debug.log"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

# Unity-style rich text tags (<color=#fff>, <b>, </i>, ...)
_MARKUP_PATTERN = re.compile(r"<[^<>]+>")


def setup_logging(debug=False, log_file=DEBUG_LOG_FILE):
    """
    Configure console logging and, in debug mode, a log file

    Calling it again (e.g. from tests or a restarted CLI) replaces the
    previous debug file handler instead of stacking another one.

    Args:
        debug: Also write DEBUG records to log_file
        log_file: Path of the debug log

    Returns:
        logging.Logger: The navigator logger
    """
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    logger = logging.getLogger(LOGGER_NAME)

    for handler in list(logger.handlers):
        if getattr(handler, "nav_debug_file", False):
            logger.removeHandler(handler)
            handler.close()

    if not debug:
        return logger

    file_handler = logging.FileHandler(log_file, mode='w')
    file_handler.nav_debug_file = True
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)
    logger.setLevel(logging.DEBUG)
    logger.info(f"Debug logging enabled. Log file: {log_file}")
    return logger


def strip_markup(text):
    """
    Remove rich text markup tags from a label

    Args:
        text: Label that may contain tags such as <color=red>...</color>

    Returns:
        str: Plain text
    """
    if not text:
        return ""
    return _MARKUP_PATTERN.sub("", text)
