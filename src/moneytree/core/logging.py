"""Logging configuration.

Installs the JSON formatter from the request logging middleware on the root
logger so application and request records share one structured format.
"""

import logging
import sys

from moneytree.api.middleware.logging import JSONLogFormatter


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logger.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(JSONLogFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    # Replace handlers so repeated app construction does not duplicate output.
    root_logger.handlers = [handler]
