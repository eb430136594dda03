"""
Service logger setup

Configures the root handlers once per process from LoggingConfig and returns the
service's named logger.
"""

import logging
import sys
from typing import Optional

from .config import LoggingConfig

_configured = False


def setup_service_logger(service_name: str, config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Setup logging for a microservice.

    Args:
        service_name: Name used for the returned logger
        config: Logging configuration (defaults to environment)

    Returns:
        Logger named after the service
    """
    global _configured

    config = config or LoggingConfig.from_env()
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    if not _configured:
        formatter = logging.Formatter(config.log_format)
        root = logging.getLogger()
        root.setLevel(level)

        if config.enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            root.addHandler(console_handler)

        if config.log_file:
            file_handler = logging.FileHandler(config.log_file)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

        # Quiet chatty client libraries
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("nats").setLevel(logging.WARNING)
        _configured = True

    logger = logging.getLogger(service_name)
    logger.setLevel(level)
    return logger
