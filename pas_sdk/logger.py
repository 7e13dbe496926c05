"""
SDK Logging

Every module logs through ``logging.getLogger(__name__)``; applications that
want SDK output on the console or in a file call ``setup_sdk_logger()``.
"""

import logging
from typing import Optional

from .config import LoggingConfig

_HANDLER_MARK = "_pas_sdk_handler"


def setup_sdk_logger(
    name: str = "pas_sdk",
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure the SDK logger.

    Args:
        name: Logger name, "pas_sdk" covers every SDK module
        level: Log level name, overrides config
        log_file: Also write to this file, overrides config
        config: Logging config, defaults to LoggingConfig.from_env()

    Returns:
        The configured logger. Calling again replaces the handlers it added.
    """
    config = config or LoggingConfig.from_env()
    logger = logging.getLogger(name)
    logger.setLevel((level or config.log_level).upper())

    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_MARK, False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.log_format)
    handlers = []
    if config.enable_console:
        handlers.append(logging.StreamHandler())
    log_file = log_file or config.log_file
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        setattr(handler, _HANDLER_MARK, True)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


__all__ = ["setup_sdk_logger"]
