"""
Logging configuration for immustate loggers.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import cast

from colorama import Fore, Style, just_fix_windows_console

from .config import ContainerConfig

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON, capturing custom "extra" fields.

        Keys passed through ``extra=`` land as attributes on the LogRecord,
        so anything not present on a bare record is copied into the payload.
        """
        log_data: dict[str, object] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        base_keys = set(logging.LogRecord('', 0, '', 0, '', (), None).__dict__.keys())
        record_dict = cast(dict[str, object], record.__dict__)
        for key, value in record_dict.items():
            if key not in base_keys and key not in {'args', 'message'}:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """Console formatter coloring each line by level."""

    LEVEL_COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.MAGENTA + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Fore.WHITE)
        return f'{color}{super().format(record)}{Style.RESET_ALL}'


def configure_logger(
    name: str = 'immustate',
    level: str = 'INFO',
    structured: bool = False,
    colored: bool = False,
) -> logging.Logger:
    """
    Configure a logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Use JSON structured logging
        colored: Colorize console output (ignored when structured)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    level_value = {
        'CRITICAL': logging.CRITICAL,
        'ERROR': logging.ERROR,
        'WARNING': logging.WARNING,
        'INFO': logging.INFO,
        'DEBUG': logging.DEBUG,
    }.get(level.upper(), logging.INFO)
    logger.setLevel(level_value)

    # Remove existing handlers
    logger.handlers = []

    handler = logging.StreamHandler()
    handler.setLevel(level_value)

    if structured:
        formatter: logging.Formatter = StructuredFormatter()
    elif colored:
        # ANSI codes need translating on legacy Windows consoles
        just_fix_windows_console()
        formatter = ColoredFormatter(LOG_FORMAT)
    else:
        formatter = logging.Formatter(LOG_FORMAT)

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def configure_from(config: ContainerConfig, name: str = 'immustate') -> logging.Logger:
    """Configure the package logger from a ContainerConfig."""
    return configure_logger(
        name,
        level=config.log_level,
        structured=config.structured_logs,
        colored=config.colored_logs,
    )
