"""
Structured Logging Configuration Module

Provides JSON-formatted structured logging for the arithmetic core.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional


TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.module if hasattr(record, 'module') else record.name,
            "message": record.getMessage(),
            "operation": getattr(record, 'operation', None),
            "operand_bits": getattr(record, 'operand_bits', None),
            "extra": getattr(record, 'extra', None)
        }

        # Remove None values
        log_entry = {k: v for k, v in log_entry.items() if v is not None}

        # Add exception info if present
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO", logger_name: str = "bigint",
                  log_format: str = "json", log_file: Optional[str] = None) -> logging.Logger:
    """
    Setup structured logging for the library.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Name of the logger
        log_format: "json" for structured records, "text" for plain lines
        log_file: Path of a log file; stderr is used when None

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    if log_file:
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler()

    if log_format.lower() == "text":
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    else:
        handler.setFormatter(JSONFormatter())

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False

    return logger


def setup_logging_from_config() -> logging.Logger:
    """Setup the library logger from the BIGINT_* configuration"""
    from .config import get_config

    settings = get_config()
    return setup_logging(
        level=settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file
    )


def get_logger(name: str = "bigint") -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def log_operation(logger: logging.Logger, level: str, message: str,
                  operation: Optional[str] = None, operand_bits: Optional[int] = None,
                  extra: Optional[dict] = None):
    """
    Log an arithmetic event with structured data.

    Args:
        logger: Logger instance
        level: Log level (debug, info, warning, etc.)
        message: Log message
        operation: Name of the operation (parse, divide, to_long, ...)
        operand_bits: Bit length of the operand involved
        extra: Additional structured data
    """
    levelno = getattr(logging, level.upper())
    if not logger.isEnabledFor(levelno):
        return

    # Create a LogRecord with extra fields
    record = logger.makeRecord(
        logger.name, levelno,
        __name__, 0, message, (), None
    )

    # Add custom fields
    if operation:
        record.operation = operation
    if operand_bits is not None:
        record.operand_bits = operand_bits
    if extra:
        record.extra = extra

    logger.handle(record)
