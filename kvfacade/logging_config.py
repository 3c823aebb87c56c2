"""
Logging configuration for the key-value facade.
Structured logging via structlog on top of the standard library handlers.
"""

import os
import sys
import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional
from datetime import datetime, timezone

import structlog
from structlog.types import FilteringBoundLogger


class LogConfig:
    """Configuration class for logging setup."""

    def __init__(self):
        self.log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))
        self.log_format = os.getenv('LOG_FORMAT', 'json')  # json or console
        self.enable_file_logging = os.getenv('ENABLE_FILE_LOGGING', 'false').lower() == 'true'
        self.max_log_size = int(os.getenv('MAX_LOG_SIZE_MB', '100')) * 1024 * 1024
        self.backup_count = int(os.getenv('LOG_BACKUP_COUNT', '5'))
        self.service_name = os.getenv('SERVICE_NAME', 'kvfacade')

        if self.enable_file_logging:
            self.log_dir.mkdir(exist_ok=True)


def add_timestamp(logger: FilteringBoundLogger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add timestamp to log events."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def make_service_context(service_name: str):
    """Build a processor that stamps the service name on every event."""
    def add_service_context(logger: FilteringBoundLogger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        event_dict["service"] = service_name
        event_dict["component"] = event_dict.get("component", "unknown")
        return event_dict

    return add_service_context


SENSITIVE_KEYS = ('password', 'token', 'secret', 'authorization', 'credential')


def filter_sensitive_data(logger: FilteringBoundLogger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Filter out sensitive data from logs."""

    def _filter_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        filtered = {}
        for k, v in d.items():
            if any(sensitive in str(k).lower() for sensitive in SENSITIVE_KEYS):
                filtered[k] = "[REDACTED]"
            elif isinstance(v, dict):
                filtered[k] = _filter_dict(v)
            else:
                filtered[k] = v
        return filtered

    return _filter_dict(event_dict)


def setup_logging(config: Optional[LogConfig] = None) -> None:
    """
    Set up logging for an application embedding the facade.

    Args:
        config: LogConfig instance, creates default if None
    """
    if config is None:
        config = LogConfig()

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(message)s",
        stream=sys.stdout,
    )

    processors = [
        add_timestamp,
        make_service_context(config.service_name),
        filter_sensitive_data,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if config.log_format == 'json':
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    if config.enable_file_logging:
        setup_file_logging(config)

    configure_third_party_loggers()


def setup_file_logging(config: LogConfig) -> logging.Handler:
    """Set up file-based logging with rotation."""
    log_file = config.log_dir / f"{config.service_name}.log"
    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=config.max_log_size,
        backupCount=config.backup_count,
        encoding='utf-8'
    )
    handler.setLevel(getattr(logging, config.log_level))
    logging.getLogger().addHandler(handler)
    return handler


def configure_third_party_loggers() -> None:
    """Configure logging levels for third-party libraries."""
    third_party_loggers = {
        'redis': logging.WARNING,
        'urllib3': logging.WARNING,
    }

    for logger_name, level in third_party_loggers.items():
        logging.getLogger(logger_name).setLevel(level)


def get_logger(name: str, component: Optional[str] = None) -> FilteringBoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)
        component: Component name for categorization

    Returns:
        Configured structlog logger
    """
    logger = structlog.get_logger(name)

    if component:
        logger = logger.bind(component=component)

    return logger
