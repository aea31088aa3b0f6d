"""
Logging Configuration and Utilities

Structured logging through structlog on top of the standard library, with
JSON output rendered by python-json-logger.
"""

import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog
from pythonjsonlogger import jsonlogger

from reviews_api.config.settings import Settings, settings as default_settings

SERVICE_NAME = "software-reviews-api"


class RequestContextProcessor:
    """Add service information to every event"""

    def __init__(self, environment: str):
        self.environment = environment

    def __call__(self, logger, method_name, event_dict):
        event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        event_dict['service'] = SERVICE_NAME
        event_dict['environment'] = self.environment
        return event_dict


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter for structured logging"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def configure_structured_logging(config: Settings):
        """Configure structlog to hand its events to the standard library"""

        processors = [
            structlog.contextvars.merge_contextvars,
            RequestContextProcessor(config.ENVIRONMENT),
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if config.LOG_FORMAT == "json":
            # Event keys travel as `extra` and become top-level JSON fields
            processors.append(structlog.stdlib.render_to_log_kwargs)
        else:
            processors.append(structlog.processors.KeyValueRenderer(key_order=['event']))

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def configure_standard_logging(config: Settings):
        """Configure standard Python logging"""

        level = getattr(logging, config.LOG_LEVEL, logging.INFO)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)

        if config.LOG_FORMAT == "json":
            formatter = CustomJsonFormatter(
                '%(asctime)s %(name)s %(levelname)s %(message)s'
            )
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )

        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if config.LOG_FILE:
            log_path = Path(config.LOG_FILE)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=10*1024*1024,  # 10MB
                backupCount=5
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        LoggingConfig._configure_library_loggers(config)

    @staticmethod
    def _configure_library_loggers(config: Settings):
        """Configure logging for external libraries"""

        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.error").setLevel(logging.INFO)

        if config.LOG_SQL_QUERIES:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
        else:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("multipart").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Get configured logger instance.

    Args:
        name: Logger name, usually the caller's ``__name__``

    Returns:
        structlog logger bound to the standard library logger ``name``
    """
    return structlog.get_logger(name)


def setup_logging(config: Optional[Settings] = None):
    """Initialize logging configuration"""
    config = config or default_settings

    LoggingConfig.configure_structured_logging(config)
    LoggingConfig.configure_standard_logging(config)

    get_logger(__name__).info(
        "logging_initialized",
        log_level=config.LOG_LEVEL,
        log_format=config.LOG_FORMAT,
    )


__all__ = [
    'get_logger',
    'setup_logging',
    'LoggingConfig',
    'CustomJsonFormatter',
]
