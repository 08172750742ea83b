"""
Logging configuration for the leave management service.
Provides console logging (coloured in development) and optional
rotating plain-text and JSON file handlers.
"""

import logging
import logging.config
import os
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from app.config.settings import settings

# Correlation id of the request currently being handled
correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation id to every record"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id.get() or "-"
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["environment"] = settings.ENVIRONMENT

        cid = getattr(record, "correlation_id", None)
        if cid and cid != "-":
            log_record["correlation_id"] = cid

        if record.exc_info:
            log_record["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }


def build_logging_config() -> Dict[str, Any]:
    """Build the dictConfig for the current settings"""
    handlers: Dict[str, Any] = {
        "console": {
            "level": "DEBUG" if settings.DEBUG else settings.LOG_LEVEL,
            "class": "logging.StreamHandler",
            "formatter": "colored" if settings.is_development() else "standard",
            "filters": ["correlation_id"],
        },
    }
    app_handlers = ["console"]

    if settings.LOG_TO_FILE:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        handlers["file"] = {
            "level": "INFO",
            "class": "logging.handlers.RotatingFileHandler",
            "filename": os.path.join(settings.LOG_DIR, "app.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 10,
            "formatter": "standard",
            "filters": ["correlation_id"],
            "encoding": "utf8",
        }
        handlers["json_file"] = {
            "level": "INFO",
            "class": "logging.handlers.RotatingFileHandler",
            "filename": os.path.join(settings.LOG_DIR, "app.json.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 10,
            "formatter": "json",
            "filters": ["correlation_id"],
            "encoding": "utf8",
        }
        app_handlers += ["file", "json_file"]

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "correlation_id": {"()": CorrelationIdFilter},
        },
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s [%(correlation_id)s]: %(message)s",
            },
            "json": {
                "()": CustomJsonFormatter,
                "fmt": "%(timestamp)s %(level)s %(logger)s %(message)s",
            },
            "colored": {
                "()": "colorlog.ColoredFormatter",
                "fmt": "%(log_color)s%(asctime)s [%(levelname)s] %(name)s [%(correlation_id)s]: %(message)s",
                "log_colors": {
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "red,bg_white",
                },
            },
        },
        "handlers": handlers,
        "loggers": {
            "app": {
                "handlers": app_handlers,
                "level": settings.LOG_LEVEL,
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "handlers": ["console"],
                "level": "INFO" if settings.DATABASE_ECHO else "WARNING",
                "propagate": False,
            },
            "uvicorn": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
        },
    }


def setup_logging() -> logging.Logger:
    """Configure application logging"""
    logging.config.dictConfig(build_logging_config())
    logger = logging.getLogger("app")
    logger.info(f"Logging initialized with level: {settings.LOG_LEVEL}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a named logger"""
    return logging.getLogger(name)
