"""
Centralized Logging Service for the bookshelf persistence layer

This module provides a unified logging interface with:
- Structured JSON output
- File rotation (prevents disk fill)
- Colored console output in development
- Contextual logging with extra fields (collection, entity_id, etc.)


Usage:
    from bookshelf.services.system.logger_service import get_logger

    logger = get_logger(__name__)
    logger.info("Entity inserted", extra={"collection": "books", "entity_id": "abc123"})
    logger.error("Store error", extra={"error": str(e)}, exc_info=True)
"""

import logging
import json
import sys
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Dict, Any, Optional
from pathlib import Path


# Attributes every LogRecord carries; anything else came in through extra={}
_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'message', 'pathname', 'process', 'processName',
    'relativeCreated', 'thread', 'threadName', 'exc_info',
    'exc_text', 'stack_info', 'extra_fields', 'taskName', 'asctime',
])


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS
    }


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.
    Outputs logs in JSON format for easy parsing by log aggregation tools.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string"""

        def _infer_component(logger_name: str) -> str:
            parts = logger_name.split('.') if logger_name else []
            for marker in ('features', 'services'):
                if marker in parts:
                    idx = parts.index(marker)
                    if idx + 1 < len(parts):
                        return parts[idx + 1]
            if parts:
                return parts[0]
            return 'unknown'

        log_data: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'component': _infer_component(record.name),
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            log_data.update(record.extra_fields)

        for key, value in _extra_fields(record).items():
            try:
                # Only add JSON-serializable values
                json.dumps(value)
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        return json.dumps(log_data)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable colored formatter for console output.
    Used during development for easy reading.
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m',       # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors for console"""
        level_color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        colored_level = f"{level_color}{record.levelname:8s}{self.COLORS['RESET']}"

        timestamp = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S')

        message = record.getMessage()

        extra_parts = [f"{key}={value}" for key, value in _extra_fields(record).items()]
        if extra_parts:
            message += f" | {' '.join(extra_parts)}"

        # Format: [2024-11-16 10:30:45] INFO     [bookshelf.common.base] Entity books::42 was inserted
        log_line = f"[{timestamp}] {colored_level} [{record.name}] {message}"

        if record.exc_info:
            log_line += '\n' + self.formatException(record.exc_info)

        return log_line


class LoggerService:
    """
    Centralized logger service singleton.
    Manages all logging configuration and provides logger instances.
    """

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(LoggerService, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._initialize_logging()
            LoggerService._initialized = True

    def _initialize_logging(self):
        """Set up logging configuration"""
        log_level_str = os.getenv('LOG_LEVEL', 'INFO').upper()
        log_level = getattr(logging, log_level_str, logging.INFO)

        environment = os.getenv('ENVIRONMENT', 'development').lower()
        log_to_file = os.getenv('LOG_TO_FILE', 'true').lower() == 'true'
        log_dir = Path(os.getenv('LOG_DIR', 'logs'))

        # Only the package logger is configured; the root logger belongs to the host process
        package_logger = logging.getLogger('bookshelf')
        package_logger.setLevel(log_level)
        package_logger.handlers.clear()

        if log_to_file:
            log_dir.mkdir(parents=True, exist_ok=True)

            # 1. JSON File Handler (for production, log aggregation)
            json_handler = RotatingFileHandler(
                log_dir / 'bookshelf.json.log',
                maxBytes=50 * 1024 * 1024,  # 50MB per file
                backupCount=10,
                encoding='utf-8'
            )
            json_handler.setLevel(log_level)
            json_handler.setFormatter(JSONFormatter())
            package_logger.addHandler(json_handler)

            # 2. Human-readable File Handler (for manual review)
            text_handler = RotatingFileHandler(
                log_dir / 'bookshelf.log',
                maxBytes=50 * 1024 * 1024,
                backupCount=10,
                encoding='utf-8'
            )
            text_handler.setLevel(log_level)
            text_handler.setFormatter(logging.Formatter(
                '%(asctime)s [%(levelname)s] [%(name)s] %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            package_logger.addHandler(text_handler)

        # 3. Console Handler (for development)
        if environment == 'development':
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(log_level)
            console_handler.setFormatter(ConsoleFormatter())
            package_logger.addHandler(console_handler)

        init_logger = logging.getLogger(__name__)
        init_logger.debug(
            "Logging initialized",
            extra={
                'environment': environment,
                'log_level': log_level_str,
                'log_dir': str(log_dir) if log_to_file else None,
            }
        )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Configured logger instance

    Example:
        logger = get_logger(__name__)
        logger.info("Processing started", extra={"entity_id": "abc123"})
    """
    # Initialize logging service (singleton, only runs once)
    LoggerService()

    return logging.getLogger(name)


def log_entity_operation(logger: logging.Logger, operation: str, reference: str, **kwargs):
    """
    Helper to log entity lifecycle operations with consistent format.

    Args:
        logger: Logger instance
        operation: Past-tense operation (inserted, updated, deleted, etc.)
        reference: Collection reference of the entity, e.g. books::42
        **kwargs: Additional context (collection, entity_id, ...)
    """
    logger.info(
        f"Entity {reference} was {operation}",
        extra={
            'operation': operation,
            **kwargs
        }
    )


def log_error(logger: logging.Logger, error: Exception, context: Optional[Dict[str, Any]] = None):
    """
    Helper to log errors with full context and traceback.

    Args:
        logger: Logger instance
        error: Exception object
        context: Optional context dictionary
    """
    logger.error(
        f"Error: {str(error)}",
        extra={
            'error_type': type(error).__name__,
            'error_message': str(error),
            **(context or {})
        },
        exc_info=True
    )
