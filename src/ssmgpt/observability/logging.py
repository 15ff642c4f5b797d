"""Structured logging configuration using structlog.

How to use:
    from ssmgpt.observability.logging import get_logger

    logger = get_logger(__name__)
    logger.info("corpus_loaded", chunk_count=412, dimension=1536)
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor

APP_NAME = "ssmgpt"


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add application context to log events."""
    event_dict["app"] = APP_NAME
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    log_file: Optional[Path] = None,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output logs as JSON; otherwise use console format
        log_file: Optional file that receives a copy of every log line
    """
    numeric_level = getattr(logging, str(level).upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        processors.extend([structlog.processors.format_exc_info, structlog.processors.JSONRenderer()])
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=log_file is None))

    logger_factory: Any = structlog.PrintLoggerFactory()

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            root_logger = logging.getLogger()
            root_logger.setLevel(numeric_level)

            # Avoid duplicate file handlers when reconfigured
            for handler in root_logger.handlers[:]:
                if isinstance(handler, logging.FileHandler):
                    root_logger.removeHandler(handler)

            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(logging.Formatter("%(message)s"))
            root_logger.addHandler(file_handler)

            logger_factory = structlog.stdlib.LoggerFactory()
        except OSError as e:
            logging.warning(f"Failed to enable file logging: {e}. Using console-only mode.")

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
