"""Logging utilities.

structlog renders every event, stdlib ``logging`` routes the output. Render
jobs bind their ``meme_id`` into context variables so every event logged
while a job runs carries it, whichever module emits the event.
"""

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

import structlog
from structlog.contextvars import bound_contextvars
from structlog.processors import CallsiteParameter
from structlog.types import Processor

from ..config.config import settings


def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure structlog on top of the standard library.

    Args:
        level: Log level name
        json_format: Render JSON lines instead of the console format
        log_file: Also append rendered events to this file
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            {CallsiteParameter.FUNC_NAME, CallsiteParameter.LINENO}
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(format="%(message)s", level=level.upper(), handlers=handlers, force=True)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


@contextmanager
def job_context(meme_id: str, **values: str) -> Iterator[None]:
    """Tag every event logged inside the block with the job's meme id."""
    with bound_contextvars(meme_id=meme_id, **values):
        yield


setup_logging(
    level=settings.log_level,
    json_format=settings.log_json,
    log_file=settings.log_file,
)
