"""
quotesync structured logging.

structlog on top of the stdlib logging module. Console output is meant for
people watching sync cycles; the daily file under the log directory always
receives DEBUG events.
"""

from __future__ import annotations

import logging
import sys
import time
from datetime import datetime
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

if TYPE_CHECKING:
    from quotesync.core.config import LoggingConfig


APP_NAME = "quotesync"

_configured = False


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every event with the application name and its level."""
    event_dict.setdefault("app", APP_NAME)
    event_dict["level"] = method_name.upper()
    return event_dict


def _build_handlers(config: LoggingConfig) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if config.console_enabled:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(getattr(logging, config.level))
        handlers.append(console)

    if config.file_enabled:
        config.log_directory.mkdir(parents=True, exist_ok=True)
        log_file = config.log_directory / f"{APP_NAME}_{datetime.now():%Y%m%d}.log"
        to_file = logging.FileHandler(log_file, encoding="utf-8")
        to_file.setLevel(logging.DEBUG)
        handlers.append(to_file)

    return handlers or [logging.NullHandler()]


def _build_renderers(config: LoggingConfig) -> list[Processor]:
    if config.json_format:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def setup_logging(config: LoggingConfig) -> None:
    """Configure logging once per process; later calls are no-ops."""
    global _configured

    if _configured:
        return

    logging.basicConfig(level=logging.DEBUG, handlers=_build_handlers(config), format="%(message)s")

    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            add_app_context,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            *_build_renderers(config),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def reset_logging() -> None:
    """Allow ``setup_logging`` to run again, e.g. with a new log directory."""
    global _configured
    _configured = False
    structlog.reset_defaults()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name or APP_NAME)


class OperationLogger:
    """
    Logs the start and end of an operation such as a sync cycle.

    Context added with ``update()`` while the block runs is included in the
    closing event. After the block, ``succeeded`` and ``duration_seconds``
    describe how it went. Exceptions are logged and re-raised.
    """

    def __init__(
        self,
        operation: str,
        logger: structlog.stdlib.BoundLogger | None = None,
        **context: Any,
    ):
        self.operation = operation
        self.logger = logger or get_logger()
        self.context = context
        self.succeeded: bool | None = None
        self.duration_seconds = 0.0
        self._started: float | None = None

    def __enter__(self) -> OperationLogger:
        self._started = time.monotonic()
        self.logger.info(f"{self.operation} started", operation=self.operation, **self.context)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if self._started is not None:
            self.duration_seconds = time.monotonic() - self._started
        self.succeeded = exc_type is None

        fields = {
            "operation": self.operation,
            "duration_seconds": round(self.duration_seconds, 3),
            **self.context,
        }
        if self.succeeded:
            self.logger.info(f"{self.operation} finished", **fields)
        else:
            self.logger.error(
                f"{self.operation} failed",
                error_type=exc_type.__name__,
                error=str(exc_val),
                **fields,
            )

    def update(self, **additional_context: Any) -> None:
        self.context.update(additional_context)
