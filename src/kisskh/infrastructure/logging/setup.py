from __future__ import annotations

import atexit
import copy
import logging
import logging.config
import queue
import sys
from datetime import datetime, timezone
from logging.handlers import QueueHandler, QueueListener
from typing import Any, Optional

import structlog

from kisskh.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)

# Loggers the server and its HTTP client create on their own.
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
_CLIENT_LOGGERS = ("httpx", "httpcore")

_QUEUE_LISTENER: Optional[QueueListener] = None


def _drop_color_message(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    # Uvicorn attaches a colored duplicate of the message.
    event_dict.pop("color_message", None)
    return event_dict


def _stamp_record_time(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    # Stdlib records keep their creation time, not the time the listener ran.
    record = event_dict.get("_record")
    if isinstance(record, logging.LogRecord):
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        event_dict["timestamp"] = dt.isoformat().replace("+00:00", "Z")
    return event_dict


def build_formatter(config: AppConfig) -> structlog.stdlib.ProcessorFormatter:
    """Render structlog events and plain stdlib records the same way."""
    renderer: structlog.typing.Processor
    if config.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            _drop_color_message,
            structlog.contextvars.merge_contextvars,
            _stamp_record_time,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def build_logging_config(config: AppConfig) -> dict[str, Any]:
    """
    dictConfig passed to ``uvicorn.run``.

    It attaches no handlers: uvicorn's loggers propagate to the root
    logger, which feeds the queue installed by configure_logging(). The
    per-request lines of httpx stay hidden unless the level is DEBUG.
    """
    level = config.log_level
    client_level = "DEBUG" if level == "DEBUG" else "WARNING"

    loggers: dict[str, Any] = {
        name: {"level": level, "handlers": [], "propagate": True}
        for name in _SERVER_LOGGERS
    }
    loggers.update({name: {"level": client_level} for name in _CLIENT_LOGGERS})

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "loggers": loggers,
    }


class _KeepEventDictQueueHandler(QueueHandler):
    def prepare(self, record: logging.LogRecord) -> logging.LogRecord:
        # The default prepare() flattens record.msg to a string, which
        # ProcessorFormatter cannot render back into an event dict.
        return copy.copy(record)


def _stop_listener() -> None:
    global _QUEUE_LISTENER
    if _QUEUE_LISTENER is not None:
        try:
            _QUEUE_LISTENER.stop()
        finally:
            _QUEUE_LISTENER = None


def _install_queue(config: AppConfig) -> None:
    """Emit from a listener thread so request handlers never block on log I/O."""
    global _QUEUE_LISTENER

    _stop_listener()

    stream_handler = logging.StreamHandler(stream=sys.stdout)
    stream_handler.setFormatter(build_formatter(config))

    q: queue.Queue[logging.LogRecord] = queue.Queue()

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_KeepEventDictQueueHandler(q))
    root.setLevel(config.log_level)

    _QUEUE_LISTENER = QueueListener(q, stream_handler)
    _QUEUE_LISTENER.start()
    atexit.register(_stop_listener)


def configure_logging(config: AppConfig) -> dict[str, Any]:
    """
    Configure structlog and stdlib logging for the addon.

    Returns the dictConfig for uvicorn so that re-applying it at server
    start keeps routing through the same queue.
    """
    structlog.configure(
        processors=[
            _drop_color_message,
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    log_config = build_logging_config(config)
    logging.config.dictConfig(log_config)
    _install_queue(config)

    log.info(
        "logging_configured", log_format=config.log_format, log_level=config.log_level
    )
    return log_config
