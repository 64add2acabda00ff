from __future__ import annotations

import logging
from typing import Any, Dict

RESERVED_LOG_KEYS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
}


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS and v is not None
    }


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Structured logging helper.
    - Passes fields through `extra` so the logfmt formatter can render them.
    - Drops reserved LogRecord attributes and None values.
    """
    log = logger or logging.getLogger("basecamp_connector.observability")
    if not log.isEnabledFor(level):
        return
    extra = {"event": event, **_clean_fields(fields)}
    log.log(level, event, extra=extra)


__all__ = ["log_event"]
