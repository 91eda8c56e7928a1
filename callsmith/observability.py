"""
Observability for callsmith.

Structured JSON logging of request preparation, on top of the standard
logging module. Each invocation emits a start record and exactly one
completion or failure record carrying the tool, action, attribution and
duration.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with the standard format."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


class LogLevel(Enum):
    """Standard log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class JSONLogger:
    """
    Structured logger that outputs JSON-formatted logs.

    Each log entry includes:
    - timestamp (ISO 8601)
    - level
    - message
    - context fields

    Example output:
        {"timestamp": "2026-01-02T10:30:00+00:00", "level": "info",
         "message": "Preparation completed", "tool_id": "tool_1",
         "action": "getProject", "duration_ms": 812.4}
    """

    name: str = "callsmith"
    extra_context: dict[str, Any] = field(default_factory=dict)
    _python_logger: logging.Logger | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self._python_logger = logging.getLogger(self.name)

    def _log(self, level: LogLevel, message: str, context: dict[str, Any]) -> None:
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level.value,
            "message": message,
            **self.extra_context,
            **context,
        }
        log_method = getattr(self._python_logger, level.value)
        log_method(json.dumps(record, default=str))

    def debug(self, message: str, **context: Any) -> None:
        self._log(LogLevel.DEBUG, message, context)

    def info(self, message: str, **context: Any) -> None:
        self._log(LogLevel.INFO, message, context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(LogLevel.WARNING, message, context)

    def error(self, message: str, **context: Any) -> None:
        self._log(LogLevel.ERROR, message, context)

    def with_context(self, **extra: Any) -> "JSONLogger":
        """Create a new logger with additional context."""
        return JSONLogger(name=self.name, extra_context={**self.extra_context, **extra})


@dataclass
class PreparationLogger:
    """
    Logger for one request preparation.

    Example:
        log = PreparationLogger(tool_id="tool_1", action="getProject", session_id="s1")
        log.started(history_length=3)
        log.completed(method="GET", path="/projects/prj_1", duration_ms=812.4)
    """

    tool_id: str
    action: str
    session_id: str = ""
    interaction_id: str = ""
    inner: JSONLogger = field(default_factory=JSONLogger)

    def __post_init__(self) -> None:
        self.inner = self.inner.with_context(
            tool_id=self.tool_id,
            action=self.action,
            session_id=self.session_id or None,
            interaction_id=self.interaction_id or None,
        )

    def started(self, history_length: int) -> None:
        self.inner.debug("Preparation started", history_length=history_length)

    def completed(self, method: str, path: str, param_count: int, duration_ms: float) -> None:
        self.inner.info(
            "Preparation completed",
            success=True,
            method=method,
            path=path,
            param_count=param_count,
            duration_ms=round(duration_ms, 2),
        )

    def failed(self, error: BaseException, duration_ms: float) -> None:
        self.inner.error(
            "Preparation failed",
            success=False,
            error=str(error),
            error_type=type(error).__name__,
            duration_ms=round(duration_ms, 2),
        )
