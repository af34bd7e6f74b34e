"""
CyberSecure Toolkit Structured Logger
======================================

Provides :class:`ToolkitLogger`, a small structured-logging facade over
the standard :mod:`logging` package.  Console records are rendered by
Rich; an optional rotating log file receives plain text or JSON lines.

User secrets (passwords, email addresses) must never reach a log record
verbatim -- use :func:`redact` before interpolating them.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
        "log.level.critical": "bold white on red",
    }
)

_LOGGER_PREFIX = "cybersecure"


def redact(value: str, keep: int = 1) -> str:
    """Mask *value* for logging, keeping only the first *keep* characters.

    Email addresses keep their domain, since the domain alone is not
    sensitive and is useful when diagnosing lookups.

    >>> redact("hunter2")
    'h******'
    >>> redact("alice@example.com")
    'a****@example.com'
    """
    if not value:
        return ""
    if "@" in value:
        local, _, domain = value.partition("@")
        return f"{redact(local, keep)}@{domain}"
    shown = value[:keep]
    return shown + "*" * (len(value) - len(shown))


class _JSONFormatter(logging.Formatter):
    """Emit each log record as a single-line JSON object::

        {"timestamp": "...", "level": "INFO", "logger": "cybersecure.engine",
         "message": "...", "tool_name": "engine", "operation": "url",
         "extra": {...}}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr in ("tool_name", "operation"):
            val = getattr(record, attr, None)
            if val is not None:
                entry[attr] = val

        extra = getattr(record, "toolkit_extra", None)
        if extra is not None:
            entry["extra"] = extra

        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class _ColorConsoleHandler(RichHandler):
    """:class:`rich.logging.RichHandler` bound to stderr with the toolkit theme."""

    def __init__(self, **kwargs: Any) -> None:
        console = Console(theme=_LOG_THEME, stderr=True)
        super().__init__(
            console=console,
            show_path=False,
            show_time=True,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            markup=False,
            **kwargs,
        )


class ToolkitLogger:
    """Context-aware logger bound to a component name.

    Usage::

        log = ToolkitLogger("collectors.breach")
        log.info("Lookup started")
        with log.operation("breach_lookup"):
            log.debug("Querying %s", url)

    Args:
        tool_name:       Component name, appended to ``cybersecure.``.
        log_level:       Minimum severity (DEBUG, INFO, WARNING, ERROR).
        log_file:        Rotating log file path; ``None`` disables it.
        json_logs:       Emit JSON lines to the log file.
        max_bytes:       Log-file size before rotation.
        backup_count:    Number of rotated files kept.
        console_output:  Attach the Rich stderr handler.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: str = "WARNING",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 5_242_880,
        backup_count: int = 3,
        console_output: bool = True,
    ) -> None:
        self._tool_name = tool_name
        self._operation: str | None = None

        level = getattr(logging, log_level.upper(), logging.WARNING)
        self._logger = logging.getLogger(f"{_LOGGER_PREFIX}.{tool_name}")
        self._logger.setLevel(level)
        self._logger.propagate = False
        self._logger.handlers.clear()

        if console_output:
            self._logger.addHandler(_ColorConsoleHandler(level=level))

        if log_file:
            file_path = Path(log_file)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                filename=str(file_path),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            fh.setLevel(level)
            if json_logs:
                fh.setFormatter(_JSONFormatter())
            else:
                fh.setFormatter(
                    logging.Formatter(
                        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                        datefmt="%Y-%m-%dT%H:%M:%S%z",
                    )
                )
            self._logger.addHandler(fh)

    @classmethod
    def from_config(cls, tool_name: str, config: Any) -> ToolkitLogger:
        """Build a logger from the ``global`` section of a toolkit config."""
        settings = config.global_settings
        level = "DEBUG" if settings.debug else settings.log_level
        return cls(
            tool_name,
            log_level=level,
            log_file=settings.log_file or None,
            json_logs=settings.log_json,
        )

    # ------------------------------------------------------------------ #
    #  Operation scope
    # ------------------------------------------------------------------ #

    class _OperationContext:
        """Temporarily binds an operation name to every record."""

        def __init__(self, parent: ToolkitLogger, operation: str) -> None:
            self._parent = parent
            self._operation = operation
            self._prev: str | None = None

        def __enter__(self) -> ToolkitLogger:
            self._prev = self._parent._operation
            self._parent._operation = self._operation
            return self._parent

        def __exit__(self, *exc: Any) -> None:
            self._parent._operation = self._prev

    def operation(self, name: str) -> _OperationContext:
        """Return a context manager that sets the *operation* field."""
        return self._OperationContext(self, name)

    # ------------------------------------------------------------------ #
    #  Log methods
    # ------------------------------------------------------------------ #

    def _enrich(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        extra = kwargs.pop("extra", {}) or {}

        extra_data: dict[str, Any] = {}
        standard_keys = {"exc_info", "stack_info", "stacklevel"}
        for key in list(kwargs):
            if key not in standard_keys:
                extra_data[key] = kwargs.pop(key)

        extra["tool_name"] = self._tool_name
        extra["operation"] = self._operation
        if extra_data:
            extra["toolkit_extra"] = extra_data

        kwargs["extra"] = extra
        return kwargs

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(msg, *args, **self._enrich(kwargs))

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(msg, *args, **self._enrich(kwargs))

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(msg, *args, **self._enrich(kwargs))

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(msg, *args, **self._enrich(kwargs))

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an ERROR-level message with the active traceback."""
        kwargs["exc_info"] = kwargs.get("exc_info", True)
        self._logger.error(msg, *args, **self._enrich(kwargs))

    # ------------------------------------------------------------------ #
    #  Timing helper
    # ------------------------------------------------------------------ #

    class _TimingContext:
        """Logs start and completion of a block with elapsed time."""

        def __init__(self, logger_inst: ToolkitLogger, label: str) -> None:
            self._logger = logger_inst
            self._label = label
            self._start: float = 0.0

        def __enter__(self) -> ToolkitLogger._TimingContext:
            self._start = time.perf_counter()
            self._logger.debug("Started: %s", self._label)
            return self

        def __exit__(self, *exc: Any) -> None:
            self._logger.debug(
                "Completed: %s (%.3f sec)", self._label, self.elapsed
            )

        @property
        def elapsed(self) -> float:
            """Seconds elapsed since entering the context."""
            return time.perf_counter() - self._start

    def timed(self, label: str) -> _TimingContext:
        """Context manager that logs start / finish and elapsed time."""
        return self._TimingContext(self, label)

    @property
    def tool_name(self) -> str:
        return self._tool_name

    @property
    def underlying(self) -> logging.Logger:
        """Direct access to the stdlib :class:`logging.Logger`."""
        return self._logger
