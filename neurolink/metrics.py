"""CSV event log for simulated neural interface connections."""
from __future__ import annotations

import contextlib
import csv
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from time import perf_counter
from typing import Any, Callable, Dict, Iterator, Optional, Sequence

logger = logging.getLogger(__name__)


LOG_FIELDS: Sequence[str] = (
    "timestamp",
    "event",
    "component",
    "status",
    "value",
    "message",
)


def _ensure_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@dataclass(slots=True)
class LogEntry:
    """A single CSV row."""

    timestamp: str
    event: str
    component: str = ""
    status: Optional[str] = None
    value: Optional[float] = None
    message: Optional[str] = None

    def as_row(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "event": self.event,
            "component": self.component,
            "status": self.status or "",
            "value": self.value if self.value is not None else "",
            "message": self.message or "",
        }


class ConnectionLog:
    """Append-only CSV log of connection phases.

    Rows are flushed as soon as they are written so the file can be tailed
    while the (slow, paced) demo is still running. The component column is
    filled from the innermost :meth:`scope` unless given explicitly.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.path = Path(path)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._context = threading.local()
        self._ensure_header()

    def _ensure_header(self) -> None:
        if self.path.exists() and self.path.stat().st_size > 0:
            return
        with self._lock:
            with self.path.open("w", newline="", encoding="utf-8") as handle:
                writer = csv.DictWriter(handle, fieldnames=LOG_FIELDS)
                writer.writeheader()
                handle.flush()

    def log(
        self,
        event: str,
        *,
        component: Optional[str] = None,
        status: Optional[str] = None,
        value: Optional[float] = None,
        message: Optional[str] = None,
    ) -> None:
        if component is None:
            stack = self._component_stack()
            component = stack[-1] if stack else ""
        entry = LogEntry(
            timestamp=self._timestamp(),
            event=event,
            component=component,
            status=status,
            value=value,
            message=message,
        )
        self._write_row(entry)

    @contextlib.contextmanager
    def scope(self, component: Any) -> Iterator[None]:
        stack = self._component_stack()
        stack.append(str(component))
        try:
            yield
        finally:
            stack.pop()

    @contextlib.contextmanager
    def timer(self, event: str, component: Any) -> Iterator[None]:
        """Log ``event`` with the elapsed seconds once the block finishes.

        Write failures for the closing row are only logged; they never replace
        the outcome of the block.
        """
        start = perf_counter()
        try:
            with self.scope(component):
                yield
        except Exception as exc:
            self._log_quietly(
                event,
                component=str(component),
                status="error",
                value=perf_counter() - start,
                message=f"{type(exc).__name__}: {exc}",
            )
            raise
        else:
            self._log_quietly(event, component=str(component), status="ok", value=perf_counter() - start)

    def _log_quietly(self, event: str, **fields: Any) -> None:
        try:
            self.log(event, **fields)
        except OSError:
            logger.debug("Connection log write failed for %s", event, exc_info=True)

    def _write_row(self, entry: LogEntry) -> None:
        with self._lock:
            with self.path.open("a", newline="", encoding="utf-8") as handle:
                writer = csv.DictWriter(handle, fieldnames=LOG_FIELDS)
                writer.writerow(entry.as_row())
                handle.flush()

    def _component_stack(self) -> list[str]:
        stack = getattr(self._context, "stack", None)
        if stack is None:
            stack = []
            self._context.stack = stack
        return stack

    def _timestamp(self) -> str:
        dt = self._clock()
        if not isinstance(dt, datetime):
            return str(dt)
        return _ensure_utc(dt).isoformat(timespec="milliseconds")


__all__ = [
    "ConnectionLog",
    "LogEntry",
    "LOG_FIELDS",
]
