"""Desktop event log — an in-memory audit trail.

Every subsystem of the desktop (file system, window manager, drag
controller, terminals) reports what it did to a shared ``Logger``.
The log answers questions like "why is nothing focused?" or "which
command created this folder?" without attaching a debugger.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, ref).
- **Logger** — an append-only buffer with filtering and clearing.

Entries carry an optional ``ref``: the id of the node or window the
event is about, so the log can be filtered per object by callers.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries.

    IntEnum so that minimum-level filtering is a plain ``>=``.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The subsystem that generated the event (e.g. "vfs").
        ref: Id of the node or window involved, if any.

    """

    level: LogLevel
    message: str
    source: str
    ref: str | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message`` with an optional ``(ref)``."""
        suffix = f" ({self.ref})" if self.ref is not None else ""
        return f"[{self.level.name}] {self.source}: {self.message}{suffix}"


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self, *, min_level: LogLevel = LogLevel.DEBUG) -> None:
        """Create an empty logger.

        Args:
            min_level: Entries below this level are dropped on arrival.

        """
        self._entries: list[LogEntry] = []
        self._min_level = min_level

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        ref: str | None = None,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Subsystem that generated the event.
            ref: Id of the node or window the event concerns.

        """
        if level < self._min_level:
            return
        self._entries.append(LogEntry(level=level, message=message, source=source, ref=ref))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
        ref: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching every given criterion.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.
            ref: If set, only return entries about this node or window.

        Returns:
            A filtered list of log entries.

        """
        result = list(self._entries)
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        if ref is not None:
            result = [e for e in result if e.ref == ref]
        return result

    def lines(self, *, min_level: LogLevel = LogLevel.INFO) -> list[str]:
        """Return formatted entries at or above *min_level* (like ``dmesg``)."""
        return [str(e) for e in self.filter(min_level=min_level)]

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()
