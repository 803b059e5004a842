"""Audit log for store events.

A store writes nothing to stderr or to files on its own.  Instead it
appends a record to its ``Logger`` each time it provisions a directory,
reads or writes the dotfile, or has to pass over something it could not
use (a malformed line, a directory it may not enter).  Host applications
read the records back with ``entries`` or ``filter``.

One ``Logger`` may be handed to several stores so their history lands
in a single place.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """How serious an event is; higher values are more severe."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """One event recorded by a store.

    Attributes:
        level: How serious the event is.
        message: What happened, e.g. the file that was saved.
        source: Which genv module reported it: "store", "paths" or "persistence".
        app_name: Upper-case application name, empty before a location is set.

    """

    level: LogLevel
    message: str
    source: str
    app_name: str = ""

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message`` with the app name if known."""
        prefix = f"[{self.level.name}] {self.source}"
        if self.app_name:
            prefix = f"{prefix} ({self.app_name})"
        return f"{prefix}: {self.message}"


class Logger:
    """Ordered collection of store events.

    Records are only ever appended; ``clear`` is the one way to drop them.
    """

    def __init__(self) -> None:
        """Start with no records."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return a copy of every record, oldest first."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        app_name: str = "",
    ) -> None:
        """Record one event.

        Args:
            level: How serious the event is.
            message: What happened.
            source: Reporting module name.
            app_name: Application the event belongs to, if known.

        """
        self._entries.append(
            LogEntry(level=level, message=message, source=source, app_name=app_name)
        )

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Select records by severity and/or reporting module.

        Args:
            min_level: Drop records less severe than this.
            source: Keep only records from this module.

        Returns:
            A new list; the log itself is not changed.

        """
        return [
            entry
            for entry in self._entries
            if (min_level is None or entry.level >= min_level)
            and (source is None or entry.source == source)
        ]

    def clear(self) -> None:
        """Forget every record."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return how many records are held."""
        return len(self._entries)
