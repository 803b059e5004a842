"""Variable store — an application's private key-value settings.

A ``VariableStore`` holds string variables in memory and knows which
file backs them.  It is *not* the process environment: nothing here
reads or writes ``os.environ``.

Lifecycle:
    1. ``initialize(app_name)`` provisions ``~/.<APP>/.<APP>.env`` for a
       new application, or ``load(app_name)`` finds an existing one.
    2. ``set_string`` / ``set_int`` / ``set_float`` record values.  Every
       value is stored as a string.
    3. ``save()`` writes the variables back.  Nothing is flushed
       automatically.

Key design properties:
    - **Strings only** — typed setters convert to a canonical string;
      ``get_value`` always returns a string.
    - **Missing reads as empty** — ``get_value`` returns ``""`` for an
      unknown key, so "absent" and "set to empty" look the same.  Empty
      values are never written to disk.
    - **Independent instances** — each store has its own variables and
      location; see ``genv.default_store`` for one shared instance.
    - **Single-threaded** — no locking; share a store across threads at
      your own risk.
"""

from __future__ import annotations

import math
import os
from decimal import Decimal
from typing import TYPE_CHECKING

from genv.errors import DirectoryCreationError, FileProvisionError, NotInitializedError
from genv.logging import Logger, LogLevel
from genv.paths import (
    FILE_ENCODING,
    StoreLocation,
    discover_directory,
    existing_directory,
    hide_directory,
    home_directory,
    location_in,
    normalize_app_name,
    provision_location,
)
from genv.persistence import dump_variables, load_variables

if TYPE_CHECKING:
    from pathlib import Path


def format_float(value: float) -> str:
    """Return the shortest exponent-free text that parses back to *value*.

    Integral values drop the fraction (``1.0`` becomes ``"1"``).
    Infinities and NaN keep Python's spelling, which ``float()`` accepts.
    """
    value = float(value)
    if not math.isfinite(value):
        return repr(value)
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class VariableStore:
    """In-memory string variables plus the file that persists them."""

    def __init__(self, logger: Logger | None = None) -> None:
        """Create an empty store with no location.

        Args:
            logger: Audit log to record events in; a fresh one by default.

        """
        self._vars: dict[str, str] = {}
        self._location: StoreLocation | None = None
        self.logger = logger if logger is not None else Logger()

    # -- Location -------------------------------------------------------------

    @property
    def location(self) -> StoreLocation | None:
        """Return the backing file location, or None before initialize/load."""
        return self._location

    @property
    def storage_directory(self) -> Path | None:
        """Return the application directory, or None if not yet known."""
        return self._location.directory if self._location else None

    @property
    def storage_path(self) -> Path | None:
        """Return the store file path, or None if not yet known."""
        return self._location.path if self._location else None

    @property
    def app_name(self) -> str:
        """Return the normalized application name, or "" if not yet known."""
        return self._location.app_name if self._location else ""

    def initialize(
        self,
        app_name: str,
        directory: str | os.PathLike[str] | None = None,
    ) -> StoreLocation:
        """Provision the application directory and an empty store file.

        Creates ``<base>/.<APP>/`` and an empty ``.<APP>.env`` inside it,
        where ``<base>`` is *directory* or the user's home directory.
        The directory must not exist yet.  On Windows it is also marked
        hidden.

        Args:
            app_name: The application name (any case).
            directory: Existing base directory; home directory if None.

        Returns:
            The provisioned location, now used by ``save()``.

        Raises:
            ArgumentError: If *app_name* is empty.
            InvalidDirectoryError: If *directory* is not an existing directory.
            DirectoryCreationError: If the application directory cannot be made.
            FileProvisionError: If the store file cannot be created.
            OSError: If marking the directory hidden fails on Windows.

        """
        name = normalize_app_name(app_name)
        base = existing_directory(directory) if directory is not None else home_directory()
        location = provision_location(name, base)

        try:
            location.directory.mkdir()
        except OSError as e:
            msg = f"Failed to create directory {location.directory}: {e.strerror or e}"
            raise DirectoryCreationError(msg) from e

        hide_directory(location.directory)

        try:
            location.path.write_text("", encoding=FILE_ENCODING)
        except OSError as e:
            msg = f"Failed to create store file {location.path}: {e.strerror or e}"
            raise FileProvisionError(msg) from e

        self._location = location
        self._log(LogLevel.INFO, f"Provisioned store file {location.path}")
        return location

    # -- Typed setters --------------------------------------------------------

    def set_string(self, key: str, value: str) -> None:
        """Set *key* to *value* verbatim (creates or overwrites)."""
        self._vars[key] = value

    def set_int(self, key: str, value: int) -> None:
        """Set *key* to the base-10 text of *value*."""
        self._vars[key] = format(value, "d")

    def set_float(self, key: str, value: float) -> None:
        """Set *key* to the shortest exact decimal text of *value*."""
        self._vars[key] = format_float(value)

    # -- Reading and housekeeping ---------------------------------------------

    def get_value(self, key: str) -> str:
        """Return the value for *key*, or "" if it is not set."""
        return self._vars.get(key, "")

    def delete(self, key: str) -> None:
        """Remove *key* from the store.

        Raises:
            KeyError: If *key* does not exist.

        """
        del self._vars[key]

    def clear(self) -> None:
        """Drop every variable.  The location is kept."""
        self._vars.clear()

    def items(self) -> list[tuple[str, str]]:
        """Return all (key, value) pairs."""
        return list(self._vars.items())

    def as_dict(self) -> dict[str, str]:
        """Return a copy of the variables."""
        return dict(self._vars)

    def __len__(self) -> int:
        """Return the number of variables."""
        return len(self._vars)

    def __contains__(self, key: object) -> bool:
        """Return True if *key* is set (even to "")."""
        return key in self._vars

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"VariableStore(app_name={self.app_name!r}, variables={self._vars!r})"

    # -- Persistence ----------------------------------------------------------

    def save(self) -> int:
        """Write every non-empty variable to the store file.

        The file is truncated and rewritten; variables set to "" are left
        out.  Not atomic.

        Returns:
            The number of lines written.

        Raises:
            NotInitializedError: If neither initialize() nor load() succeeded.
            WriteError: If the file cannot be written.

        """
        if self._location is None:
            msg = "Store has no location; call initialize() or load() first"
            raise NotInitializedError(msg)

        for key, value in self._vars.items():
            if value == "":
                self._log(LogLevel.DEBUG, f"Skipped empty variable {key!r}")

        written = dump_variables(self._vars, self._location.path)
        self._log(LogLevel.INFO, f"Saved {written} variable(s) to {self._location.path}")
        return written

    def load(
        self,
        app_name: str,
        directory: str | os.PathLike[str] | None = None,
        *,
        strict: bool = False,
    ) -> StoreLocation:
        """Read an application's store file into this store.

        With *directory*, that directory is the application directory.
        Without it, ``~/.<APP>/`` is tried and then the home directory is
        scanned (see ``genv.paths``).
        Loaded keys overwrite in-memory keys of the same name; other
        in-memory keys are kept.  If anything fails, neither the
        variables nor the location change.

        Args:
            app_name: The application name (any case).
            directory: The application directory; scan the home directory if None.
            strict: Fail on a line without ``=`` instead of skipping it.

        Returns:
            The location loaded from, now used by ``save()``.

        Raises:
            ArgumentError: If *app_name* is empty.
            InvalidDirectoryError: If *directory* is not an existing directory.
            FileOpenError: If no store is found or the file cannot be read.
            MalformedLineError: In strict mode, for a line without ``=``.

        """
        name = normalize_app_name(app_name)
        if directory is not None:
            app_dir = existing_directory(directory)
        else:
            app_dir = discover_directory(name, home_directory(), self.logger)
        location = location_in(name, app_dir)

        loaded = load_variables(location.path, strict=strict, logger=self.logger, app_name=name)

        self._vars.update(loaded)
        self._location = location
        self._log(LogLevel.INFO, f"Loaded {len(loaded)} variable(s) from {location.path}")
        return location

    def _log(self, level: LogLevel, message: str) -> None:
        self.logger.log(level, message, source="store", app_name=self.app_name)
