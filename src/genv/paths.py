"""Where a store lives on disk.

Every application gets a hidden directory and a dotfile inside it::

    <base>/.<APPNAME>/.<APPNAME>.env

``<base>`` is the user's home directory unless the caller supplies one.
The application name is upper-cased everywhere it appears in a path, so
``"demo"``, ``"Demo"`` and ``"DEMO"`` all resolve to the same files.

When no directory is given to a load, ``~/.<APPNAME>/`` is tried
first.  If it holds no store file, a **discovery scan** walks below the
home directory depth-first, children in lexicographic order, and stops
at the first entry whose name contains the application name and which
leads to a directory holding ``.<APPNAME>.env``.  The walk never follows
symlinks and skips entries it cannot list or inspect.
"""

from __future__ import annotations

import ctypes
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from genv.errors import ArgumentError, FileOpenError, InvalidDirectoryError
from genv.logging import LogLevel

if TYPE_CHECKING:
    from genv.logging import Logger

DIR_PREFIX = "."
ENV_SUFFIX = ".env"
FILE_ENCODING = "utf-8"

_FILE_ATTRIBUTE_HIDDEN = 0x2


@dataclass(frozen=True)
class StoreLocation:
    """The resolved on-disk location of one application's store.

    Attributes:
        app_name: The normalized (upper-case) application name.
        directory: The application directory.
        path: The store file inside ``directory``.

    """

    app_name: str
    directory: Path
    path: Path


def normalize_app_name(app_name: str) -> str:
    """Return the canonical form of *app_name* used in every path.

    Raises:
        ArgumentError: If *app_name* is empty or only whitespace.

    """
    if not app_name or not app_name.strip():
        msg = "Application name must not be empty"
        raise ArgumentError(msg)
    return app_name.upper()


def env_file_name(app_name: str) -> str:
    """Return the store file name, e.g. ``.DEMO.env``."""
    return f"{DIR_PREFIX}{normalize_app_name(app_name)}{ENV_SUFFIX}"


def app_dir_name(app_name: str) -> str:
    """Return the application directory name, e.g. ``.DEMO``."""
    return f"{DIR_PREFIX}{normalize_app_name(app_name)}"


def home_directory() -> Path:
    """Return the current user's home directory.

    Raises:
        InvalidDirectoryError: If the home directory cannot be determined.

    """
    try:
        return Path.home()
    except RuntimeError as e:
        msg = "Could not determine the home directory"
        raise InvalidDirectoryError(msg) from e


def existing_directory(directory: str | os.PathLike[str]) -> Path:
    """Return *directory* as an absolute path after checking it exists.

    Raises:
        InvalidDirectoryError: If it is missing or not a directory.

    """
    path = Path(directory).expanduser()
    if not path.is_dir():
        msg = f"Not an existing directory: {path}"
        raise InvalidDirectoryError(msg)
    return path.absolute()


def location_in(app_name: str, directory: Path) -> StoreLocation:
    """Return the location of a store whose application directory is *directory*."""
    name = normalize_app_name(app_name)
    return StoreLocation(app_name=name, directory=directory, path=directory / env_file_name(name))


def provision_location(app_name: str, base: Path) -> StoreLocation:
    """Return where :meth:`VariableStore.initialize` will create a store under *base*."""
    return location_in(app_name, base / app_dir_name(app_name))


def discover_directory(
    app_name: str,
    root: Path,
    logger: Logger | None = None,
) -> Path:
    """Find the application directory below *root*.

    The conventional ``<root>/.<APP>/`` wins when it holds the store
    file.  Otherwise *root* is scanned depth-first in lexicographic order
    and the first entry whose name contains the normalized application
    name *and* that yields a directory holding ``.<APP>.env`` decides:
    a directory is the application directory itself, a file makes its
    parent the application directory.  Matches without a store file are
    passed over.

    Args:
        app_name: The application name (normalized here).
        root: Where to start scanning, usually the home directory.
        logger: Optional audit log for skipped directories.

    Returns:
        The discovered application directory.

    Raises:
        FileOpenError: If no directory below *root* holds the store file.

    """
    name = normalize_app_name(app_name)
    file_name = env_file_name(name)
    conventional = root / app_dir_name(name)
    if _holds_store(conventional, file_name):
        return conventional
    found = _scan(root, name, file_name, logger)
    if found is None:
        msg = f"No directory holding {file_name!r} found below {root}"
        raise FileOpenError(msg)
    return found


def _holds_store(directory: Path, file_name: str) -> bool:
    try:
        return (directory / file_name).is_file()
    except OSError:
        return False


def _scan(directory: Path, name: str, file_name: str, logger: Logger | None) -> Path | None:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        _log_skipped(logger, directory, e, name)
        return None
    for entry in entries:
        path = Path(entry.path)
        try:
            is_dir = entry.is_dir()
            is_real_dir = is_dir and not entry.is_symlink()
        except OSError as e:
            _log_skipped(logger, path, e, name)
            continue
        if name in entry.name:
            candidate = path if is_dir else directory
            if _holds_store(candidate, file_name):
                return candidate
        if is_real_dir:
            found = _scan(path, name, file_name, logger)
            if found is not None:
                return found
    return None


def _log_skipped(logger: Logger | None, path: Path, error: OSError, name: str) -> None:
    if logger is not None:
        logger.log(
            LogLevel.DEBUG,
            f"Skipped unreadable entry {path}: {error.strerror or error}",
            source="paths",
            app_name=name,
        )


def hide_directory(directory: Path) -> None:
    """Mark *directory* hidden where the platform has a hidden attribute.

    On Windows this sets ``FILE_ATTRIBUTE_HIDDEN``; elsewhere the leading
    dot already hides it and nothing happens.

    Raises:
        OSError: If the Windows API call fails.

    """
    if sys.platform != "win32":
        return
    kernel32 = ctypes.windll.kernel32  # pyright: ignore[reportAttributeAccessIssue]
    if not kernel32.SetFileAttributesW(str(directory), _FILE_ATTRIBUTE_HIDDEN):
        raise ctypes.WinError()  # pyright: ignore[reportAttributeAccessIssue]
