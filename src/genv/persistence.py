"""Store file format — save and load ``key=value`` lines.

The store file is plain UTF-8 text with one variable per line::

    port=8080
    ratio=0.1
    url=https://example.com/?a=b

- ``dump_variables(variables, path)`` — truncate *path* and write every
  non-empty variable.
- ``load_variables(path)`` — read *path* back into a dict.

Format rules:
    - **Empty values are not written** — a key set to ``""`` counts as
      unset, so it never reaches the file.
    - **Split on the first ``=``** — keys cannot contain ``=``, values may.
    - **No escaping** — a newline inside a value breaks the line format;
      callers must not store multi-line values.
    - **Blank lines are ignored** when loading.
    - **Lines without ``=`` are malformed** — skipped by default, fatal
      in strict mode.

Writes are not atomic: a failure partway through can leave a partially
written file.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from genv.errors import FileOpenError, MalformedLineError, WriteError
from genv.logging import LogLevel
from genv.paths import FILE_ENCODING

if TYPE_CHECKING:
    from pathlib import Path

    from genv.logging import Logger

SEPARATOR = "="


def format_lines(variables: Mapping[str, str]) -> list[str]:
    """Return the file lines for *variables*, skipping empty values."""
    return [f"{key}{SEPARATOR}{value}\n" for key, value in variables.items() if value != ""]


def parse_lines(
    lines: Iterable[str],
    *,
    strict: bool = False,
    logger: Logger | None = None,
    app_name: str = "",
) -> dict[str, str]:
    """Parse store file lines into a dict.

    Later lines win when a key repeats.

    Args:
        lines: The lines to parse, with or without trailing newlines.
        strict: Raise on a malformed line instead of skipping it.
        logger: Optional audit log for skipped lines.
        app_name: Application name recorded with log entries.

    Returns:
        The parsed variables.

    Raises:
        MalformedLineError: In strict mode, for a line without ``=``.

    """
    variables: dict[str, str] = {}
    for number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line:
            continue
        key, sep, value = line.partition(SEPARATOR)
        if not sep:
            if strict:
                raise MalformedLineError(number, line)
            if logger is not None:
                logger.log(
                    LogLevel.WARNING,
                    f"Skipped malformed line {number}: {line!r}",
                    source="persistence",
                    app_name=app_name,
                )
            continue
        variables[key] = value
    return variables


def dump_variables(variables: Mapping[str, str], path: Path) -> int:
    """Write *variables* to *path*, replacing its contents.

    Args:
        variables: The variables to save.
        path: The store file.

    Returns:
        The number of lines written.

    Raises:
        WriteError: If the file cannot be opened or written.

    """
    lines = format_lines(variables)
    try:
        with path.open("w", encoding=FILE_ENCODING, newline="\n") as f:
            f.writelines(lines)
    except OSError as e:
        msg = f"Failed to write store file {path}: {e.strerror or e}"
        raise WriteError(msg) from e
    return len(lines)


def load_variables(
    path: Path,
    *,
    strict: bool = False,
    logger: Logger | None = None,
    app_name: str = "",
) -> dict[str, str]:
    """Read a store file.

    Raises:
        FileOpenError: If the file cannot be opened or read.
        MalformedLineError: In strict mode, for a line without ``=``.

    """
    try:
        with path.open(encoding=FILE_ENCODING, newline="") as f:
            lines = f.readlines()
    except OSError as e:
        msg = f"Failed to open store file {path}: {e.strerror or e}"
        raise FileOpenError(msg) from e
    except UnicodeDecodeError as e:
        msg = f"Store file {path} is not valid UTF-8"
        raise FileOpenError(msg) from e
    return parse_lines(lines, strict=strict, logger=logger, app_name=app_name)
