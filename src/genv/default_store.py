"""Module-level functions over one shared store.

Small programs rarely need more than one store, so genv keeps a default
``VariableStore`` for the whole process and exposes its operations as
plain functions::

    import genv

    genv.initialize("myapp")
    genv.set_int("port", 8080)
    genv.save()

    # later, in another run
    genv.load("myapp")
    genv.get_value("port")  # "8080"

``initialize`` and ``load`` take the directory as an optional trailing
positional argument; passing more than one raises ``ArgumentError``.
"""

from __future__ import annotations

import os

from genv.errors import ArgumentError
from genv.paths import StoreLocation
from genv.store import VariableStore

_store = VariableStore()


def get_store() -> VariableStore:
    """Return the process-wide default store."""
    return _store


def reset() -> VariableStore:
    """Replace the default store with a fresh, empty one and return it."""
    global _store  # noqa: PLW0603
    _store = VariableStore()
    return _store


def _single_directory(
    operation: str,
    directory: tuple[str | os.PathLike[str], ...],
) -> str | os.PathLike[str] | None:
    if len(directory) > 1:
        msg = f"{operation}() takes at most one directory, got {len(directory)}"
        raise ArgumentError(msg)
    return directory[0] if directory else None


def initialize(app_name: str, *directory: str | os.PathLike[str]) -> StoreLocation:
    """Provision the default store; see :meth:`VariableStore.initialize`."""
    return _store.initialize(app_name, _single_directory("initialize", directory))


def load(
    app_name: str,
    *directory: str | os.PathLike[str],
    strict: bool = False,
) -> StoreLocation:
    """Load into the default store; see :meth:`VariableStore.load`."""
    return _store.load(app_name, _single_directory("load", directory), strict=strict)


def save() -> int:
    """Save the default store; see :meth:`VariableStore.save`."""
    return _store.save()


def set_string(key: str, value: str) -> None:
    """Set a string variable in the default store."""
    _store.set_string(key, value)


def set_int(key: str, value: int) -> None:
    """Set an integer variable in the default store."""
    _store.set_int(key, value)


def set_float(key: str, value: float) -> None:
    """Set a float variable in the default store."""
    _store.set_float(key, value)


def get_value(key: str) -> str:
    """Return a variable from the default store, or ""."""
    return _store.get_value(key)
