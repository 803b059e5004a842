"""genv — persist an application's private variables in a dotfile.

Re-exports public symbols so callers can write::

    from genv import VariableStore, GenvError

or use the module-level functions on the shared default store::

    import genv
    genv.load("myapp")
"""

from genv.default_store import (
    get_store,
    get_value,
    initialize,
    load,
    reset,
    save,
    set_float,
    set_int,
    set_string,
)
from genv.errors import (
    ArgumentError,
    DirectoryCreationError,
    FileOpenError,
    FileProvisionError,
    GenvError,
    InvalidDirectoryError,
    MalformedLineError,
    NotInitializedError,
    WriteError,
)
from genv.logging import LogEntry, Logger, LogLevel
from genv.paths import StoreLocation, discover_directory
from genv.store import VariableStore, format_float

__all__ = [
    "ArgumentError",
    "DirectoryCreationError",
    "FileOpenError",
    "FileProvisionError",
    "GenvError",
    "InvalidDirectoryError",
    "LogEntry",
    "LogLevel",
    "Logger",
    "MalformedLineError",
    "NotInitializedError",
    "StoreLocation",
    "VariableStore",
    "WriteError",
    "discover_directory",
    "format_float",
    "get_store",
    "get_value",
    "initialize",
    "load",
    "reset",
    "save",
    "set_float",
    "set_int",
    "set_string",
]
