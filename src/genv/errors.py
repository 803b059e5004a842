"""Errors raised by genv.

Every failure a caller can see is a ``GenvError`` subclass, so a host
application can catch the whole family with one ``except`` clause or
pick out the specific cases it cares about.  I/O failures keep the
underlying ``OSError`` as ``__cause__``.
"""


class GenvError(Exception):
    """Base class for all genv failures."""


class ArgumentError(GenvError, TypeError):
    """Raised when an operation is called with unusable arguments.

    Covers an empty application name and more than one directory
    argument passed to the module-level functions.
    """


class InvalidDirectoryError(GenvError):
    """Raised when a supplied directory does not exist or is not a directory."""


class DirectoryCreationError(GenvError):
    """Raised when the application directory cannot be created."""


class FileProvisionError(GenvError):
    """Raised when the empty store file cannot be created."""


class FileOpenError(GenvError):
    """Raised when the store file cannot be located or opened for reading."""


class WriteError(GenvError):
    """Raised when writing the store file fails."""


class NotInitializedError(GenvError):
    """Raised when saving a store whose location was never established."""


class MalformedLineError(GenvError):
    """Raised by a strict load when a line has no ``=`` separator."""

    def __init__(self, line_number: int, line: str) -> None:
        """Record where the bad line was found.

        Args:
            line_number: 1-based line number in the store file.
            line: The offending line, without its newline.

        """
        super().__init__(f"Line {line_number} has no '=' separator: {line!r}")
        self.line_number = line_number
        self.line = line
