# src/rewire/errors.py
"""Tagged error classification shared by the walker, pipeline and CLI."""

import traceback
from enum import Enum
from pathlib import Path
from typing import Optional


class ErrorKind(Enum):
    USAGE = "usage"
    PER_FILE_IO = "per_file_io"
    TRAVERSAL = "traversal"
    FORMAT = "format"


class RewireError(Exception):
    """
    Single error type for the tool. Callers match on `kind` rather than on
    the exception class.
    """

    def __init__(self, kind: ErrorKind, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.path = path

    @property
    def location(self) -> Optional[str]:
        """`file.py:#line` of the statement that raised this error."""
        if self.__traceback__ is None:
            return None
        frames = traceback.extract_tb(self.__traceback__)
        if not frames:
            return None
        last = frames[-1]
        return f"{Path(last.filename).name}:#{last.lineno}"

    def __str__(self) -> str:
        return self.message


def usage_error(message: str) -> RewireError:
    return RewireError(ErrorKind.USAGE, message)


def traversal_error(path, cause: Exception) -> RewireError:
    reason = getattr(cause, "strerror", None) or cause
    return RewireError(ErrorKind.TRAVERSAL, f"{path}: {reason}", path=str(path))


def format_error(path, cause) -> RewireError:
    return RewireError(ErrorKind.FORMAT, f"{path}: {cause}", path=str(path))


def per_file_error(path, cause) -> RewireError:
    return RewireError(ErrorKind.PER_FILE_IO, f"{path}: {cause}", path=str(path))
