"""Failure kinds raised by the pipeline steps.

Every step raises a subclass of :class:`Md2KindleError`; the orchestrator
catches it once and maps its ``kind`` to a process exit code.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    USAGE = "usage"
    CONFIG = "config"
    FILE_READ = "file_read"
    NETWORK = "network"
    PACKAGING = "packaging"
    AUTH = "auth"
    SEND = "send"
    UNEXPECTED = "unexpected"


EXIT_CODES = {
    ErrorKind.UNEXPECTED: 1,
    ErrorKind.USAGE: 2,
    ErrorKind.FILE_READ: 3,
    ErrorKind.NETWORK: 4,
    ErrorKind.PACKAGING: 5,
    ErrorKind.AUTH: 6,
    ErrorKind.SEND: 7,
    ErrorKind.CONFIG: 8,
}


class Md2KindleError(Exception):
    """Base class for all expected failures."""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    @property
    def exit_code(self) -> int:
        return EXIT_CODES[self.kind]


class UsageError(Md2KindleError):
    """Raised when the command line does not select exactly one source."""

    kind = ErrorKind.USAGE


class ConfigError(Md2KindleError):
    """Raised when required mail settings are missing or malformed."""

    kind = ErrorKind.CONFIG


class FileReadError(Md2KindleError):
    kind = ErrorKind.FILE_READ


class NetworkError(Md2KindleError):
    kind = ErrorKind.NETWORK


class PackagingError(Md2KindleError):
    kind = ErrorKind.PACKAGING


class AuthError(Md2KindleError):
    kind = ErrorKind.AUTH


class SendError(Md2KindleError):
    kind = ErrorKind.SEND


__all__ = [
    "ErrorKind",
    "EXIT_CODES",
    "Md2KindleError",
    "UsageError",
    "ConfigError",
    "FileReadError",
    "NetworkError",
    "PackagingError",
    "AuthError",
    "SendError",
]
