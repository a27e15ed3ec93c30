"""
Exception hierarchy for the log parser.

Line and file level errors are recovered by the processing layer and turned
into results; only ConfigurationError is meant to reach the caller.
"""


class LogParseError(Exception):
    """Base class for all LogParse errors."""


class LineParseError(LogParseError, ValueError):
    """A single log line could not be parsed."""

    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.line = line


class FileIOError(LogParseError, OSError):
    """An input could not be read or an output could not be written."""


class OutputConflictError(LogParseError):
    """The output file already exists and replacing it is not allowed."""

    def __init__(self, path, message: str = ""):
        super().__init__(message or f"Output file already exists: {path}")
        self.path = path


class ConfigurationError(LogParseError, ValueError):
    """Invalid configuration or options; fatal before any file is processed."""
