"""
Custom exceptions for todoscan.
"""


class TodoScanException(Exception):
    """Base exception for all todoscan errors."""
    pass


class ConfigurationError(TodoScanException):
    """Raised when configuration is invalid or cannot be loaded."""
    pass


class SourceReadError(TodoScanException):
    """Raised when a source file cannot be read."""

    def __init__(self, path: str, reason: str = None):
        self.path = path
        self.reason = reason
        message = f"Cannot read source file {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class LanguageNotAvailableError(TodoScanException):
    """Raised when a registered language grammar cannot be loaded."""

    def __init__(self, extension: str, language: str, reason: str = None):
        self.extension = extension
        self.language = language
        self.reason = reason
        message = f"Grammar '{language}' for {extension} files is not available"
        if reason:
            message += f": {reason}"
        super().__init__(message)
