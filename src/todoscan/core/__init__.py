"""
Core module for todoscan: models, errors, assembly and folder scanning.
"""

from .models import Attribute, Location, Todo
from .exceptions import (
    TodoScanException,
    ConfigurationError,
    SourceReadError,
    LanguageNotAvailableError,
)
from .assembler import TodoAssembler, parse

# Import scanner functionality
from .scanner import (
    ScannerConfig,
    FileInfo,
    IgnoreRules,
    FolderScanner,
    scan_folder,
)

__all__ = [
    # Models
    'Attribute',
    'Location',
    'Todo',
    # Errors
    'TodoScanException',
    'ConfigurationError',
    'SourceReadError',
    'LanguageNotAvailableError',
    # Assembly
    'TodoAssembler',
    'parse',
    # Scanner functionality
    'ScannerConfig',
    'FileInfo',
    'IgnoreRules',
    'FolderScanner',
    'scan_folder',
]
