"""
todoscan: find TODO annotations in source comments and parse them into records.
"""

from .core import (
    Attribute,
    Location,
    Todo,
    TodoAssembler,
    parse,
    FolderScanner,
    ScannerConfig,
    scan_folder,
)
from .parsers import parse_annotation_line, parse_line, format_annotation

__version__ = "0.1.0"

__all__ = [
    'Attribute',
    'Location',
    'Todo',
    'TodoAssembler',
    'parse',
    'FolderScanner',
    'ScannerConfig',
    'scan_folder',
    'parse_annotation_line',
    'parse_line',
    'format_annotation',
]
