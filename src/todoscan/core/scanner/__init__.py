"""
Scanner package for collecting files to parse.

- FolderScanner: For local directories
"""

from ..base import (
    ScannerConfig,
    FileInfo,
    IgnoreRules
)

from .folder_scanner import FolderScanner, scan_folder

__all__ = [
    'ScannerConfig',
    'FileInfo',
    'IgnoreRules',
    'FolderScanner',
    'scan_folder',
]
