"""
Parsers for TODO annotations and the comments that contain them.
"""

from .annotation import (
    MARKER,
    LineReader,
    parse_annotation_line,
    parse_line,
    format_annotation,
)
from .languages import LanguageRegistry, default_registry

__all__ = [
    'MARKER',
    'LineReader',
    'parse_annotation_line',
    'parse_line',
    'format_annotation',
    'LanguageRegistry',
    'default_registry',
]
