"""
Output formats for collected TODOs.
"""

from .formats import (
    BaseFormatter,
    TextFormatter,
    JsonFormatter,
    YamlFormatter,
    get_formatter,
)

__all__ = [
    'BaseFormatter',
    'TextFormatter',
    'JsonFormatter',
    'YamlFormatter',
    'get_formatter',
]
