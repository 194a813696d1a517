"""
Core data models for todoscan.

This module defines the records produced when a TODO annotation is found:
the attributes parsed from its parenthesized list, the location it was
found at, and the annotation itself.
"""

from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field


@dataclass
class Attribute:
    """A single key with an optional value from an annotation's attribute list."""

    key: str
    value: str = ""
    quoted: bool = False  # value was written between double quotes

    @property
    def is_bare(self) -> bool:
        """True when the attribute was written as a key with no value."""
        return not self.quoted and self.value == ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'key': self.key,
            'value': self.value,
            'quoted': self.quoted,
        }


@dataclass(frozen=True)
class Location:
    """Position of an annotation inside a file."""

    file: str
    line: int  # 1-based

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass
class Todo:
    """
    A parsed TODO annotation.

    The parser fills in ``description`` and ``attributes``; ``raw_line`` and
    ``location`` are attached by the assembler that knows where the line
    came from.
    """

    description: str = ""
    attributes: List[Attribute] = field(default_factory=list)
    raw_line: str = ""
    location: Optional[Location] = None

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of the first attribute named ``key``."""
        for attr in self.attributes:
            if attr.key == key:
                return attr.value
        return default

    def attribute_map(self) -> Dict[str, str]:
        """
        Flatten attributes into a key -> value mapping.

        Duplicate keys collapse to the last value, so this is meant for
        presentation only; ``attributes`` keeps every entry in order.
        """
        return {attr.key: attr.value for attr in self.attributes}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary for serialization."""
        return {
            'location': str(self.location) if self.location else None,
            'file': self.location.file if self.location else None,
            'line': self.location.line if self.location else None,
            'raw_line': self.raw_line,
            'description': self.description,
            'attributes': [attr.to_dict() for attr in self.attributes],
        }
