"""
Output formatters for collected TODOs.

This module provides the text, JSON and YAML renderings used by the
command line.
"""

import json
import yaml
from abc import ABC, abstractmethod
from typing import Dict, List, Any, Type

from ..core.exceptions import ConfigurationError
from ..core.models import Todo


class BaseFormatter(ABC):
    """Base class for TODO formatters."""

    @abstractmethod
    def format(self, todos: List[Todo]) -> str:
        """Format todos into a string representation."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get the appropriate file extension for this format."""
        pass


class TextFormatter(BaseFormatter):
    """One line per TODO: ``file:line: description [key=value, ...]``."""

    def format_todo(self, todo: Todo) -> str:
        location = str(todo.location) if todo.location else "<unknown>"
        text = f"{location}: {todo.description}"
        if todo.attributes:
            pairs = ", ".join(
                f"{attr.key}={attr.value}" if attr.value or attr.quoted else attr.key
                for attr in todo.attributes
            )
            text += f" [{pairs}]"
        return text

    def format(self, todos: List[Todo]) -> str:
        return "\n".join(self.format_todo(todo) for todo in todos)

    def get_file_extension(self) -> str:
        return ".txt"


class JsonFormatter(BaseFormatter):
    """JSON formatter, one object per TODO."""

    def to_record(self, todo: Todo) -> Dict[str, Any]:
        return {
            'Location': str(todo.location) if todo.location else None,
            'Line': todo.raw_line,
            'Description': todo.description,
            'Attributes': todo.attribute_map(),
        }

    def format(self, todos: List[Todo]) -> str:
        return json.dumps([self.to_record(todo) for todo in todos], indent=2, ensure_ascii=False)

    def get_file_extension(self) -> str:
        return ".json"


class YamlFormatter(BaseFormatter):
    """YAML formatter keeping every attribute with its quoting."""

    def format(self, todos: List[Todo]) -> str:
        return yaml.safe_dump(
            [todo.to_dict() for todo in todos],
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True
        )

    def get_file_extension(self) -> str:
        return ".yaml"


FORMATTERS: Dict[str, Type[BaseFormatter]] = {
    'text': TextFormatter,
    'json': JsonFormatter,
    'yaml': YamlFormatter,
}


def get_formatter(name: str) -> BaseFormatter:
    """
    Get a formatter by name.

    Raises:
        ConfigurationError: No formatter has that name
    """
    try:
        return FORMATTERS[name.lower()]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown output format '{name}'. Choose from: {', '.join(FORMATTERS)}"
        ) from None
