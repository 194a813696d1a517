"""
Assembly of Todo records from source files.

The assembler asks the comment source for candidate lines, runs the
annotation parser on each one and attaches the raw line and its location
to every match.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from .exceptions import SourceReadError
from .models import Location, Todo
from ..parsers.annotation import parse_annotation_line
from ..parsers.languages import LanguageRegistry
from ..parsers.tree_sitter.comment_source import CommentSource


logger = logging.getLogger(__name__)


class TodoAssembler:
    """
    Collects TODO annotations from files.

    Output order follows the source: comments in document order, lines in
    order within each comment, files in the order they were given.
    """

    def __init__(self, registry: Optional[LanguageRegistry] = None, prefilter: bool = True):
        self.comment_source = CommentSource(registry, prefilter=prefilter)

    @property
    def registry(self) -> LanguageRegistry:
        return self.comment_source.registry

    def parse_source(
        self,
        file: str,
        source: Union[bytes, str],
        language: Optional[Any] = None
    ) -> List[Todo]:
        """
        Find all annotations in a file's content.

        Args:
            file: File name, used for the location and to pick a grammar
            source: File content
            language: Grammar to use instead of looking one up by extension

        Returns:
            List of Todo objects in source order
        """
        todos = []
        for candidate in self.comment_source.lines(file, source, language):
            description, attributes, matched = parse_annotation_line(candidate.text)
            if not matched:
                continue
            todos.append(Todo(
                description=description,
                attributes=attributes,
                raw_line=candidate.text,
                location=Location(file=file, line=candidate.line)
            ))

        logger.debug(f"Found {len(todos)} TODOs in {file}")
        return todos

    def parse_file(self, path: Union[str, Path]) -> List[Todo]:
        """
        Read a file and find all annotations in it.

        Raises:
            SourceReadError: The file cannot be read
        """
        try:
            source = Path(path).read_bytes()
        except OSError as e:
            raise SourceReadError(str(path), e.strerror or str(e)) from e
        return self.parse_source(str(path), source)

    def parse_files(self, paths: Iterable[Union[str, Path]], workers: int = 1) -> List[Todo]:
        """
        Find annotations in many files.

        Args:
            paths: Files to read
            workers: Number of threads to parse with

        Returns:
            Todos of all files, grouped by file in the order given
        """
        paths = list(paths)
        if workers <= 1 or len(paths) <= 1:
            per_file = [self.parse_file(path) for path in paths]
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                per_file = list(executor.map(self.parse_file, paths))

        todos = []
        for file_todos in per_file:
            todos.extend(file_todos)
        return todos


def parse(
    file: str,
    source: Union[bytes, str],
    language: Optional[Any] = None,
    registry: Optional[LanguageRegistry] = None
) -> List[Todo]:
    """
    Convenience function to find annotations in a file's content.

    Args:
        file: File name
        source: File content
        language: Optional grammar override
        registry: Optional extension -> grammar lookup

    Returns:
        List of Todo objects
    """
    return TodoAssembler(registry).parse_source(file, source, language)
