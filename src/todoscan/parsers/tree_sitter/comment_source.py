"""
Comment extraction using tree-sitter.

This module turns a source file into the candidate lines a TODO annotation
may live on. For languages with a registered grammar the file is parsed
and only comment nodes are kept; anything else is treated as plain text
and every line of the file is a candidate.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, List, Optional, Union

from tree_sitter import Node, Parser

from ..annotation import MARKER
from ..languages import LanguageRegistry, default_registry


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceLine:
    """One physical line of a comment or plain-text file."""
    text: str
    line: int  # 1-based line number in the file


def split_lines(text: str) -> List[str]:
    """
    Split text on newlines, dropping line terminators.

    Only ``\\n`` separates lines so that numbering agrees with the rows
    tree-sitter reports.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def is_comment_node(node: Node) -> bool:
    """Grammars name comments ``comment``, ``line_comment``, ``block_comment`` and so on."""
    return node.type.endswith("comment")


class CommentSource:
    """
    Produces candidate lines from source files.

    The parser gets one line at a time together with its line number in
    the file; multi-line comments are split into their physical lines.
    """

    def __init__(self, registry: Optional[LanguageRegistry] = None, prefilter: bool = True):
        """
        Initialize the comment source.

        Args:
            registry: Extension -> grammar lookup. Uses the built-in table if None.
            prefilter: Skip comments that do not contain the TODO marker
        """
        self.registry = registry if registry is not None else default_registry()
        self.prefilter = prefilter

    def lines(
        self,
        file: str,
        source: Union[bytes, str],
        language: Optional[Any] = None
    ) -> Iterator[SourceLine]:
        """
        Yield candidate lines for a file in top-to-bottom order.

        Args:
            file: File name, used to pick the grammar by extension
            source: File content
            language: Grammar to use instead of looking one up

        Raises:
            LanguageNotAvailableError: The extension is registered but its
                grammar could not be loaded
        """
        if language is None:
            language = self.registry.lookup(Path(file).suffix)

        if language is None:
            logger.debug(f"No grammar for {file}, reading as plain text")
            yield from self._text_lines(source)
        else:
            logger.debug(f"Reading comments from {file} with tree-sitter")
            yield from self._comment_lines(source, language)

    def _text_lines(self, source: Union[bytes, str]) -> Iterator[SourceLine]:
        text = _decode(source)
        for index, line in enumerate(split_lines(text)):
            yield SourceLine(text=line, line=index + 1)

    def _comment_lines(self, source: Union[bytes, str], language: Any) -> Iterator[SourceLine]:
        data = source.encode("utf-8") if isinstance(source, str) else source
        parser = Parser(language)
        tree = parser.parse(data)

        for node in self._comment_nodes(tree.root_node):
            comment = data[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
            if self.prefilter and MARKER not in comment:
                continue

            row = node.start_point[0]
            for offset, line in enumerate(split_lines(comment)):
                yield SourceLine(text=line, line=row + offset + 1)

    def _comment_nodes(self, root: Node) -> Iterator[Node]:
        """Walk the tree in document order and yield comment nodes."""
        stack = [root]
        while stack:
            node = stack.pop()
            if is_comment_node(node):
                yield node
                continue
            stack.extend(reversed(node.children))


def _decode(source: Union[bytes, str]) -> str:
    if isinstance(source, bytes):
        return source.decode("utf-8", errors="replace")
    return source
