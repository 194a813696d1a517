"""
Tree-sitter based comment extraction.
"""

from .comment_source import CommentSource, SourceLine, split_lines

__all__ = ['CommentSource', 'SourceLine', 'split_lines']
