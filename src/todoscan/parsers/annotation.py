"""
Parser for TODO annotations found in a single line of text.

An annotation looks like::

    TODO: description
    TODO(key, key=value, key="quoted, value"): description

Everything before the first ``TODO`` in the line is ignored, so the same
grammar applies whatever comment syntax surrounds it. The parser reads the
line one code point at a time with a single character of lookahead.

Any grammar violation rejects the whole line: the caller gets a non-match,
never an exception and never a partially parsed annotation.
"""

from typing import List, Optional, Tuple

from ..core.models import Attribute, Todo


MARKER = "TODO"

# Characters that end an attribute key besides whitespace
KEY_TERMINATORS = ("=", ",", ")")

# Characters that end an unquoted value besides whitespace
VALUE_TERMINATORS = (",", ")")

# str.isspace also accepts the ASCII separators U+001C..U+001F, which are
# not Unicode White_Space
INFORMATION_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def is_space(ch: str) -> bool:
    """Unicode White_Space test for a single code point."""
    return ch.isspace() and ch not in INFORMATION_SEPARATORS


def trim(text: str) -> str:
    """Strip leading and trailing Unicode White_Space."""
    start, end = 0, len(text)
    while start < end and is_space(text[start]):
        start += 1
    while end > start and is_space(text[end - 1]):
        end -= 1
    return text[start:end]


class AnnotationSyntaxError(ValueError):
    """Raised internally when a line breaks the annotation grammar."""
    pass


class LineReader:
    """
    Code point reader over a string with one character of lookahead.

    ``peek`` and ``read`` return an empty string at end of input.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        """Return the next code point without consuming it."""
        if self.at_end():
            return ""
        return self.text[self.pos]

    def read(self) -> str:
        """Consume and return the next code point."""
        ch = self.peek()
        if ch:
            self.pos += 1
        return ch

    def unread(self) -> None:
        """Step back one code point."""
        if self.pos > 0:
            self.pos -= 1

    def skip_whitespace(self) -> int:
        """Skip a run of Unicode whitespace and return how many were skipped."""
        start = self.pos
        while is_space(self.peek()):
            self.pos += 1
        return self.pos - start

    def read_rest(self) -> str:
        """Consume everything left in the line."""
        rest = self.text[self.pos:]
        self.pos = len(self.text)
        return rest


def parse_annotation_line(line: str) -> Tuple[str, List[Attribute], bool]:
    """
    Parse a single line that may contain a TODO annotation.

    Args:
        line: One physical line of text without its trailing newline

    Returns:
        Tuple of (description, attributes, matched). When ``matched`` is
        False the line is ordinary text and the other two values are empty.
    """
    marker = line.find(MARKER)
    if marker < 0:
        return "", [], False

    reader = LineReader(line[marker + len(MARKER):])
    try:
        reader.skip_whitespace()

        attributes: List[Attribute] = []
        if reader.peek() == "(":
            attributes = _parse_attributes(reader)

        reader.skip_whitespace()
        if reader.peek() != ":":
            raise AnnotationSyntaxError("expected ':' after TODO marker")
        reader.read()

        reader.skip_whitespace()
        description = trim(reader.read_rest())
    except AnnotationSyntaxError:
        return "", [], False

    return description, attributes, True


def parse_line(line: str) -> Optional[Todo]:
    """
    Parse a line into a Todo.

    Only ``description`` and ``attributes`` are filled in; the caller
    attaches ``raw_line`` and ``location``.

    Returns:
        The parsed Todo, or None if the line is not an annotation
    """
    description, attributes, matched = parse_annotation_line(line)
    if not matched:
        return None
    return Todo(description=description, attributes=attributes)


def _parse_attributes(reader: LineReader) -> List[Attribute]:
    """Consume a parenthesized, comma separated attribute list."""
    if reader.read() != "(":
        raise AnnotationSyntaxError("expected '('")

    attributes: List[Attribute] = []
    while True:
        reader.skip_whitespace()
        ch = reader.peek()
        if not ch:
            raise AnnotationSyntaxError("unterminated attribute list")
        if ch == ")":
            reader.read()
            return attributes

        attributes.append(_parse_attribute(reader))

        # a missing comma falls through to another attribute
        reader.skip_whitespace()
        if reader.peek() == ",":
            reader.read()


def _parse_attribute(reader: LineReader) -> Attribute:
    """
    Parse one attribute.

    Handles ``key``, ``key=value`` and ``key="value"``, with optional
    whitespace around the ``=``.
    """
    key = trim(_read_key(reader))

    ch = reader.peek()
    if not ch or ch in (",", ")"):
        return Attribute(key=key)

    if is_space(ch):
        reader.skip_whitespace()
        if reader.peek() != "=":
            return Attribute(key=key)
        ch = "="

    if ch == "=":
        reader.read()
        reader.skip_whitespace()
        value, quoted = _parse_value(reader)
        return Attribute(key=key, value=value, quoted=quoted)

    raise AnnotationSyntaxError(f"unexpected character {ch!r} in attribute list")


def _read_key(reader: LineReader) -> str:
    chars = []
    while True:
        ch = reader.peek()
        if not ch or ch in KEY_TERMINATORS or is_space(ch):
            break
        chars.append(reader.read())
    return "".join(chars)


def _parse_value(reader: LineReader) -> Tuple[str, bool]:
    """Parse a quoted or unquoted value. Returns (value, quoted)."""
    if reader.peek() == '"':
        return _read_quoted_value(reader), True
    return _read_unquoted_value(reader), False


def _read_quoted_value(reader: LineReader) -> str:
    """
    Read a double quoted value up to the matching unescaped quote.

    ``\\\\`` and ``\\"`` are the only escapes; any other backslash sequence
    is kept as written.
    """
    if reader.read() != '"':
        raise AnnotationSyntaxError("expected opening quote")

    chars = []
    while True:
        ch = reader.read()
        if not ch:
            raise AnnotationSyntaxError("unterminated quoted value")
        if ch == "\\":
            escaped = reader.read()
            if not escaped:
                raise AnnotationSyntaxError("unterminated quoted value")
            if escaped in ("\\", '"'):
                chars.append(escaped)
            else:
                chars.append(ch)
                chars.append(escaped)
            continue
        if ch == '"':
            break
        chars.append(ch)
    return "".join(chars)


def _read_unquoted_value(reader: LineReader) -> str:
    """Read a value up to a comma, closing paren or whitespace, which is left unread."""
    chars = []
    while True:
        ch = reader.read()
        if not ch:
            break
        if ch in VALUE_TERMINATORS or is_space(ch):
            reader.unread()
            break
        chars.append(ch)
    return trim("".join(chars))


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def format_annotation(todo: Todo) -> str:
    """
    Render a Todo back into annotation text.

    Quoted attributes are written quoted, attributes without a value are
    written as a bare key. Parsing the result gives back the same
    attributes and description.
    """
    parts = []
    for attr in todo.attributes:
        if attr.quoted:
            parts.append(f"{attr.key}={_quote(attr.value)}")
        elif attr.value:
            parts.append(f"{attr.key}={attr.value}")
        else:
            parts.append(attr.key)

    head = MARKER
    if parts:
        inner = ", ".join(parts)
        # an empty bare key in last place needs its own comma to survive
        if parts[-1] == "":
            inner += ","
        head += "(" + inner + ")"
    if todo.description:
        return f"{head}: {todo.description}"
    return f"{head}:"
