"""
Unit tests for assembling Todo records from files.
"""

import pytest

from todoscan.core.assembler import TodoAssembler, parse
from todoscan.core.exceptions import SourceReadError
from todoscan.core.models import Attribute, Location, Todo
from todoscan.parsers.languages import LanguageRegistry


class TestPlainTextAssembly:
    """Assembly for files without a grammar."""

    def test_non_tree_sitter_file(self):
        assembler = TodoAssembler(LanguageRegistry())
        todos = assembler.parse_source("some.txt", b"// TODO(): fix this\nTODO: fix this again")
        assert todos == [
            Todo(
                description="fix this",
                raw_line="// TODO(): fix this",
                location=Location(file="some.txt", line=1),
            ),
            Todo(
                description="fix this again",
                raw_line="TODO: fix this again",
                location=Location(file="some.txt", line=2),
            ),
        ]

    def test_malformed_lines_skipped(self):
        source = "TODO fix\nTODO(a=1: x\nTODO(a=1): ok\n"
        todos = parse("notes.txt", source, registry=LanguageRegistry())
        assert len(todos) == 1
        assert todos[0].location.line == 3
        assert todos[0].attributes == [Attribute("a", "1")]

    def test_parse_file(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("nothing\n  TODO(prio=high): write docs\n")

        todos = TodoAssembler(LanguageRegistry()).parse_file(path)
        assert len(todos) == 1
        assert todos[0].location == Location(str(path), 2)
        assert todos[0].get("prio") == "high"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(SourceReadError) as exc_info:
            TodoAssembler(LanguageRegistry()).parse_file(tmp_path / "missing.txt")
        assert "missing.txt" in exc_info.value.path

    @pytest.mark.parametrize("workers", [1, 4])
    def test_parse_files_keeps_input_order(self, tmp_path, workers):
        paths = []
        for index in range(6):
            path = tmp_path / f"file{index}.txt"
            path.write_text(f"TODO: first {index}\nTODO: second {index}\n")
            paths.append(path)

        todos = TodoAssembler(LanguageRegistry()).parse_files(reversed(paths), workers=workers)
        assert [t.description for t in todos] == [
            f"{which} {index}"
            for index in reversed(range(6))
            for which in ("first", "second")
        ]


class TestTreeSitterAssembly:
    """Assembly using real grammars."""

    @pytest.fixture(autouse=True)
    def _require_grammars(self):
        pytest.importorskip("tree_sitter_language_pack")

    def test_simple(self):
        todos = parse("test.go", b"// TODO: fix this\n")
        assert todos == [
            Todo(
                description="fix this",
                raw_line="// TODO: fix this",
                location=Location(file="test.go", line=1),
            )
        ]

    def test_infer_typescript(self):
        todos = parse("code.ts", b"/* \n TODO: does this work ?\n */")
        assert todos == [
            Todo(
                description="does this work ?",
                raw_line=" TODO: does this work ?",
                location=Location(file="code.ts", line=2),
            )
        ]

    def test_attributes_and_order(self):
        source = (
            "package main\n"
            "\n"
            "// TODO(priority=high): Fix this critical issue\n"
            "func main() {\n"
            "\t// TODO(author=\"john\", issue=123): Add proper implementation\n"
            "\ts := \"TODO: inside a string\"\n"
            "\t_ = s\n"
            "}\n"
        )
        todos = parse("main.go", source)
        assert [t.location.line for t in todos] == [3, 5]
        assert todos[0].attributes == [Attribute("priority", "high")]
        assert todos[1].attributes == [
            Attribute("author", "john", quoted=True),
            Attribute("issue", "123"),
        ]
