"""
Unit tests for the data models.
"""

from todoscan.core.models import Attribute, Location, Todo


class TestAttribute:
    """Tests for Attribute."""

    def test_defaults(self):
        attr = Attribute("key")
        assert attr.value == ""
        assert attr.quoted is False
        assert attr.is_bare

    def test_quoted_empty_is_not_bare(self):
        assert not Attribute("key", "", quoted=True).is_bare

    def test_to_dict(self):
        assert Attribute("k", "v", True).to_dict() == {'key': 'k', 'value': 'v', 'quoted': True}


class TestLocation:
    """Tests for Location."""

    def test_str(self):
        assert str(Location("src/main.go", 12)) == "src/main.go:12"

    def test_hashable(self):
        assert len({Location("a", 1), Location("a", 1)}) == 1


class TestTodo:
    """Tests for Todo."""

    def test_get_returns_first_match(self):
        todo = Todo(attributes=[Attribute("a", "1"), Attribute("a", "2")])
        assert todo.get("a") == "1"
        assert todo.get("missing") is None
        assert todo.get("missing", "x") == "x"

    def test_attribute_map_last_wins(self):
        todo = Todo(attributes=[Attribute("a", "1"), Attribute("b"), Attribute("a", "2")])
        assert todo.attribute_map() == {"a": "2", "b": ""}
        # duplicates are still kept in order
        assert len(todo.attributes) == 3

    def test_attributes_not_shared(self):
        first, second = Todo(), Todo()
        first.attributes.append(Attribute("x"))
        assert second.attributes == []

    def test_to_dict(self):
        todo = Todo(
            description="fix",
            attributes=[Attribute("p", "high")],
            raw_line="// TODO(p=high): fix",
            location=Location("a.go", 3),
        )
        assert todo.to_dict() == {
            'location': 'a.go:3',
            'file': 'a.go',
            'line': 3,
            'raw_line': '// TODO(p=high): fix',
            'description': 'fix',
            'attributes': [{'key': 'p', 'value': 'high', 'quoted': False}],
        }

    def test_to_dict_without_location(self):
        data = Todo(description="x").to_dict()
        assert data['location'] is None
        assert data['line'] is None
