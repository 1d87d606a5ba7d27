"""
Тесты сборки многострочных сообщений.
"""

import pytest

from msgc.collapse import collapse
from msgc.compose import Composer, compose, split_trailing_indent
from msgc.rendering.renderer import RenderedFragment
from msgc.types import ComposeOptions, Placement


class TestCompose:
    """Тесты размещения фрагментов."""

    def test_empty(self):
        assert compose([]) == ""

    def test_inline_continues_line(self):
        assert compose([("a", "inline"), ("b", "inline")]) == "ab"

    def test_block_starts_new_line(self):
        assert compose([("a", "block"), ("b", "block")]) == "a\nb"

    def test_first_block_has_no_leading_newline(self):
        assert compose([("a", Placement.BLOCK)]) == "a"

    def test_inline_after_block(self):
        assert compose([("Files:", "block"), (" 3", "inline")]) == "Files: 3"

    def test_collapsed_block(self):
        names = collapse(["o1 -> n1", "o2 -> n2"], separator="\n", last_separator="\n")
        text = compose([("New names:", "block"), (names, "block")])
        assert text == "New names:\no1 -> n1\no2 -> n2"

    def test_fragment_objects(self):
        assert compose([(RenderedFragment("x"), "block"), (RenderedFragment("y"), "inline")]) == "xy"

    def test_order_preserved(self):
        parts = [(str(i), "block") for i in range(5)]
        assert compose(parts) == "0\n1\n2\n3\n4"

    def test_unknown_placement(self):
        with pytest.raises(ValueError):
            compose([("a", "sideways")])


class TestComposeIndent:
    """Тесты отступов."""

    def test_indent_option(self):
        text = compose([("a", "block"), ("b\nc", "block")], ComposeOptions(indent=2))
        assert text == "  a\n  b\n  c"

    def test_trailing_indent_applies_to_following_lines(self):
        text = compose([("Files:\n    ", "block"), ("a", "block"), ("b", "block")])
        assert text == "Files:\n    a\n    b"

    def test_trailing_indent_applies_inside_multiline_fragment(self):
        text = compose([("Files:\n  ", "block"), ("a\nb", "block")])
        assert text == "Files:\n  a\n  b"

    def test_trailing_indent_adds_to_base_indent(self):
        text = compose([("Files:\n  ", "block"), ("a", "block")], ComposeOptions(indent="\t"))
        assert text == "\tFiles:\n\t  a"

    def test_blank_lines_are_not_indented(self):
        text = compose([("a", "block"), ("", "block"), ("b", "block")], ComposeOptions(indent=4))
        assert text == "    a\n\n    b"

    @pytest.mark.parametrize("indent", ["x", True, -1])
    def test_invalid_indent(self, indent):
        with pytest.raises(ValueError):
            ComposeOptions(indent=indent)


class TestComposeNewlines:
    """Тесты переводов строк."""

    def test_trailing_newline_is_not_doubled(self):
        assert compose([("a\n", "block"), ("b", "block")]) == "a\nb"

    def test_trailing_blank_lines_collapse(self):
        assert compose([("a\n\n\n", "block")]) == "a\n"

    def test_trailing_blank_block_collapses(self):
        assert compose([("a", "block"), ("", "block"), ("", "block")]) == "a\n"

    def test_inline_with_newline(self):
        assert compose([("a", "block"), ("x\ny", "inline")]) == "ax\ny"

    def test_composer_is_reusable(self):
        composer = Composer()
        assert composer.compose([("a", "block")]) == composer.compose([("a", "block")])


def test_split_trailing_indent():
    assert split_trailing_indent("Files:\n    ") == ("Files:", "    ")
    assert split_trailing_indent("Files:\n") == ("Files:\n", None)
    assert split_trailing_indent("plain") == ("plain", None)
