"""
Тесты модели значений контекста.
"""

import datetime
from pathlib import PurePosixPath

import pytest

from msgc.values import Context, Mapping, Scalar, Sequence, styled, to_value


class TestToValue:
    """Тесты преобразования данных Python в Value."""

    @pytest.mark.parametrize("data", [None, "text", 0, 3.5, True, False])
    def test_scalars(self, data):
        value = to_value(data)
        assert isinstance(value, Scalar)
        assert value.value is data or value.value == data
        assert value.kind == "scalar"

    def test_path_like(self):
        assert to_value(PurePosixPath("a/b")) == Scalar("a/b")

    def test_dates_become_iso_text(self):
        assert to_value(datetime.date(2024, 1, 1)) == Scalar("2024-01-01")
        assert to_value(datetime.datetime(2024, 1, 1, 9, 30)) == Scalar("2024-01-01T09:30:00")
        assert to_value(datetime.time(9, 30)) == Scalar("09:30:00")

    def test_nested(self):
        value = to_value({"user": {"names": ["a", "b"]}})
        assert isinstance(value, Mapping)
        names = value.get("user").get("names")
        assert isinstance(names, Sequence)
        assert names.items == (Scalar("a"), Scalar("b"))
        assert len(names) == 2

    def test_value_passes_through(self):
        scalar = Scalar("x", style="code")
        assert to_value(scalar) is scalar

    def test_unsupported_type(self):
        with pytest.raises(TypeError, match="set"):
            to_value({1, 2})

    def test_mapping_keys_become_strings(self):
        value = to_value({1: "one"})
        assert value.get("1") == Scalar("one")

    def test_mapping_is_hashable_and_immutable(self):
        value = to_value({"a": 1})
        assert hash(value) == hash(to_value({"a": 1}))
        with pytest.raises(TypeError):
            value.fields["b"] = Scalar(2)


class TestStyled:
    def test_scalar(self):
        assert styled("ls", "code") == Scalar("ls", style="code")

    def test_sequence(self):
        value = styled(["a", "b"], "quote")
        assert isinstance(value, Sequence)
        assert value.style == "quote"
        assert value.items[0].style is None

    def test_mapping_rejected(self):
        with pytest.raises(TypeError):
            styled({"a": 1}, "code")


class TestContext:
    """Тесты неизменяемого контекста."""

    def test_converts_values(self):
        ctx = Context({"n": 3, "items": ["x"]})
        assert ctx["n"] == Scalar(3)
        assert isinstance(ctx["items"], Sequence)
        assert sorted(ctx) == ["items", "n"]
        assert len(ctx) == 2

    def test_from_mapping_merges_extra(self):
        ctx = Context.from_mapping({"a": 1}, b=2)
        assert set(ctx) == {"a", "b"}

    def test_from_mapping_reuses_context(self):
        ctx = Context({"a": 1})
        assert Context.from_mapping(ctx) is ctx

    def test_caller_changes_do_not_leak(self):
        """Контекст не зависит от исходных объектов после создания."""
        data = {"items": ["a"]}
        ctx = Context(data)
        data["items"].append("b")
        data["new"] = 1
        assert len(ctx["items"]) == 1
        assert "new" not in ctx
