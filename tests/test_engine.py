"""
Тесты публичного API движка.

Проверяет сквозные свойства: разбор → вычисление → рендеринг → сборка.
"""

import threading

import pytest

import msgc
from msgc import (
    Capability,
    CollapseOptions,
    IndexOutOfRange,
    InvalidEscape,
    RenderOptions,
    StyleRegistry,
    UnresolvedReference,
    UnsupportedStyle,
    collapse,
    compose,
    parse_template,
    register_style,
    render,
    render_value,
    styled,
    try_render,
)


class TestRenderProperties:
    """Сквозные свойства рендеринга."""

    @pytest.mark.parametrize("source", ["", "plain", "multi\nline text", "punctuation: [a].b"])
    @pytest.mark.parametrize("context", [{}, {"x": 1}, {"plain": ["a", "b"]}])
    def test_template_without_expressions_renders_source(self, source, context):
        template = parse_template(source)
        assert render(template, context).text == template.source

    def test_escaping(self):
        assert render(parse_template("{{x}}"), {}).text == "{x}"
        assert render("}}{{").text == "}{"

    def test_caching_path(self):
        assert render(parse_template("Caching {path}"), {"path": "path/to/a/thing"}).text == "Caching path/to/a/thing"

    def test_index_out_of_range_offset(self):
        with pytest.raises(IndexOutOfRange) as exc:
            render(parse_template("{a[5]}"), {"a": ["x", "y"]})
        assert exc.value.offset == 1
        assert exc.value.source_text == "a[5]"

    def test_values_as_keywords(self):
        assert render("{a} and {b}", a=1, b=False).text == "1 and false"

    def test_keywords_extend_context(self):
        assert render("{a}{b}", {"a": "x"}, b="y").text == "xy"

    def test_sequence_expression(self):
        assert render("Renaming {names}", names=["a", "b", "c"]).text == "Renaming a, b and c"

    def test_styled_expression_ascii(self):
        options = RenderOptions(capability=Capability.ASCII)
        assert render("Unknown key {key:quote}", options=options, key="x").text == "Unknown key 'x'"

    @pytest.mark.parametrize("value", ["x", 3, None, True, ["a", "b"], ["only"], []])
    @pytest.mark.parametrize("style", ["quote", "code", "strong", "unregistered"])
    def test_capability_none_is_identity(self, value, style):
        """При capability=none стиль не меняет ни байта."""
        options = RenderOptions(capability=Capability.NONE)
        assert render_value(value, style, options) == render_value(value, None, options)

    def test_capability_none_ignores_strict_styles(self):
        options = RenderOptions(capability=Capability.NONE, strict_styles=True)
        assert render("{a:sparkle}", options=options, a="x").text == "x"

    def test_unknown_style_degrades_to_plain(self):
        options = RenderOptions(capability=Capability.ASCII)
        assert render("{a:sparkle}", options=options, a="x").text == "x"

    def test_unknown_style_strict(self):
        options = RenderOptions(capability=Capability.ASCII, strict_styles=True)
        with pytest.raises(UnsupportedStyle) as exc:
            render("see {a:sparkle}", options=options, a="x")
        assert exc.value.offset == 5
        assert exc.value.source_text == "a:sparkle"

    def test_unknown_style_without_fallback(self):
        registry = StyleRegistry(fallback=None)
        options = RenderOptions(capability=Capability.MARKUP)
        with pytest.raises(UnsupportedStyle):
            render("{a:sparkle}", options=options, registry=registry, a="x")

    def test_register_style_is_used_by_render(self):
        register_style("shout", lambda s: s.upper())
        options = RenderOptions(capability=Capability.ASCII)
        assert render("{a:shout}", options=options, a="hey").text == "HEY"

    def test_collapse_options_apply_to_sequences(self):
        options = RenderOptions(collapse=CollapseOptions(oxford_comma=True, max_items=2))
        assert render("{xs}", options=options, xs=["a", "b", "c", "d"]).text == "a, b, and 2 more"

    def test_caller_data_is_not_mutated(self):
        data = {"items": ["b", "a"], "user": {"name": "x"}}
        options = RenderOptions(collapse=CollapseOptions(sort=True))
        assert render("{items} {user.name}", data, options).text == "a and b x"
        assert data == {"items": ["b", "a"], "user": {"name": "x"}}

    def test_element_styles(self):
        options = RenderOptions(capability=Capability.ASCII)
        files = [styled("a.py", "path"), "b.py"]
        assert render("{files:code}", options=options, files=files).text == "'a.py' and `b.py`"

    def test_concurrent_renders_share_template(self):
        template = parse_template("{who} has {n} items")
        results = {}

        def worker(i):
            results[i] = render(template, {"who": f"u{i}", "n": i}).text

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert results == {i: f"u{i} has {i} items" for i in range(16)}


class TestTryRender:
    """Тесты результата рендеринга в виде значения."""

    def test_ok(self):
        result = try_render("hi {x}", x="there")
        assert result.ok
        assert result.text == "hi there"

    def test_parse_error(self):
        result = try_render("bad }")
        assert not result.ok
        assert isinstance(result.error, InvalidEscape)
        assert result.error.offset == 4
        with pytest.raises(ValueError):
            result.text

    def test_eval_error(self):
        result = try_render("{missing}")
        assert isinstance(result.error, UnresolvedReference)
        assert result.error.to_dict()["sourceText"] == "missing"


class TestFacade:
    def test_collapse_reexport(self):
        assert collapse(["a", "b", "c"], oxford_comma=True) == "a, b, and c"
        assert collapse(["'this'", "'that'"], last_separator=" and ") == "'this' and 'that'"

    def test_compose_reexport(self):
        names = collapse(["o1 -> n1", "o2 -> n2"], separator="\n", last_separator="\n")
        assert compose([("New names:", "block"), (names, "block")]) == "New names:\no1 -> n1\no2 -> n2"

    def test_public_names(self):
        for name in msgc.__all__:
            assert hasattr(msgc, name)
