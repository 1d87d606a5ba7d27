"""
Тесты реестра стилей.
"""

import logging
import threading

import pytest

from msgc.errors import UnsupportedStyle
from msgc.styles import (
    BUILTIN_STYLES,
    Capability,
    StyleRegistry,
    StyleTransform,
    get_registry,
    register_style,
    reset_registry,
    sgr,
)


class TestStyleTransform:
    """Тесты декларативного преобразования стиля."""

    def test_none_is_identity(self):
        t = StyleTransform(prefix="'", suffix="'", sgr=("1", "22"))
        assert t.apply("x", Capability.NONE) == "x"

    def test_ascii_markers(self):
        t = StyleTransform(prefix="'", suffix="'", sgr=("1", "22"))
        assert t.apply("x", Capability.ASCII) == "'x'"

    def test_markup_sgr(self):
        t = StyleTransform(prefix="*", suffix="*", sgr=("1", "22"))
        assert t.apply("x", Capability.MARKUP) == "\x1b[1mx\x1b[22m"

    def test_markup_keeps_markers(self):
        t = StyleTransform(prefix="`", suffix="`", sgr=("90", "39"), keep_markers=True)
        assert t.apply("x", Capability.MARKUP) == "\x1b[90m`x`\x1b[39m"

    def test_markup_without_sgr_uses_markers(self):
        t = StyleTransform(prefix="'", suffix="'")
        assert t.apply("x", Capability.MARKUP) == "'x'"

    def test_markup_merges_nested_sequences(self):
        """Вложенный стиль сливается с внешним в одну SGR последовательность."""
        inner = StyleTransform(sgr=("36", "39")).apply("p", Capability.MARKUP)
        outer = StyleTransform(sgr=("1", "22")).apply(inner, Capability.MARKUP)
        assert outer == "\x1b[1;36mp\x1b[39;22m"

    def test_to_dict(self):
        assert StyleTransform(prefix="'", suffix="'").to_dict() == {"prefix": "'", "suffix": "'"}
        assert BUILTIN_STYLES["code"].to_dict()["sgr"] == ["90", "39"]

    def test_sgr_helper(self):
        assert sgr("0") == "\x1b[0m"


class TestStyleRegistry:
    """Тесты регистрации и разрешения стилей."""

    def test_builtins_installed(self):
        registry = StyleRegistry()
        for name in ("quote", "code", "strong", "emph", "path", "value", "field"):
            assert name in registry

    def test_without_builtins(self):
        assert StyleRegistry(install_builtins=False).names() == []

    @pytest.mark.parametrize("name,expected", [
        ("quote", "'x'"),
        ("code", "`x`"),
        ("strong", "*x*"),
        ("emph", "_x_"),
        ("path", "'x'"),
        ("value", "'x'"),
        ("field", "x"),
    ])
    def test_builtin_ascii(self, name, expected):
        assert StyleRegistry().apply(name, "x", Capability.ASCII) == expected

    def test_none_capability_never_styles(self):
        registry = StyleRegistry()
        for name in registry.names():
            assert registry.apply(name, "x", Capability.NONE) == "x"

    def test_none_capability_skips_lookup_even_when_strict(self):
        registry = StyleRegistry(fallback=None)
        assert registry.apply("nope", "x", Capability.NONE, strict=True) == "x"

    def test_callable_style(self):
        registry = StyleRegistry()
        registry.register("upper", str.upper)
        assert registry.apply("upper", "abc", Capability.ASCII) == "ABC"

    def test_overwrite_warns(self, caplog):
        registry = StyleRegistry()
        with caplog.at_level(logging.WARNING, logger="msgc"):
            registry.register("quote", StyleTransform(prefix='"', suffix='"'))
        assert "overwrites existing style" in caplog.text
        assert registry.apply("quote", "x", Capability.ASCII) == '"x"'

    @pytest.mark.parametrize("name,transform", [("", str.upper), ("  ", str.upper), ("ok", "not callable")])
    def test_register_invalid(self, name, transform):
        with pytest.raises(ValueError):
            StyleRegistry().register(name, transform)

    def test_unknown_falls_back_with_single_warning(self, caplog):
        registry = StyleRegistry()
        with caplog.at_level(logging.WARNING, logger="msgc"):
            assert registry.apply("sparkle", "x", Capability.ASCII) == "x"
            assert registry.apply("sparkle", "y", Capability.ASCII) == "y"
        assert caplog.text.count("Unknown style 'sparkle'") == 1

    def test_unknown_style_warns_once_across_threads(self, caplog):
        registry = StyleRegistry()
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            for _ in range(50):
                registry.apply("sparkle", "x", Capability.ASCII)

        with caplog.at_level(logging.WARNING, logger="msgc"):
            threads = [threading.Thread(target=worker) for _ in range(8)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()
        assert caplog.text.count("Unknown style 'sparkle'") == 1

    def test_unknown_strict(self):
        with pytest.raises(UnsupportedStyle) as exc:
            StyleRegistry().resolve("sparkle", Capability.ASCII, strict=True)
        assert exc.value.style == "sparkle"

    def test_unknown_without_fallback(self):
        with pytest.raises(UnsupportedStyle):
            StyleRegistry(fallback=None).resolve("sparkle", Capability.MARKUP)

    def test_unregister(self):
        registry = StyleRegistry()
        registry.unregister("quote")
        registry.unregister("quote")
        assert "quote" not in registry


class TestProcessRegistry:
    def test_register_style_goes_to_process_registry(self):
        register_style("shout", lambda s: s.upper() + "!")
        assert get_registry().apply("shout", "hi", Capability.ASCII) == "HI!"

    def test_reset(self):
        register_style("shout", str.upper)
        fresh = reset_registry()
        assert "shout" not in fresh
        assert get_registry() is fresh
