"""
Exceptions raised by the message composition engine.

All expected errors derive from MsgcUserError: they describe a problem the
caller can fix (a malformed template, a missing context value, a bad config
file) and are rendered as clean messages by the CLI.

Template errors are structured: each carries ``kind``, ``offset`` and
``source_text`` so the caller can point at the exact fault location.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


class MsgcUserError(Exception):
    """
    Base class for all user-facing errors.

    Programming errors and bugs should NOT inherit from MsgcUserError,
    they propagate with full tracebacks.
    """
    pass


@dataclass
class MsgcError(MsgcUserError):
    """Template-related error with position information."""
    offset: int
    source_text: str

    kind = "MsgcError"

    def describe(self) -> str:
        return "error"

    def __str__(self) -> str:
        return f"{self.kind} at offset {self.offset}: {self.describe()}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "offset": self.offset,
            "sourceText": self.source_text,
            "message": self.describe(),
        }


# ---- Parse errors ----

@dataclass
class ParseError(MsgcError):
    """Template syntax error."""
    line: int = 1
    column: int = 1

    kind = "ParseError"

    def __str__(self) -> str:
        return f"{self.kind} at {self.line}:{self.column}: {self.describe()}"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["line"] = self.line
        data["column"] = self.column
        return data


@dataclass
class UnbalancedDelimiter(ParseError):
    """Delimiter opened but never closed (or opened inside an expression)."""
    delimiter: str = "{"

    kind = "UnbalancedDelimiter"

    def describe(self) -> str:
        return f"unbalanced delimiter {self.delimiter!r}"


@dataclass
class InvalidEscape(ParseError):
    """Lone delimiter character that is neither doubled nor matched."""
    delimiter: str = "}"

    kind = "InvalidEscape"

    def describe(self) -> str:
        return f"lone {self.delimiter!r} must be doubled to produce a literal {self.delimiter!r}"


@dataclass
class InvalidExpression(ParseError):
    """Malformed expression between delimiters."""
    reason: str = "invalid expression"

    kind = "InvalidExpression"

    def describe(self) -> str:
        return f"{self.reason} in expression {self.source_text!r}"


# ---- Evaluation errors ----

@dataclass
class EvalError(MsgcError):
    """Expression could not be resolved against the context."""

    kind = "EvalError"


@dataclass
class UnresolvedReference(EvalError):
    """Base name is absent from the context."""
    name: str = ""
    available: Optional[List[str]] = None

    kind = "UnresolvedReference"

    def describe(self) -> str:
        msg = f"name {self.name!r} is not defined in context"
        if self.available:
            msg += f" (available: {', '.join(self.available)})"
        return msg


@dataclass
class IndexOutOfRange(EvalError):
    """Positional index outside of the sequence bounds."""
    index: int = 0
    length: int = 0

    kind = "IndexOutOfRange"

    def describe(self) -> str:
        return f"index {self.index} out of range for sequence of length {self.length} in {self.source_text!r}"


@dataclass
class FieldNotFound(EvalError):
    """Field name is absent from a mapping."""
    field_name: str = ""

    kind = "FieldNotFound"

    def describe(self) -> str:
        return f"field {self.field_name!r} not found in {self.source_text!r}"


@dataclass
class TypeMismatch(EvalError):
    """Operation applied to a value of the wrong kind."""
    expected: str = ""
    actual: str = ""

    kind = "TypeMismatch"

    def describe(self) -> str:
        return f"expected {self.expected}, got {self.actual} in {self.source_text!r}"


# ---- Render errors ----

@dataclass
class RenderError(MsgcError):
    """Rendering failure."""

    kind = "RenderError"


@dataclass
class UnsupportedStyle(RenderError):
    """Style name is not registered and no fallback exists."""
    style: str = ""

    kind = "UnsupportedStyle"

    def describe(self) -> str:
        return f"style {self.style!r} is not registered"


# ---- Configuration ----

class ConfigError(MsgcUserError, ValueError):
    """Malformed configuration file or value."""
    pass


__all__ = [
    "MsgcUserError",
    "MsgcError",
    "ParseError",
    "UnbalancedDelimiter",
    "InvalidEscape",
    "InvalidExpression",
    "EvalError",
    "UnresolvedReference",
    "IndexOutOfRange",
    "FieldNotFound",
    "TypeMismatch",
    "RenderError",
    "UnsupportedStyle",
    "ConfigError",
]
