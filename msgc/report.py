"""
Schemas for JSON output of the CLI.

Field names are exposed in camelCase (``sourceText``) and accepted in either form.
"""

from __future__ import annotations

import json
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import MsgcError, ParseError
from .styles.capability import Capability
from .styles.registry import StyleRegistry
from .template import Expression, Template, parse_template
from .template.lexer import DEFAULT_DELIMITERS, Delimiters

PROTOCOL_VERSION = 1


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ErrorInfo(_Schema):
    kind: str
    offset: int
    source_text: str = Field(alias="sourceText")
    message: str
    line: Optional[int] = None
    column: Optional[int] = None


class SegmentInfo(_Schema):
    type: Literal["literal", "expression"]
    offset: int
    text: Optional[str] = None
    source_text: Optional[str] = Field(default=None, alias="sourceText")
    base: Optional[str] = None
    accessors: List[str] = Field(default_factory=list)
    style: Optional[str] = None


class TemplateReport(_Schema):
    protocol: int = PROTOCOL_VERSION
    ok: bool
    template: str
    names: List[str] = Field(default_factory=list)
    segments: List[SegmentInfo] = Field(default_factory=list)
    error: Optional[ErrorInfo] = None


class StyleInfo(_Schema):
    name: str
    sample: str


class StylesReport(_Schema):
    protocol: int = PROTOCOL_VERSION
    capability: str
    styles: List[StyleInfo] = Field(default_factory=list)


def error_info(error: MsgcError) -> ErrorInfo:
    """Converts a structured error into its schema."""
    return ErrorInfo(
        kind=error.kind,
        offset=error.offset,
        source_text=error.source_text,
        message=error.describe(),
        line=error.line if isinstance(error, ParseError) else None,
        column=error.column if isinstance(error, ParseError) else None,
    )


def _segment_info(segment) -> SegmentInfo:
    if isinstance(segment, Expression):
        return SegmentInfo(
            type="expression",
            offset=segment.offset,
            source_text=segment.source_text,
            base=segment.path.base,
            accessors=[str(a) for a in segment.path.accessors],
            style=segment.style,
        )
    return SegmentInfo(type="literal", offset=segment.offset, text=segment.text)


def template_report(template: Template) -> TemplateReport:
    return TemplateReport(
        ok=True,
        template=template.source,
        names=list(template.names()),
        segments=[_segment_info(s) for s in template.segments],
    )


def check_template(source: str, delimiters: Delimiters = DEFAULT_DELIMITERS) -> TemplateReport:
    """Parses a template and reports its segments or the parse error."""
    try:
        template = parse_template(source, delimiters=delimiters, cached=False)
    except ParseError as e:
        return TemplateReport(ok=False, template=source, error=error_info(e))
    return template_report(template)


def styles_report(registry: StyleRegistry, capability: Capability, sample: str = "text") -> StylesReport:
    return StylesReport(
        capability=capability.value,
        styles=[
            StyleInfo(name=name, sample=registry.apply(name, sample, capability))
            for name in registry.names()
        ],
    )


def dumps(model: BaseModel) -> str:
    """
    Compact JSON for CLI responses.
    No prettify, ensure_ascii=False, no trailing newline (the CLI decides).
    """
    return json.dumps(model.model_dump(mode="json", by_alias=True, exclude_none=True), ensure_ascii=False)


__all__ = [
    "PROTOCOL_VERSION",
    "ErrorInfo",
    "SegmentInfo",
    "TemplateReport",
    "StyleInfo",
    "StylesReport",
    "error_info",
    "template_report",
    "check_template",
    "styles_report",
    "dumps",
]
