import json

from msgc.report import PROTOCOL_VERSION, TemplateReport, check_template, dumps, styles_report
from msgc.styles import Capability, StyleRegistry


def test_check_ok():
    report = check_template("Hi {user.name:strong}, {{x}}")
    assert report.ok
    assert report.names == ["user"]
    data = json.loads(dumps(report))
    assert data["protocol"] == PROTOCOL_VERSION
    assert "error" not in data
    assert data["segments"] == [
        {"type": "literal", "offset": 0, "text": "Hi ", "accessors": []},
        {
            "type": "expression",
            "offset": 4,
            "sourceText": "user.name:strong",
            "base": "user",
            "accessors": [".name"],
            "style": "strong",
        },
        {"type": "literal", "offset": 21, "text": ", {x}", "accessors": []},
    ]


def test_check_error():
    report = check_template("Hello {name")
    assert not report.ok
    data = json.loads(dumps(report))
    assert data["error"] == {
        "kind": "UnbalancedDelimiter",
        "offset": 6,
        "sourceText": "{name",
        "message": "unbalanced delimiter '{'",
        "line": 1,
        "column": 7,
    }
    assert data["segments"] == []


def test_check_does_not_use_cache():
    check_template("x {y}")
    from msgc.template.cache import get_template_cache
    assert len(get_template_cache()) == 0


def test_report_accepts_camel_case():
    report = TemplateReport.model_validate({
        "ok": False,
        "template": "}",
        "error": {"kind": "InvalidEscape", "offset": 0, "sourceText": "}", "message": "m"},
    })
    assert report.error.source_text == "}"


def test_styles_report():
    report = styles_report(StyleRegistry(), Capability.ASCII, sample="x")
    samples = {s.name: s.sample for s in report.styles}
    assert samples["quote"] == "'x'"
    assert samples["code"] == "`x`"
    assert report.capability == "ascii"
    assert dumps(report).startswith('{"protocol": 1, "capability": "ascii"')


def test_dumps_keeps_unicode():
    report = check_template("«{a}»")
    assert "«" in dumps(report)
