"""Tests for finding messages and structured output."""

import pytest

from chaincheck.models import (
    AmbiguousService,
    CheckResult,
    FileReport,
    LookupResult,
    MissingArguments,
    SourceLocation,
    UnitReport,
)
from chaincheck.output import (
    ambiguous_message,
    check_result_to_dict,
    format_finding,
    lookup_to_dict,
    missing_message,
    unit_diagnostics,
)

WHERE = SourceLocation("app.py", 4, 9)


class TestMessages:
    def test_missing(self):
        finding = MissingArguments("send_message", "sqs", ("queue_url", "message_body"), WHERE)
        assert missing_message(finding) == (
            "method `send_message` (from sqs) is missing required argument(s): queue_url, message_body"
        )

    def test_ambiguous_short_list_sorted(self):
        finding = AmbiguousService("list_artifacts", ("sagemaker", "amplify"), WHERE)
        assert ambiguous_message(finding) == (
            "method `list_artifacts` is used in multiple services: amplify, sagemaker. "
            'Specify the intended service explicitly, e.g. `@required_props(services="amplify")`'
        )

    def test_ambiguous_long_list_abbreviated(self):
        finding = AmbiguousService("tag_resource", ("a", "b", "c", "d", "e", "f"), WHERE)
        message = ambiguous_message(finding)
        assert "services: a, b, c, d, e... (abbreviated list)." in message
        assert ", f" not in message

    def test_exactly_five_not_abbreviated(self):
        finding = AmbiguousService("m", ("a", "b", "c", "d", "e"), WHERE)
        assert "abbreviated" not in ambiguous_message(finding)

    def test_custom_decorator_name(self):
        finding = AmbiguousService("m", ("a", "b"), WHERE)
        assert "`@verify(services=\"a\")`" in format_finding(finding, decorator="verify")

    def test_not_a_finding(self):
        with pytest.raises(TypeError):
            format_finding("nope")


class TestDiagnostics:
    def test_one_per_finding(self):
        unit = UnitReport(
            name="f",
            location=SourceLocation("app.py", 1, 2),
            findings=[
                MissingArguments("receive_message", "sqs", ("queue_url",), WHERE),
                AmbiguousService("m", ("a", "b"), None),
            ],
        )
        diagnostics = unit_diagnostics(unit)
        assert [d.kind for d in diagnostics] == ["missing", "ambiguous"]
        assert str(diagnostics[0]).startswith("app.py:4:9: error: method `receive_message`")
        assert str(diagnostics[1]).startswith("<unknown>: error: ")

    def test_configuration_error_at_unit(self):
        unit = UnitReport(name="f", location=SourceLocation("app.py", 1, 2), configuration_error="bad")
        diagnostics = unit_diagnostics(unit)
        assert [(d.kind, str(d)) for d in diagnostics] == [("configuration", "app.py:1:2: error: bad")]


class TestDocuments:
    def test_check_result(self):
        unit = UnitReport(
            name="f",
            location=SourceLocation("app.py", 1, 2),
            services=["sqs"],
            findings=[MissingArguments("receive_message", "sqs", ("queue_url",), WHERE)],
        )
        data = check_result_to_dict(CheckResult(files=[FileReport("app.py", [unit])]))

        assert data["ok"] is False
        unit_data = data["files"][0]["units"][0]
        assert unit_data["services"] == ["sqs"]
        assert unit_data["diagnostics"] == [{
            "kind": "missing",
            "message": "method `receive_message` (from sqs) is missing required argument(s): queue_url",
            "location": {"file": "app.py", "line": 4, "column": 9},
        }]

    def test_empty_result_is_ok(self):
        assert check_result_to_dict(CheckResult()) == {"ok": True, "files": []}

    def test_lookup(self):
        result = LookupResult("m", {"sqs": ("b",), "s3": ("a", "c")})
        assert lookup_to_dict(result) == {"method": "m", "services": {"s3": ["a", "c"], "sqs": ["b"]}}
