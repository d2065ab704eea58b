"""Tests for the JSON and terminal reporters and redaction."""

import json

from rich.console import Console

from inputguard.findings.redactor import REDACTED, display_match, redact, redact_partial
from inputguard.findings.models import FieldInput
from inputguard.output import json_report, terminal
from inputguard.scanner.engine import Scanner

AWS_VALUE = "key AKIAIOSFODNN7REAL123"


class TestRedactor:
    def test_partial(self):
        assert redact_partial("AKIAIOSFODNN7REAL123") == "AKIA...23"

    def test_short_values_fully_hidden(self):
        assert redact_partial("abcdef") == REDACTED

    def test_full(self):
        assert redact("AKIAIOSFODNN7REAL123", full=True) == REDACTED

    def test_only_tokens_redacted(self):
        assert display_match("<script>", "xss", redact_tokens=True) == "<script>"
        assert display_match("AKIAIOSFODNN7REAL123", "tokenLeakage", redact_tokens=True) == "AKIA...23"
        assert display_match("AKIAIOSFODNN7REAL123", "tokenLeakage", redact_tokens=False) == (
            "AKIAIOSFODNN7REAL123"
        )


class TestJsonReport:
    def test_structure(self, scanner, sample_fields):
        data = json.loads(json_report.render(scanner.scan_all(sample_fields)))
        assert data["scanner"] == "all"
        assert data["passed"] is False
        assert data["total_threats"] > 0
        assert len(data["result"]) == len(sample_fields)
        first_threat = data["result"][1]["threats"][0]
        assert set(first_threat) == {
            "type", "severity", "category", "pattern", "matched", "position", "recommendation",
        }

    def test_value_key_absent_by_default(self, scanner, script_field):
        data = json_report.to_dict(scanner.scan_all([script_field]))
        assert "value" not in data["result"][0]

    def test_value_key_present_when_requested(self, script_field):
        result = Scanner(include_value_in_response=True).scan_all([script_field])
        assert json_report.to_dict(result)["result"][0]["value"] == script_field.value

    def test_empty_value_echoed(self):
        result = Scanner(include_value_in_response=True).scan_all([FieldInput(name="e", value="")])
        field = json_report.to_dict(result)["result"][0]
        assert field["value"] == ""
        assert field["scanned"] is False

    def test_tokens_redacted(self):
        result = Scanner(include_value_in_response=True).scan(
            [FieldInput(name="t", value=AWS_VALUE)], "tokenLeakage"
        )
        field = json_report.to_dict(result)["result"][0]
        assert field["threats"][0]["matched"] == "AKIA...23"
        assert field["value"] == REDACTED
        assert "AKIAIOSFODNN7REAL123" not in json_report.render(result)

    def test_tokens_shown_on_request(self):
        result = Scanner().scan([FieldInput(name="t", value=AWS_VALUE)], "tokenLeakage")
        field = json_report.to_dict(result, redact_tokens=False)["result"][0]
        assert field["threats"][0]["matched"] == "AKIAIOSFODNN7REAL123"

    def test_surrogate_references_encodable(self, scanner):
        field = FieldInput(name="c", value="<script>&#55296;\\uD800</script>")
        text = json_report.render(scanner.scan([field], "xss"))
        text.encode("utf-8")
        assert json.loads(text)["result"][0]["threats"][0]["matched"] == "<script></script>"

    def test_hidden_char_threat_has_no_category(self, scanner, zero_width_field):
        data = json_report.to_dict(scanner.scan([zero_width_field], "xss"))
        threat = data["result"][0]["threats"][0]
        assert threat["type"] == "HIDDEN_CHAR_OBFUSCATION"
        assert "category" not in threat


class TestTerminal:
    def _render(self, result, **kwargs) -> str:
        console = Console(record=True, width=200)
        terminal.render(result, console=console, **kwargs)
        return console.export_text()

    def test_clean(self, scanner, clean_field):
        out = self._render(scanner.scan_all([clean_field]))
        assert "No threats detected" in out
        assert "Fields scanned: 1" in out

    def test_failed(self, scanner, script_field):
        out = self._render(scanner.scan([script_field], "xss"))
        assert "SCRIPT_TAG" in out
        assert "FAILED" in out
        assert "1 field(s)" in out

    def test_summary_hidden(self, scanner, clean_field):
        out = self._render(scanner.scan_all([clean_field]), show_summary=False)
        assert "Fields scanned" not in out

    def test_tokens_redacted(self, scanner):
        result = scanner.scan([FieldInput(name="t", value=AWS_VALUE)], "tokenLeakage")
        out = self._render(result)
        assert "AKIA...23" in out
        assert "AKIAIOSFODNN7REAL123" not in out
