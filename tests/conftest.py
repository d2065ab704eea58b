"""Shared test fixtures — scanners, sample fields, temp project dirs."""

from __future__ import annotations

from pathlib import Path

import pytest

from inputguard.findings.models import FieldInput
from inputguard.scanner.engine import Scanner


@pytest.fixture
def scanner() -> Scanner:
    return Scanner()


@pytest.fixture
def strict_scanner() -> Scanner:
    return Scanner(strict_mode=True)


@pytest.fixture
def stop_scanner() -> Scanner:
    return Scanner(stop_on_first_threat=True)


@pytest.fixture
def clean_field() -> FieldInput:
    return FieldInput(name="c", value="Hello world", content_type="text")


@pytest.fixture
def script_field() -> FieldInput:
    return FieldInput(name="c", value="<script>alert(1)</script>", content_type="text")


@pytest.fixture
def tautology_field() -> FieldInput:
    return FieldInput(name="c", value="admin' OR '1'='1' --", content_type="text")


@pytest.fixture
def zero_width_field() -> FieldInput:
    """``script`` split by zero-width spaces inside both tags."""
    return FieldInput(name="c", value="<sc\u200bript>x</sc\u200bript>", content_type="text")


@pytest.fixture
def allowed_html_field() -> FieldInput:
    return FieldInput(
        name="c",
        value="<p>Hello <strong>World</strong></p>",
        content_type="html",
        allowed_tags=["p", "strong"],
    )


@pytest.fixture
def sample_fields(clean_field, script_field, tautology_field) -> list:
    return [
        clean_field,
        script_field,
        tautology_field,
        FieldInput(name="path", value="../../etc/passwd"),
        FieldInput(name="token", value="key AKIAIOSFODNN7REAL123"),
        FieldInput(name="query", value='{"$gt": ""}'),
        FieldInput(name="empty", value=""),
    ]


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch) -> Path:
    """An empty working directory with no .inputguard.toml."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
