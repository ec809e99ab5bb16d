"""Unit tests for the CheckResult record shared by every check module."""

from __future__ import annotations

import dataclasses

import pytest

from scripts.health import CheckResult, count_passed


def test_passed_line_hides_detail():
    r = CheckResult("1-environment", "MONGODB_URI", True, "mongodb://localhost:...", detail="unused")
    assert str(r) == "  [PASS] MONGODB_URI: mongodb://localhost:..."


def test_failed_line_shows_detail_below():
    r = CheckResult("1-environment", "CLERK_SECRET_KEY", False, "NOT SET", detail="Clerk authentication secret")
    assert r.status == "FAIL"
    assert str(r).splitlines() == [
        "  [FAIL] CLERK_SECRET_KEY: NOT SET",
        "         Clerk authentication secret",
    ]


def test_results_are_immutable():
    r = CheckResult("2-atlas-uri", "Atlas format", False, "expected mongodb+srv:// connection string")
    with pytest.raises(dataclasses.FrozenInstanceError):
        r.passed = True


def test_count_passed():
    results = [
        CheckResult("2-database", "MongoDB", True, "connected (pandal-navigator)"),
        CheckResult("2-database", "Collections", False, "missing routes"),
    ]
    assert count_passed(results) == (1, 2)
