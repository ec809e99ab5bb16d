"""
scripts/health/atlas_uri.py — Structural sanity checks for the Atlas connection string.

Substring heuristics only: the string is not parsed and nothing is resolved.
Results are advisory and never change the audit verdict. When the Atlas URI
is unset there is nothing to analyse and no results are produced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from scripts.health import CheckResult

if TYPE_CHECKING:
    from config.settings import Settings

STAGE = "2-atlas-uri"


def run_checks(cfg: Settings) -> list[CheckResult]:
    uri = cfg.MONGODB_ATLAS_URI
    if not uri:
        return []
    return [
        _check_scheme(uri, cfg.ATLAS_URI_SCHEME),
        _check_database_name(uri, cfg.ATLAS_DATABASE_NAME),
    ]


def needs_format_warning(results: list[CheckResult]) -> bool:
    return any(not r.passed for r in results)


def _check_scheme(uri: str, scheme: str) -> CheckResult:
    passed = scheme in uri
    return CheckResult(
        STAGE,
        "Atlas format",
        passed,
        f"uses {scheme}" if passed else f"expected {scheme} connection string",
    )


def _check_database_name(uri: str, database: str) -> CheckResult:
    passed = database in uri
    return CheckResult(
        STAGE,
        "Database name",
        passed,
        f"included ({database})" if passed else f"missing ({database})",
    )
