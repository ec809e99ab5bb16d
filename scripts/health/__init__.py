"""
scripts/health — Composable check modules for the Pandal Navigator backend.

Each module exposes a run_checks(...) function that returns a list of
CheckResult objects. check_atlas.py and check_setup.py print them.

Usage:
    from scripts.health import CheckResult
    from scripts.health.environment import build_checks, ATLAS_ENV_VARS
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CheckResult:
    stage: str
    name: str
    passed: bool
    message: str
    # Shown under failed lines only: what the missing value is, or how to fix it.
    detail: str | None = None

    @property
    def status(self) -> str:
        return "PASS" if self.passed else "FAIL"

    def __str__(self) -> str:
        if self.passed or not self.detail:
            return f"  [{self.status}] {self.name}: {self.message}"
        return f"  [{self.status}] {self.name}: {self.message}\n         {self.detail}"


def count_passed(results: list[CheckResult]) -> tuple[int, int]:
    """Return (passed, total) for a batch of results."""
    return sum(1 for r in results if r.passed), len(results)
