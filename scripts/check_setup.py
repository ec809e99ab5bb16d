#!/usr/bin/env python3
"""
scripts/check_setup.py — Backend setup check for local development.

Stages:
  1. Environment variables  (required must be set, optional are reported)
  2. Database               (connection + expected collections and their sizes)

Connects to MONGODB_URI, falling back to LOCAL_MONGODB_URI when unset.

Usage:
    python3 scripts/check_setup.py
    python3 scripts/check_setup.py --env-file backend/.env
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from typing import Any, Callable, Optional

_ROOT = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(_ROOT))

from pydantic import ValidationError  # noqa: E402

from config.settings import Settings, load_settings  # noqa: E402
from scripts.health import CheckResult, count_passed  # noqa: E402
from scripts.health import environment as health_env  # noqa: E402
from scripts.health import mongo as health_mongo  # noqa: E402

STAGE_DB = "2-database"

SETUP_ENV_VARS: tuple[health_env.EnvVarSpec, ...] = (
    health_env.EnvVarSpec("MONGODB_URI", "MONGODB_URI", True, True, "MongoDB connection string"),
    health_env.EnvVarSpec("JWT_SECRET", "JWT_SECRET", True, True, "Token signing secret"),
    health_env.EnvVarSpec(
        "GOOGLE_MAPS_API_KEY", "GOOGLE_MAPS_API_KEY", False, True, "Google Maps API key"
    ),
    health_env.EnvVarSpec("PORT", "PORT", False, False, "HTTP port"),
    health_env.EnvVarSpec("NODE_ENV", "NODE_ENV", False, False, "Runtime environment"),
)

EXPECTED_COLLECTIONS = ("users", "pandals", "foodplaces", "routes")


def _check_database(
    cfg: Settings, client_factory: Optional[Callable[..., Any]] = None
) -> list[CheckResult]:
    kwargs = {} if client_factory is None else {"client_factory": client_factory}
    try:
        summary = health_mongo.collection_summary(
            cfg.setup_database_uri,
            EXPECTED_COLLECTIONS,
            timeout_ms=cfg.MONGO_SERVER_SELECTION_TIMEOUT_MS,
            **kwargs,
        )
    except Exception as exc:  # noqa: BLE001
        return [CheckResult(STAGE_DB, "MongoDB", False, f"connection failed - {exc}")]

    results = [CheckResult(STAGE_DB, "MongoDB", True, f"connected ({summary.database_name})")]
    if summary.missing:
        results.append(
            CheckResult(
                STAGE_DB,
                "Collections",
                False,
                f"missing {', '.join(summary.missing)}",
                detail='Run "npm run seed" to create sample data.',
            )
        )
        return results

    counts = ", ".join(f"{name}={n:,}" for name, n in summary.counts.items())
    results.append(CheckResult(STAGE_DB, "Collections", True, f"all expected present ({counts})"))
    if summary.empty:
        # Advisory: empty collections do not fail the setup.
        results.append(
            CheckResult(
                STAGE_DB,
                "Collection data",
                True,
                f"empty: {', '.join(summary.empty)} (run \"npm run seed\" to populate)",
            )
        )
    return results


def run_setup_checks(
    cfg: Settings, client_factory: Optional[Callable[..., Any]] = None
) -> list[CheckResult]:
    """Run both stages and return a flat list of CheckResult objects."""
    checks = health_env.build_checks(cfg, SETUP_ENV_VARS)
    results = health_env.run_checks(checks)
    results.extend(_check_database(cfg, client_factory))
    return results


def _print_results(results: list[CheckResult], cfg: Settings) -> bool:
    """Print grouped results and the setup summary. Returns True if setup is complete."""
    labels = {
        health_env.STAGE: "1. Environment Variables",
        STAGE_DB: "2. Database Connection",
    }

    print()
    print("╔══════════════════════════════════════════════════════════╗")
    print("  Pandal Navigator: Backend Setup Check")
    print("╚══════════════════════════════════════════════════════════╝")

    current_stage = None
    for r in results:
        if r.stage != current_stage:
            current_stage = r.stage
            print(f"\n━━━ {labels.get(r.stage, r.stage)} ━━━")
        print(r)

    missing = health_env.missing_required(health_env.build_checks(cfg, SETUP_ENV_VARS))
    passed, total = count_passed(results)
    complete = passed == total

    print()
    print("╔══════════════════════════════════════════════════════════╗")
    print(f"  Setup Check Complete: {passed}/{total} passed")
    print("╚══════════════════════════════════════════════════════════╝")
    if complete:
        print("\nNext steps:")
        print('  1. Run "npm run dev" to start the development server')
        print(f"  2. Visit http://localhost:{cfg.PORT or 5000}/api/health to verify")
        print("  3. Use API endpoints as documented in README.md")
        if not cfg.GOOGLE_MAPS_API_KEY:
            print("\nNote: GOOGLE_MAPS_API_KEY not set. Route optimization features will be limited.")
    else:
        print("\nSetup incomplete. Please fix the following:")
        for check in missing:
            print(f"  - Set {check.name} in .env file")
        if any(not r.passed for r in results if r.stage == STAGE_DB):
            print("  - Fix the database problems reported above")
        print("\nRefer to .env.example for guidance")

    return complete


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Pandal Navigator backend setup check")
    parser.add_argument("--env-file", default=".env", help="dotenv file to load (default: .env)")
    args = parser.parse_args(argv)

    try:
        cfg = load_settings(args.env_file)
    except ValidationError as exc:
        print(f"ERROR: invalid configuration in {args.env_file} / environment", file=sys.stderr)
        print(str(exc), file=sys.stderr)
        return 1

    results = run_setup_checks(cfg)
    return 0 if _print_results(results, cfg) else 1


if __name__ == "__main__":
    sys.exit(main())
