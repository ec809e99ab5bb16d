#!/usr/bin/env python3
"""
scripts/check_atlas.py — MongoDB Atlas migration readiness checker.

Two subcommands:
  audit  (default)  Report presence of the required environment variables
                    (redacted), the overall verdict, a structural analysis of
                    MONGODB_ATLAS_URI and the next steps.
  test              Open one connection to MONGODB_ATLAS_URI and report the
                    database name and host, or the failure message.

Usage:
    python3 scripts/check_atlas.py            # audit, reads .env from cwd
    python3 scripts/check_atlas.py test       # live connectivity probe
    python3 scripts/check_atlas.py --env-file backend/.env

Exit status: 0 when the audit passes / the probe connects, 1 otherwise.

Importable (used by unit tests):
    from scripts.check_atlas import audit_configuration, probe_atlas_connection
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from enum import Enum
from typing import Any, Callable, Optional

_ROOT = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(_ROOT))

from pydantic import ValidationError  # noqa: E402

from config.settings import Settings, load_settings  # noqa: E402
from scripts.health import atlas_uri as health_atlas_uri  # noqa: E402
from scripts.health import environment as health_env  # noqa: E402
from scripts.health import mongo as health_mongo  # noqa: E402


class Command(str, Enum):
    AUDIT = "audit"
    TEST = "test"


def _section(label: str) -> None:
    print(f"\n━━━ {label} ━━━")


def _banner(title: str) -> None:
    print()
    print("╔══════════════════════════════════════════════════════════╗")
    print(f"  {title}")
    print("╚══════════════════════════════════════════════════════════╝")


def audit_configuration(cfg: Settings) -> bool:
    """Print the migration readiness report. Returns True if all required vars are set."""
    checks = health_env.build_checks(cfg, health_env.ATLAS_ENV_VARS)
    all_passed = health_env.all_required_present(checks)

    _banner("Pandal Navigator: MongoDB Atlas Configuration Checker")

    _section("Environment Variables")
    for r in health_env.run_checks(checks):
        print(r)

    _section("Status Summary")
    if all_passed:
        print("  All required environment variables are set")
        print("  Ready for Atlas migration!")
    else:
        print("  Some required environment variables are missing")
        print(f"  Please check {cfg.SETUP_GUIDE} for setup instructions")

    uri_results = health_atlas_uri.run_checks(cfg)
    if uri_results:
        _section("Atlas URI Analysis")
        for r in uri_results:
            print(r)
        if health_atlas_uri.needs_format_warning(uri_results):
            print("  WARNING: Please verify your Atlas connection string format")

    _section("Next Steps")
    if not cfg.MONGODB_ATLAS_URI:
        print(f"  1. Complete MongoDB Atlas setup (see {cfg.SETUP_GUIDE})")
        print("  2. Add MONGODB_ATLAS_URI to your .env file")
        print("  3. Run this checker again")
    else:
        print(f"  1. Run: {cfg.MIGRATE_COMMAND}")
        print("  2. Test your application")
        print("  3. Deploy to cloud")

    return all_passed


def probe_atlas_connection(
    cfg: Settings, client_factory: Optional[Callable[..., Any]] = None
) -> health_mongo.ProbeResult:
    """Probe MONGODB_ATLAS_URI once and print the outcome. Never raises."""
    if not cfg.MONGODB_ATLAS_URI:
        print("MONGODB_ATLAS_URI not set. Cannot test connection.")
        print(f"  Add it to your .env file (see {cfg.SETUP_GUIDE})")
        return health_mongo.NotConfigured("MONGODB_ATLAS_URI not set")

    print("Testing Atlas connection...")
    kwargs = {} if client_factory is None else {"client_factory": client_factory}
    result = health_mongo.probe_connection(
        cfg.MONGODB_ATLAS_URI,
        timeout_ms=cfg.MONGO_SERVER_SELECTION_TIMEOUT_MS,
        **kwargs,
    )
    if isinstance(result, health_mongo.Success):
        print("  [PASS] Successfully connected to MongoDB Atlas")
        print(f"  Database: {result.database_name}")
        print(f"  Host:     {result.host}")
    elif isinstance(result, health_mongo.Failure):
        print(f"  [FAIL] Atlas connection failed: {result.message}")
        print("  Check your connection string and network access settings")
    return result


def parse_command(argv: list[str] | None = None) -> tuple[Command, str]:
    parser = argparse.ArgumentParser(description="MongoDB Atlas migration readiness checker")
    parser.add_argument(
        "command",
        nargs="?",
        default=Command.AUDIT.value,
        choices=[c.value for c in Command],
        help="audit (default): check configuration; test: probe the Atlas connection",
    )
    parser.add_argument("--env-file", default=".env", help="dotenv file to load (default: .env)")
    args = parser.parse_args(argv)
    return Command(args.command), args.env_file


def main(argv: list[str] | None = None) -> int:
    command, env_file = parse_command(argv)
    try:
        cfg = load_settings(env_file)
    except ValidationError as exc:
        print(f"ERROR: invalid configuration in {env_file} / environment", file=sys.stderr)
        print(str(exc), file=sys.stderr)
        return 1

    if command is Command.TEST:
        result = probe_atlas_connection(cfg)
        return 0 if isinstance(result, health_mongo.Success) else 1
    return 0 if audit_configuration(cfg) else 1


if __name__ == "__main__":
    sys.exit(main())
