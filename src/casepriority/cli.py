"""
casepriority Command Line Interface

Commands:
    assess     Score a case from a JSON factors file (or stdin)
    escalate   Check time-based escalation for a level and elapsed hours
    validate   Validate jurisdiction profile files
    profiles   List registered jurisdiction profiles

Usage:
    casepriority assess --factors case.json --jurisdiction qc_spvm_v1
    echo '{"age": 8}' | casepriority assess --factors -
    casepriority escalate 4 50
    casepriority validate profiles/*.yaml
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Optional

from .config import load_settings
from .engine import PriorityEngine, check_auto_escalation
from .exceptions import CasePriorityError, ProfileValidationError
from .profiles import ProfileLoader, get_default_registry

logger = logging.getLogger(__name__)


def _read_factors(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    with open(source, "r", encoding="utf-8") as f:
        return json.load(f)


def cmd_assess(args: argparse.Namespace) -> int:
    """Score one case and print the explanation."""
    try:
        factors = _read_factors(args.factors)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: cannot read factors from {args.factors}: {e}", file=sys.stderr)
        return 1

    engine = PriorityEngine(registry=get_default_registry())
    result = engine.assess(factors, args.jurisdiction)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return 0

    print(f"Jurisdiction: {result.jurisdiction} (v{result.profile_version})")
    if result.fallback_used:
        print(f"  [WARN] Unknown jurisdiction '{result.requested_jurisdiction}', generic profile used")
    print(f"Score: {result.score}")
    print()
    for line in result.explanation:
        print(line)
    return 0


def cmd_escalate(args: argparse.Namespace) -> int:
    """Check whether a case at LEVEL should escalate after HOURS."""
    decision = check_auto_escalation(args.level, args.hours)

    if args.json:
        print(json.dumps(decision.to_dict(), indent=2))
    elif decision.should_escalate:
        print(f"ESCALATE to level {int(decision.new_level)}: {decision.reason}")
    else:
        print("No escalation")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate profile files; exit 1 if any is invalid."""
    settings = load_settings()
    loader = ProfileLoader(strict_version=settings.strict_version)
    failures = 0

    for path in args.paths:
        try:
            profile = loader.load(path)
        except ProfileValidationError as e:
            failures += 1
            print(f"  [FAIL] {path}")
            for error in e.errors:
                print(f"         - {error}")
        except CasePriorityError as e:
            failures += 1
            print(f"  [FAIL] {path}: {e.message}")
        else:
            print(f"  [PASS] {path} ({profile.id} v{profile.version})")

    print()
    if failures:
        print(f"VALIDATION FAILED: {failures} of {len(args.paths)} profiles invalid")
        return 1
    print(f"VALIDATION PASSED: {len(args.paths)} profiles")
    return 0


def cmd_profiles(args: argparse.Namespace) -> int:
    """List registered jurisdiction profiles."""
    settings = load_settings()
    registry = get_default_registry()

    print(f"{'ID':<20} {'Version':>8}  {'Country':<8} Name")
    print("-" * 70)
    for profile in registry.profiles():
        markers = []
        if profile.id == settings.default_jurisdiction:
            markers.append("default")
        if profile.id == registry.fallback_id:
            markers.append("fallback")
        suffix = f" ({', '.join(markers)})" if markers else ""
        print(f"{profile.id:<20} {profile.version:>8}  {profile.country:<8} {profile.name}{suffix}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Missing-persons case priority engine",
        prog="casepriority",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Assess command
    assess_parser = subparsers.add_parser("assess", help="Score a case")
    assess_parser.add_argument(
        "--factors",
        required=True,
        help="JSON file with risk factors, or '-' for stdin",
    )
    assess_parser.add_argument(
        "--jurisdiction",
        default=None,
        help="Jurisdiction profile ID (default: configured default)",
    )
    assess_parser.add_argument("--json", action="store_true", help="Print JSON")
    assess_parser.set_defaults(func=cmd_assess)

    # Escalate command
    escalate_parser = subparsers.add_parser("escalate", help="Check auto-escalation")
    escalate_parser.add_argument("level", type=int, help="Current priority level (0-4)")
    escalate_parser.add_argument("hours", type=float, help="Hours unresolved")
    escalate_parser.add_argument("--json", action="store_true", help="Print JSON")
    escalate_parser.set_defaults(func=cmd_escalate)

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate profile files")
    validate_parser.add_argument("paths", nargs="+", help="YAML or JSON profile files")
    validate_parser.set_defaults(func=cmd_validate)

    # Profiles command
    profiles_parser = subparsers.add_parser("profiles", help="List jurisdiction profiles")
    profiles_parser.set_defaults(func=cmd_profiles)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
