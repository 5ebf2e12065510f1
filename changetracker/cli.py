from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List

import yaml

from . import __version__
from .logging_utils import setup_logging
from .scenario import BUILTIN_SCENARIO, format_journal, load_scenario_file, run_scenario

log = logging.getLogger("changetracker.cli")


def _emit(journal: List[Dict[str, Any]], as_json: bool) -> None:
    if as_json:
        # UNSET has no JSON form; fall back to its repr
        print(json.dumps(journal, indent=2, default=repr))
        return
    for line in format_journal(journal):
        print(line)


def _cmd_replay(args: argparse.Namespace) -> int:
    try:
        scenario = load_scenario_file(args.scenario)
    except FileNotFoundError:
        print(f"replay failed: file not found: {args.scenario}", file=sys.stderr)
        return 2
    except (ValueError, yaml.YAMLError) as e:
        print(f"replay failed: {e}", file=sys.stderr)
        return 2

    log.info("Replaying %d step(s) from %s", len(scenario["steps"]), args.scenario)
    _emit(run_scenario(scenario), args.json)
    return 0


def _cmd_demo(args: argparse.Namespace) -> int:
    log.info("Replaying built-in scenario %r", BUILTIN_SCENARIO["name"])
    _emit(run_scenario(BUILTIN_SCENARIO), args.json)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="changetracker",
        description="ChangeTracker - replay scripted listener sessions",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="increase verbosity (use -vv for debug)",
    )

    sub = parser.add_subparsers(dest="subcommand", required=False)

    p_replay = sub.add_parser("replay", help="Replay a scenario file (JSON or YAML)")
    p_replay.add_argument("scenario", help="Path to scenario file")
    p_replay.add_argument("--json", action="store_true", help="Print the journal as JSON")
    p_replay.set_defaults(func=_cmd_replay)

    p_demo = sub.add_parser("demo", help="Replay the built-in listener ordering scenario")
    p_demo.add_argument("--json", action="store_true", help="Print the journal as JSON")
    p_demo.set_defaults(func=_cmd_demo)

    return parser


def main(argv: List[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if not hasattr(args, "func") or args.func is None:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
