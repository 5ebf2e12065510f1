"""Scenario loading and replay.

A scenario is a scripted session against one ChangeTracker: named listeners
subscribe, values are set, listeners are removed. Replaying it records every
callback invocation in a journal, which makes ordering behavior easy to
inspect from the command line.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, List

import yaml

from .config import normalize_force_set_flag
from .tracker import UNSET, ChangeTracker

SUBSCRIBE_OPS: Dict[str, str] = {
    "get_once": "get_once",
    "get_every_change": "get_every_change",
    "get_next": "get_next",
}
REMOVE_OPS: Dict[str, str] = {
    "remove_once": "remove_once_listener",
    "remove_every": "remove_every_listener",
    "remove_next": "remove_next_listener",
}
SET_OPS = {"set_value", "set_silent"}
READ_OP = "read"
KNOWN_OPS = set(SUBSCRIBE_OPS) | set(REMOVE_OPS) | SET_OPS | {READ_OP}

# Once/next/every ordering walkthrough.
BUILTIN_SCENARIO: Dict[str, Any] = {
    "name": "listener ordering",
    "steps": [
        {"op": "get_once", "listener": "A"},
        {"op": "get_next", "listener": "B"},
        {"op": "get_every_change", "listener": "C"},
        {"op": "set_value", "value": 1},
        {"op": "get_once", "listener": "D"},
        {"op": "set_value", "value": 2},
        {"op": "get_next", "listener": "E"},
        {"op": "set_value", "value": 3},
    ],
}


def validate_scenario(scenario: Any) -> List[str]:
    """Return a list of human-readable problems; empty means valid."""

    if not isinstance(scenario, dict):
        return ["scenario root must be a mapping"]
    steps = scenario.get("steps")
    if not isinstance(steps, list):
        return ["'steps' must be a list"]

    errs: List[str] = []
    for i, step in enumerate(steps):
        if not isinstance(step, dict):
            errs.append(f"steps[{i}]: must be a mapping")
            continue
        op = step.get("op")
        if op not in KNOWN_OPS:
            errs.append(f"steps[{i}]: unknown op {op!r}")
            continue
        if op in SUBSCRIBE_OPS or op in REMOVE_OPS:
            if not isinstance(step.get("listener"), str) or not step["listener"]:
                errs.append(f"steps[{i}]: '{op}' requires a listener name")
        elif op in SET_OPS and "value" not in step:
            errs.append(f"steps[{i}]: '{op}' requires a value")
    return errs


def load_scenario_file(path: str | Path) -> Dict[str, Any]:
    """Load a scenario from JSON or YAML and validate its shape."""

    p = Path(path)
    text = p.read_text(encoding="utf-8")

    if p.suffix.lower() in {".yaml", ".yml"}:
        data: Any = yaml.safe_load(text) or {}
    else:
        data = json.loads(text or "{}")

    errs = validate_scenario(data)
    if errs:
        raise ValueError("invalid scenario: " + "; ".join(errs))
    return data


def run_scenario(scenario: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Replay ``scenario`` on a fresh tracker and return the journal."""

    errs = validate_scenario(scenario)
    if errs:
        raise ValueError("invalid scenario: " + "; ".join(errs))

    tracker = ChangeTracker(
        scenario.get("initial", UNSET),
        force_set_flag=normalize_force_set_flag(scenario.get("force_set_flag")),
        name=scenario.get("name"),
    )
    journal: List[Dict[str, Any]] = []
    listeners: Dict[str, Callable[[Any], None]] = {}
    current = {"step": 0}

    def listener_for(name: str) -> Callable[[Any], None]:
        # Same name, same function object, so removals match by identity.
        if name not in listeners:
            def record(value: Any) -> None:
                journal.append({"step": current["step"], "listener": name, "value": value})

            listeners[name] = record
        return listeners[name]

    for i, step in enumerate(scenario["steps"]):
        current["step"] = i
        op = step["op"]
        if op in SUBSCRIBE_OPS:
            getattr(tracker, SUBSCRIBE_OPS[op])(listener_for(step["listener"]))
        elif op in REMOVE_OPS:
            removed = getattr(tracker, REMOVE_OPS[op])(listener_for(step["listener"]))
            journal.append({"step": i, "op": op, "listener": step["listener"], "removed": removed})
        elif op == "set_value":
            tracker.set_value(step["value"])
        elif op == "set_silent":
            tracker.set_silent(step["value"])
        else:
            journal.append({"step": i, "op": READ_OP, "value": tracker.read_cached()})

    return journal


def format_journal(journal: List[Dict[str, Any]]) -> List[str]:
    lines: List[str] = []
    for entry in journal:
        step = entry["step"]
        if "listener" in entry and "op" not in entry:
            lines.append(f"[step {step}] {entry['listener']} <- {entry['value']!r}")
        elif entry.get("op") == READ_OP:
            lines.append(f"[step {step}] read -> {entry['value']!r}")
        else:
            lines.append(f"[step {step}] {entry['op']} {entry['listener']} -> {entry['removed']}")
    return lines
