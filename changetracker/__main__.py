"""
Module entrypoint:

  python -m changetracker demo
  python -m changetracker replay path/to/scenario.yaml
"""
from __future__ import annotations

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
