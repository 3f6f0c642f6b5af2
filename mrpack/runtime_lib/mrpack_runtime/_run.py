"""Archive entry point: ``python3 <job>.pyz mapper|reducer|combiner``."""

from __future__ import annotations

import importlib
import sys
from typing import List, Optional

from mrpack_runtime.streaming import ROLES, run_role


def load_task(role: str):
    """Import the job module for ``role`` and instantiate its class."""
    name = ROLES[role]
    module = importlib.import_module(name)
    return getattr(module, name)()


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args or args[0] not in ROLES:
        print(f"Usage: {sys.argv[0]} {{{'|'.join(ROLES)}}}", file=sys.stderr)
        return 1
    role = args[0]
    try:
        task = load_task(role)
    except ModuleNotFoundError as exc:
        if exc.name != ROLES[role]:
            raise
        print(f"This job has no {ROLES[role]} entry point.", file=sys.stderr)
        return 1
    run_role(role, task, sys.stdin, sys.stdout, sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
