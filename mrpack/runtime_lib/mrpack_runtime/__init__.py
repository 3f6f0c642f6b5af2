"""Runtime bundled into job archives; runs a job role as a streaming task."""

from mrpack_runtime.streaming import ROLES, Counters, run_role

__all__ = ["ROLES", "Counters", "run_role"]
