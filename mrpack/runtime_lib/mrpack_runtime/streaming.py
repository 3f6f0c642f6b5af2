"""Hadoop streaming line protocol for job roles."""

from __future__ import annotations

import os
from collections import Counter
from itertools import groupby
from operator import itemgetter
from typing import Any, Iterable, Iterator, Optional, TextIO, Tuple

SEPARATOR = "\t"
COUNTER_GROUP = "mrpack"

# role argument -> job module and class name
ROLES = {
    "mapper": "Mapper",
    "reducer": "Reducer",
    "combiner": "Combiner",
}


def debug_enabled() -> bool:
    """Return the debug flag baked into the archive bootstrap."""
    return os.environ.get("MRPACK_DEBUG") == "1"


class Counters:
    """Task counters, reported through the streaming ``reporter:`` protocol."""

    def __init__(self, enabled: bool) -> None:
        self.enabled = enabled
        self.values: Counter = Counter()

    def incr(self, name: str, amount: int = 1) -> None:
        if self.enabled:
            self.values[name] += amount

    def report(self, stream: TextIO) -> None:
        for name, value in sorted(self.values.items()):
            stream.write(f"reporter:counter:{COUNTER_GROUP},{name},{value}\n")


def split_pair(line: str) -> Tuple[str, str]:
    """Split a ``key<TAB>value`` line; a line without a tab is all key."""
    line = line.rstrip("\n")
    if SEPARATOR in line:
        key, value = line.split(SEPARATOR, 1)
        return key, value
    return line, ""


def format_pair(key: Any, value: Any) -> str:
    if key is None:
        return f"{value}\n"
    return f"{key}{SEPARATOR}{value}\n"


def _emit(pairs: Optional[Iterable[Tuple[Any, Any]]], stdout: TextIO, counters: Counters) -> None:
    for key, value in pairs or ():
        stdout.write(format_pair(key, value))
        counters.incr("records_out")


def run_mapper(task: Any, stdin: Iterable[str], stdout: TextIO, counters: Counters) -> None:
    """Call ``task.map(None, line)`` for every input line."""
    for line in stdin:
        counters.incr("records_in")
        _emit(task.map(None, line.rstrip("\n")), stdout, counters)


def _values(group: Iterator[Tuple[str, str]], counters: Counters) -> Iterator[str]:
    for _, value in group:
        counters.incr("records_in")
        yield value


def run_reducer(task: Any, stdin: Iterable[str], stdout: TextIO, counters: Counters) -> None:
    """Call ``task.reduce(key, values)`` once per run of equal keys."""
    pairs = (split_pair(line) for line in stdin)
    for key, group in groupby(pairs, key=itemgetter(0)):
        counters.incr("groups")
        _emit(task.reduce(key, _values(group, counters)), stdout, counters)


def run_role(
    role: str,
    task: Any,
    stdin: Iterable[str],
    stdout: TextIO,
    stderr: TextIO,
    debug: Optional[bool] = None,
) -> Counters:
    """Stream ``stdin`` through ``task`` for the given role."""
    if role not in ROLES:
        raise ValueError(f"Unknown role '{role}'.")
    counters = Counters(debug_enabled() if debug is None else debug)
    if role == "mapper":
        run_mapper(task, stdin, stdout, counters)
    else:
        run_reducer(task, stdin, stdout, counters)
    stdout.flush()
    if counters.enabled:
        counters.report(stderr)
    return counters
