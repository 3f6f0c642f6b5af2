"""Error types raised while compiling a job."""

from __future__ import annotations


class PackagerError(Exception):
    """Base error for a failed build; ``exit_code`` is returned by the CLI."""

    exit_code = 1


class UsageError(PackagerError):
    """Malformed invocation or an explicit help request."""

    exit_code = 1


class InputError(PackagerError):
    """Bad job/output/include paths or an unknown timezone."""

    exit_code = 1


class HostEnvironmentError(PackagerError):
    """The host cannot write archives."""

    exit_code = 2
