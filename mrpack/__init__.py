"""mrpack: package Hadoop streaming jobs into executable archives."""

from mrpack.core.errors import HostEnvironmentError, InputError, PackagerError, UsageError
from mrpack.core.packager import build_archive, compile_job, derive_arguments, validate
from mrpack.core.roles import derive_role_arguments, detect_roles

__version__ = "0.1.0"

__all__ = [
    "PackagerError",
    "UsageError",
    "InputError",
    "HostEnvironmentError",
    "validate",
    "build_archive",
    "derive_arguments",
    "compile_job",
    "detect_roles",
    "derive_role_arguments",
]
