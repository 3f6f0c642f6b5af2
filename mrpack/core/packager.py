"""Compile a job directory into an executable archive plus a launcher script."""

from __future__ import annotations

import os
from typing import Optional, Sequence

from .archive import ArchiveWriter, can_write, include_path
from .config import ARCHIVE_SUFFIX, LIB_DIR, READONLY_ENV, SCRIPT_SUFFIX
from .errors import HostEnvironmentError, InputError
from .io import atomic_write_text
from .launcher import render_launcher
from .roles import derive_role_arguments, detect_roles
from .schemas import (
    BuildConfiguration,
    BuildResult,
    LauncherScript,
    PackagedArtifact,
    RoleArguments,
)
from .stub import build_bootstrap
from .timezones import host_timezone, validate_timezone


def validate(
    job_dir: str,
    output_dir: str,
    *,
    include_paths: Sequence[str] = (),
    timezone: Optional[str] = None,
    debug: bool = False,
) -> BuildConfiguration:
    """Check the host and the inputs before anything is written.

    Args:
        job_dir: Directory holding the job's role entry files.
        output_dir: Existing, writable directory for the artifacts.
        include_paths: Extra directories to bundle, in order.
        timezone: Timezone baked into the bootstrap; defaults to the host's.
        debug: Build the debug variant of the runtime.

    Returns:
        The validated BuildConfiguration.

    Raises:
        HostEnvironmentError: If archives cannot be written on this host.
        InputError: On a missing/unreadable job dir, a missing/unwritable
            output dir, or an unknown timezone.
    """
    if not can_write():
        raise HostEnvironmentError(
            f"Archive write mode not allowed; unset {READONLY_ENV} and make sure zlib is available."
        )

    resolved_job = os.path.realpath(job_dir)
    if not os.path.isdir(resolved_job) or not os.access(resolved_job, os.R_OK):
        raise InputError(f"Input directory '{job_dir}' not found or not readable.")

    resolved_output = os.path.realpath(output_dir)
    if not os.path.isdir(resolved_output) or not os.access(resolved_output, os.W_OK):
        raise InputError(f"Output directory '{output_dir}' not found or not writable.")

    tz = validate_timezone(timezone if timezone is not None else host_timezone())

    return BuildConfiguration(
        job_dir=resolved_job,
        output_dir=resolved_output,
        timezone=tz,
        include_paths=list(include_paths),
        debug=debug,
    )


def _resolve_root(path: str) -> str:
    resolved = os.path.realpath(path)
    if not os.path.isdir(resolved):
        raise InputError(f"Include directory '{path}' not found.")
    return resolved


def build_archive(config: BuildConfiguration, lib_dir: str = str(LIB_DIR)) -> PackagedArtifact:
    """Stage the library, job and include directories into a new archive.

    Roots are bundled in the order library, job, includes. The archive is
    only written to disk by :func:`write_outputs`.
    """
    roots = [_resolve_root(path) for path in [lib_dir, config.job_dir, *config.include_paths]]
    artifact_path = os.path.join(config.output_dir, config.job_name + ARCHIVE_SUFFIX)

    writer = ArchiveWriter.open(artifact_path)
    bootstrap = build_bootstrap(config.timezone, config.debug)
    writer.set_bootstrap(bootstrap)
    for root in roots:
        writer.add_tree(root, include_path)

    return PackagedArtifact(
        path=artifact_path,
        bootstrap=bootstrap,
        bundled_paths=roots,
        entries=writer.staged,
        writer=writer,
    )


def derive_arguments(job_dir: str, artifact_name: str) -> RoleArguments:
    """Role arguments for the streaming jar, from the job directory contents."""
    return derive_role_arguments(detect_roles(job_dir), artifact_name)


def render_script(config: BuildConfiguration, role_arguments: RoleArguments) -> LauncherScript:
    path = os.path.join(config.output_dir, config.job_name + SCRIPT_SUFFIX)
    return LauncherScript(path=path, body=render_launcher(config.job_name, role_arguments))


def write_outputs(
    artifact: PackagedArtifact,
    script: LauncherScript,
    job_name: str,
) -> BuildResult:
    """Commit the archive and write the launcher script.

    Both land at the paths chosen by :func:`build_archive` and
    :func:`render_script`. Executable bits are left to the operator.
    """
    if artifact.writer is None:
        raise ValueError(f"Archive for '{job_name}' has no staged content.")
    artifact.entries = artifact.writer.commit()
    atomic_write_text(script.path, script.body)
    return BuildResult(artifact_path=artifact.path, script_path=script.path, job_name=job_name)


def compile_job(config: BuildConfiguration, lib_dir: str = str(LIB_DIR)) -> BuildResult:
    """Run the whole build for a validated configuration."""
    artifact = build_archive(config, lib_dir)
    role_arguments = derive_arguments(config.job_dir, config.job_name + ARCHIVE_SUFFIX)
    script = render_script(config, role_arguments)
    return write_outputs(artifact, script, config.job_name)


def build_report(result: BuildResult) -> str:
    """Operator summary printed after a successful build."""
    script_name = result.job_name + SCRIPT_SUFFIX
    archive_name = result.job_name + ARCHIVE_SUFFIX
    return (
        "\n"
        "Build done, generated files:\n"
        f"  {result.script_path}\n"
        f"  {result.artifact_path}\n"
        "\n"
        f"If you re-built the job, make sure to check the modifications in {script_name}\n"
        "\n"
        "Do not forget to chmod\n"
        f"  {script_name}\n"
        "and\n"
        f"  {archive_name}\n"
        "to be executable before checking in.\n"
    )
