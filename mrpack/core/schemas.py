"""Schema definitions for build inputs and artifacts."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class BuildConfiguration:
    """Validated inputs for a single compile run."""

    job_dir: str
    output_dir: str
    timezone: str
    include_paths: List[str] = field(default_factory=list)
    debug: bool = False

    @property
    def job_name(self) -> str:
        return os.path.basename(os.path.normpath(self.job_dir))


@dataclass
class PackagedArtifact:
    """The executable archive produced for a job."""

    path: str
    bootstrap: str
    bundled_paths: List[str]
    entries: List[str] = field(default_factory=list)
    writer: Optional[Any] = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class JobRoles:
    """Which role entry points a job directory provides."""

    has_reducer: bool = False
    has_combiner: bool = False
    override: Optional[str] = None


@dataclass
class RoleArguments:
    """Role clauses handed to the streaming jar, plus their rendered block."""

    clauses: List[str]
    block: str


@dataclass
class LauncherScript:
    """Generated shell launcher."""

    path: str
    body: str


@dataclass
class BuildResult:
    """Paths reported back to the operator after a build."""

    artifact_path: str
    script_path: str
    job_name: str
