"""Derive Hadoop streaming role arguments from a job directory."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .config import ARGUMENTS_FILE, ROLE_FILES, TASK_COMMAND
from .errors import InputError
from .schemas import JobRoles, RoleArguments

NO_REDUCE_TASKS = "-D mapred.reduce.tasks=0"
CLAUSE_SEPARATOR = " \\\n"


def _has_entry(job_dir: Path, role: str) -> bool:
    return any(path.is_file() for path in job_dir.glob(f"{ROLE_FILES[role]}.*"))


def detect_roles(job_dir: str) -> JobRoles:
    """Scan ``job_dir`` for role entry files or an ``ARGUMENTS`` override.

    When the override exists its trimmed text is returned and no entry files
    are checked.
    """
    root = Path(job_dir)
    override_path = root / ARGUMENTS_FILE
    if override_path.is_file():
        try:
            text = override_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InputError(f"Cannot read '{override_path}' as UTF-8 text: {exc}") from exc
        return JobRoles(override=text.strip())
    return JobRoles(
        has_reducer=_has_entry(root, "reducer"),
        has_combiner=_has_entry(root, "combiner"),
    )


def role_clause(role: str, artifact_name: str, command: str = TASK_COMMAND) -> str:
    return f"-{role} '{command} {artifact_name} {role}'"


def derive_role_arguments(
    roles: JobRoles, artifact_name: str, command: str = TASK_COMMAND
) -> RoleArguments:
    """Build the role argument block for the streaming jar.

    Reducer clauses come before the mapper clause: ``-D`` options must precede
    the other streaming options.
    """
    if roles.override is not None:
        return RoleArguments(clauses=[roles.override], block=roles.override)

    clauses: List[str] = []
    if roles.has_reducer:
        clauses.append(role_clause("reducer", artifact_name, command))
    else:
        clauses.append(NO_REDUCE_TASKS)
    if roles.has_combiner:
        clauses.append(role_clause("combiner", artifact_name, command))
    clauses.append(role_clause("mapper", artifact_name, command))
    return RoleArguments(clauses=clauses, block=CLAUSE_SEPARATOR.join(clauses))
