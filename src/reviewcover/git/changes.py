"""Work out which files a change touches.

Either the caller names the paths explicitly, or we ask git for the files
that differ between a base ref and HEAD.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from reviewcover.exceptions import GitError

logger = logging.getLogger("reviewcover.git")

_STATUS_NAMES = {
    "A": "added",
    "M": "modified",
    "D": "deleted",
    "R": "renamed",
    "C": "copied",
    "T": "modified",
}


@dataclass
class ChangedFile:
    """One entry of ``git diff --name-status``."""
    path: str
    status: str  # 'added', 'modified', 'deleted', 'renamed', 'copied'
    old_path: str | None = None  # For renames and copies


def parse_name_status(output: str) -> list[ChangedFile]:
    """Parse ``git diff --name-status -z`` output.

    Fields are NUL-separated and paths come back unquoted. Renames and
    copies carry two paths and report the new one. Tokens that are not a
    known status are skipped.
    """
    changed: list[ChangedFile] = []
    tokens = output.split("\0")
    i = 0
    while i < len(tokens):
        letter = tokens[i][:1]
        status = _STATUS_NAMES.get(letter)
        if status is None:
            i += 1
            continue
        width = 3 if letter in "RC" else 2
        fields = tokens[i + 1:i + width]
        if len(fields) < width - 1 or not all(fields):
            break
        if width == 3:
            changed.append(ChangedFile(path=fields[1], status=status, old_path=fields[0]))
        else:
            changed.append(ChangedFile(path=fields[0], status=status))
        i += width
    return changed


def run_git(root: Path, *args: str, timeout: int = 30) -> subprocess.CompletedProcess:
    """Run a git command in ``root``. Raises GitError if git is missing."""
    cmd = ["git", *args]
    logger.debug("running %s in %s", " ".join(cmd), root)
    try:
        return subprocess.run(
            cmd,
            cwd=root,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="surrogateescape",
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise GitError("git executable not found on PATH") from e
    except subprocess.TimeoutExpired as e:
        raise GitError(f"git {' '.join(args)} timed out after {timeout}s") from e


def get_changed_files(root: Path, base: str = "main") -> list[ChangedFile]:
    """Files that differ between ``base`` and HEAD."""
    result = run_git(root, "diff", "--name-status", "-z", f"{base}...HEAD")
    if result.returncode != 0:
        # Fallback: diff against base directly
        result = run_git(root, "diff", "--name-status", "-z", base)
    if result.returncode != 0:
        raise GitError(
            f"Could not diff against '{base}': {result.stderr.strip() or 'unknown error'}"
        )
    return parse_name_status(result.stdout)


def resolve_changed_files(
    root: Path,
    base: str = "main",
    paths: list[str] | None = None,
) -> list[str]:
    """Ordered, de-duplicated list of changed file paths.

    Explicit ``paths`` win over the diff against ``base``.
    """
    if paths:
        return list(dict.fromkeys(paths))
    return list(dict.fromkeys(cf.path for cf in get_changed_files(root, base)))
