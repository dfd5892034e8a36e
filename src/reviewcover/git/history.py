"""Per-file authorship history from git."""

from __future__ import annotations

import logging
from pathlib import Path

from reviewcover.cover.records import parse_history_line
from reviewcover.exceptions import GitError
from reviewcover.git.changes import run_git

logger = logging.getLogger("reviewcover.git")


class GitHistoryProvider:
    """Reads ``git shortlog`` for one file at a time.

    Lines come back as ``count<TAB>email``, one per e-mail with its commits
    summed across every name it was used with, sorted by descending commit
    count, with excluded authors removed and capped at the candidate limit.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()

    def fetch_history(
        self,
        file: str,
        excluded: set[str],
        depth: int,
        limit: int,
    ) -> list[str]:
        result = run_git(
            self.root,
            "shortlog", "-s", "-n", "-e", f"--max-count={depth}", "HEAD", "--", file,
        )
        if result.returncode != 0:
            logger.debug("shortlog failed for %s: %s", file, result.stderr.strip())
            return []

        # shortlog groups by "name <email>"; the same e-mail under several
        # names has to be merged before ranking and capping.
        counts: dict[str, int] = {}
        for line in result.stdout.splitlines():
            record = parse_history_line(line)
            if record is None or record.author in excluded:
                continue
            counts[record.author] = counts.get(record.author, 0) + record.commits

        ranked = sorted(counts.items(), key=lambda kv: -kv[1])
        return [f"{commits:6d}\t{author}" for author, commits in ranked[:max(limit, 0)]]


def my_identity(root: str | Path) -> str:
    """The current user's e-mail from git config, or "" if it is not set."""
    try:
        result = run_git(Path(root), "config", "user.email")
    except GitError:
        return ""
    if result.returncode != 0:
        return ""
    return result.stdout.strip()
