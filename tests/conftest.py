"""Shared test fixtures for reviewcover."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

import pytest


AUTHORS = {
    "alice": "alice@example.com",
    "bob": "bob@example.com",
    "carol": "carol@example.com",
    "dev": "dev@example.com",
}


class FakeHistoryProvider:
    """In-memory history provider.

    Returns the configured lines verbatim: it deliberately ignores the
    exclusion set and the limit so the engine's own filtering is exercised.
    """

    def __init__(self, histories: dict[str, list[str]]):
        self.histories = histories
        self.calls: list[tuple[str, frozenset, int, int]] = []

    def fetch_history(self, file, excluded, depth, limit):
        self.calls.append((file, frozenset(excluded), depth, limit))
        return list(self.histories.get(file, []))


def _git(repo: Path, *args: str) -> str:
    env = dict(os.environ, GIT_CONFIG_NOSYSTEM="1", HOME=str(repo.parent))
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
        env=env,
    )
    return result.stdout


def commit(
    repo: Path,
    author: str,
    changes: dict[str, str],
    message: str = "change",
    display_name: str | None = None,
) -> None:
    """Write ``changes`` and commit them as ``author``.

    ``display_name`` overrides the commit's author name; the e-mail always
    comes from ``AUTHORS``.
    """
    for name, content in changes.items():
        target = repo / name
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as f:
            f.write(content)
    _git(repo, "add", *changes)
    email = AUTHORS[author]
    _git(
        repo,
        "-c", f"user.name={display_name or author}",
        "-c", f"user.email={email}",
        "commit", "-q", "-m", message,
    )


@pytest.fixture
def commit_as():
    return commit


@pytest.fixture
def fake_provider():
    return FakeHistoryProvider


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A repository with history on ``main`` and a ``feature`` branch.

    main:    alice x3 on A.txt, bob x1 on A.txt, bob x2 on B.txt, carol x1 on C.txt
    feature: dev x1 on A.txt, B.txt and new D.txt

    The repository's own user.email is dev@example.com.
    """
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(repo, "config", "user.email", AUTHORS["dev"])
    _git(repo, "config", "user.name", "dev")

    for i in range(3):
        commit(repo, "alice", {"A.txt": f"alice {i}\n"})
    commit(repo, "bob", {"A.txt": "bob\n"})
    commit(repo, "bob", {"B.txt": "bob 1\n"})
    commit(repo, "bob", {"B.txt": "bob 2\n"})
    commit(repo, "carol", {"C.txt": "carol\n"})

    _git(repo, "checkout", "-q", "-b", "feature")
    commit(repo, "dev", {"A.txt": "dev\n", "B.txt": "dev\n", "D.txt": "dev\n"})
    return repo
