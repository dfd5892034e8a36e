"""Per-author, per-file affinity scores.

The matrix is a flat mapping ``author -> {file -> score}``. Authors and files
are plain identity strings; nothing holds a reference back to anything else.
"""

from __future__ import annotations

from collections.abc import Iterable


class AffinityMatrix:
    """Normalized familiarity of each author with each file.

    Every stored score is in ``(0, 1]``. Recording a non-positive score
    removes the entry instead of storing it. Authors are kept in the order
    they were first recorded, which is the order the solver walks them in.
    """

    def __init__(self) -> None:
        self._scores: dict[str, dict[str, float]] = {}

    def record(self, author: str, file: str, score: float) -> None:
        """Insert or overwrite ``(author, file)``; a score <= 0 deletes it."""
        if score > 0:
            self._scores.setdefault(author, {})[file] = score
            return

        files = self._scores.get(author)
        if files is None:
            return
        files.pop(file, None)
        if not files:
            del self._scores[author]

    def score_for(self, author: str, file: str) -> float:
        return self._scores.get(author, {}).get(file, 0.0)

    def files_covered_by(self, author: str) -> set[str]:
        """Files the author has any positive affinity for."""
        return set(self._scores.get(author, ()))

    def total_score(self, author: str, candidate_files: Iterable[str]) -> float:
        """Sum of the author's scores over ``candidate_files``.

        Files the author has no entry for contribute 0, so an empty or
        disjoint candidate set sums to 0.
        """
        files = self._scores.get(author)
        if not files:
            return 0.0
        return sum(files.get(f, 0.0) for f in candidate_files)

    @property
    def authors(self) -> list[str]:
        """Authors with at least one entry, in first-recorded order."""
        return list(self._scores)

    def groups(self) -> dict[str, AuthorAffinity]:
        """One coverage group per author, keyed by author identity."""
        return {author: AuthorAffinity(self, author) for author in self._scores}

    def scores_by_file(self) -> dict[str, dict[str, float]]:
        """Transpose into ``file -> {author: score}``."""
        by_file: dict[str, dict[str, float]] = {}
        for author, files in self._scores.items():
            for file, score in files.items():
                by_file.setdefault(file, {})[author] = score
        return by_file

    def __contains__(self, author: object) -> bool:
        return author in self._scores

    def __len__(self) -> int:
        return len(self._scores)


class AuthorAffinity:
    """One author's slice of the matrix, exposed as a coverage group."""

    __slots__ = ("matrix", "author")

    def __init__(self, matrix: AffinityMatrix, author: str) -> None:
        self.matrix = matrix
        self.author = author

    def covered(self) -> set[str]:
        return self.matrix.files_covered_by(self.author)

    def score(self, candidates: Iterable[str]) -> float:
        return self.matrix.total_score(self.author, candidates)

    def __repr__(self) -> str:
        return f"AuthorAffinity({self.author!r})"
