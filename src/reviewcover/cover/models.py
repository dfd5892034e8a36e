"""Data models for reviewer selection results."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CoverRound:
    """One greedy pick: the group chosen, its score and what it removed."""

    group: Hashable
    score: float
    removed: set = field(default_factory=set)


@dataclass
class Solution:
    """Result of a greedy cover.

    ``order`` lists the chosen groups in pick order; ``uncovered`` holds the
    elements no chosen group removed.
    """

    order: list = field(default_factory=list)
    uncovered: set = field(default_factory=set)
    rounds: list[CoverRound] = field(default_factory=list)

    @property
    def chosen(self) -> set:
        return set(self.order)


@dataclass
class HistoryRecord:
    """A single ``(author, commit count)`` line of a file's history."""

    author: str
    commits: int


@dataclass
class ReviewReport:
    """Everything a presentation layer needs to render a suggestion."""

    files: list[str] = field(default_factory=list)
    reviewers: list[str] = field(default_factory=list)
    assignments: dict[str, list[str]] = field(default_factory=dict)
    uncovered: list[str] = field(default_factory=list)
    scores: dict[str, dict[str, float]] = field(default_factory=dict)
    candidates: dict[str, set[str]] = field(default_factory=dict)
    rounds: list[CoverRound] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.files

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": list(self.files),
            "reviewers": [
                {"identity": r, "files": list(self.assignments.get(r, []))}
                for r in self.reviewers
            ],
            "uncovered": list(self.uncovered),
            "scores": {
                f: {a: round(s, 4) for a, s in by_author.items()}
                for f, by_author in self.scores.items()
            },
            "rounds": [
                {
                    "reviewer": r.group,
                    "score": round(r.score, 4),
                    "removed": sorted(r.removed),
                }
                for r in self.rounds
            ],
        }
