"""Greedy weighted set cover.

The solver knows nothing about authors or files. It works on any mapping
``group id -> CoverageGroup`` where a group can report the elements it covers
and score itself against a candidate set of still-uncovered elements.

Each round picks the available group with the strictly highest score against
the remaining elements, then removes that group's *entire* coverage from the
remaining set, not just the elements that contributed to its score. The loop
stops when nothing remains or when the best score is 0.

Ties go to the group met first while walking ``groups`` in mapping order, so
callers control the tie-break through insertion order.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Mapping
from typing import Protocol

from reviewcover.cover.models import CoverRound, Solution

logger = logging.getLogger("reviewcover.cover")


class CoverageGroup(Protocol):
    """Anything that can take part in a cover."""

    def covered(self) -> set:
        """All elements this group covers."""
        ...

    def score(self, candidates: Iterable) -> float:
        """How much this group contributes towards covering ``candidates``."""
        ...


class CoverageSolver:
    """Greedy logarithmic-approximation heuristic for weighted set cover.

    The result is not an optimal cover; it is the exact trace of the greedy
    rule and nothing is revisited once picked.
    """

    def __init__(self, groups: Mapping[Hashable, CoverageGroup]) -> None:
        self.groups = groups

    def solve(self, universe: Iterable[Hashable]) -> Solution:
        """Cover ``universe`` and return the picks plus what stayed uncovered.

        ``universe`` order is kept for scoring, so float sums are reproducible.
        """
        # dict as an ordered set
        remaining = dict.fromkeys(universe)
        available = list(self.groups)
        solution = Solution()

        while remaining:
            best: Hashable | None = None
            best_score = 0.0

            for group_id in available:
                group = self.groups.get(group_id)
                if group is None:
                    # Dropped from the mapping since the solve started
                    continue
                score = group.score(remaining)
                if score > best_score:
                    best, best_score = group_id, score

            if best is None:
                break

            available.remove(best)
            removed = {e for e in self.groups[best].covered() if e in remaining}
            for element in removed:
                del remaining[element]

            solution.order.append(best)
            solution.rounds.append(CoverRound(group=best, score=best_score, removed=removed))
            logger.debug(
                "round %d: picked %r (score %.3f), %d removed, %d remaining",
                len(solution.rounds), best, best_score, len(removed), len(remaining),
            )

        solution.uncovered = set(remaining)
        return solution


def solve_cover(
    universe: Iterable[Hashable],
    groups: Mapping[Hashable, CoverageGroup],
) -> Solution:
    """Convenience wrapper around :class:`CoverageSolver`."""
    return CoverageSolver(groups).solve(universe)
