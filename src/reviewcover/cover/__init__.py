"""Reviewer selection core.

Turns per-file authorship history into affinity scores and picks a small
reviewer set with a greedy weighted set cover.

Usage:
    from reviewcover.cover import ReviewerEngine

    report = ReviewerEngine(provider).run(files, excluded={"me@example.com"})
"""

from reviewcover.cover.engine import ReviewerEngine
from reviewcover.cover.matrix import AffinityMatrix, AuthorAffinity
from reviewcover.cover.models import CoverRound, HistoryRecord, ReviewReport, Solution
from reviewcover.cover.solver import CoverageGroup, CoverageSolver, solve_cover

__all__ = [
    "AffinityMatrix",
    "AuthorAffinity",
    "CoverageGroup",
    "CoverageSolver",
    "CoverRound",
    "HistoryRecord",
    "ReviewerEngine",
    "ReviewReport",
    "Solution",
    "solve_cover",
]
