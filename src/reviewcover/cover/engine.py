"""Reviewer selection: history in, reviewer set out.

Usage:
    from reviewcover.cover import ReviewerEngine
    from reviewcover.git import GitHistoryProvider

    engine = ReviewerEngine(GitHistoryProvider(root))
    report = engine.run(["src/app.py", "README.md"], excluded={"me@example.com"})
    print(report.reviewers, report.uncovered)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Protocol

from reviewcover.cover.matrix import AffinityMatrix
from reviewcover.cover.models import HistoryRecord, ReviewReport
from reviewcover.cover.records import normalize, parse_history
from reviewcover.cover.solver import CoverageSolver

logger = logging.getLogger("reviewcover.cover")

DEFAULT_HISTORY_DEPTH = 100
DEFAULT_CANDIDATE_LIMIT = 10


class HistoryProvider(Protocol):
    """Source of ``count identity`` lines for one file."""

    def fetch_history(
        self,
        file: str,
        excluded: set[str],
        depth: int,
        limit: int,
    ) -> Sequence[str]:
        ...


ProgressCallback = Callable[[str, int, int], None]


class ReviewerEngine:
    """Builds the affinity matrix for a set of files and covers it.

    History for different files is independent, so with ``jobs > 1`` it is
    fetched on a thread pool. Results are always ingested in input order,
    which keeps the author order (and so the solver's tie-break) the same
    whatever the worker count.
    """

    def __init__(self, provider: HistoryProvider, jobs: int = 1) -> None:
        self.provider = provider
        self.jobs = max(1, jobs)
        self.matrix = AffinityMatrix()

    def run(
        self,
        files: Iterable[str],
        excluded: Iterable[str] = (),
        history_depth: int = DEFAULT_HISTORY_DEPTH,
        candidate_limit: int = DEFAULT_CANDIDATE_LIMIT,
        progress_callback: ProgressCallback | None = None,
    ) -> ReviewReport:
        """Pick reviewers for ``files``.

        Args:
            files: Changed file paths. Duplicates are collapsed.
            excluded: Author identities that may never be suggested.
            history_depth: How many revisions back to look per file.
            candidate_limit: Most authors considered per file.
            progress_callback: Optional callback(file_path, completed, total).

        Returns:
            A ReviewReport. Empty input gives an empty report.
        """
        universe = list(dict.fromkeys(files))
        excluded = set(excluded)
        self.matrix = AffinityMatrix()

        history = self._fetch_all(
            universe, excluded, history_depth, candidate_limit, progress_callback
        )

        candidates: dict[str, set[str]] = {}
        for file in universe:
            records = self._select(parse_history(history.get(file, ())), excluded, candidate_limit)
            for author, score in normalize(records):
                self.matrix.record(author, file, score)
            candidates[file] = {
                r.author for r in records if self.matrix.score_for(r.author, file) > 0
            }
            if not records:
                logger.debug("no usable history for %s", file)

        solution = CoverageSolver(self.matrix.groups()).solve(universe)

        assignments = {
            reviewer: [f for f in universe if self.matrix.score_for(reviewer, f) > 0]
            for reviewer in solution.order
        }
        by_file = self.matrix.scores_by_file()
        scores = {
            f: dict(sorted(by_file.get(f, {}).items(), key=lambda kv: -kv[1]))
            for f in universe
        }

        return ReviewReport(
            files=universe,
            reviewers=list(solution.order),
            assignments=assignments,
            uncovered=[f for f in universe if f in solution.uncovered],
            scores=scores,
            candidates=candidates,
            rounds=solution.rounds,
        )

    def _fetch_all(
        self,
        files: list[str],
        excluded: set[str],
        depth: int,
        limit: int,
        progress_callback: ProgressCallback | None,
    ) -> dict[str, Sequence[str]]:
        total = len(files)
        results: dict[str, Sequence[str]] = {}

        if self.jobs == 1 or total <= 1:
            for i, file in enumerate(files, 1):
                results[file] = self.provider.fetch_history(file, excluded, depth, limit)
                if progress_callback:
                    progress_callback(file, i, total)
            return results

        with ThreadPoolExecutor(max_workers=min(self.jobs, total)) as executor:
            futures = {
                executor.submit(self.provider.fetch_history, f, excluded, depth, limit): f
                for f in files
            }
            for done, future in enumerate(as_completed(futures), 1):
                file = futures[future]
                results[file] = future.result()
                if progress_callback:
                    progress_callback(file, done, total)
        return results

    @staticmethod
    def _select(
        records: list[HistoryRecord], excluded: set[str], limit: int
    ) -> list[HistoryRecord]:
        """Drop excluded and repeated authors, then cap at ``limit``."""
        seen: set[str] = set()
        kept = []
        for record in records:
            if record.author in excluded or record.author in seen:
                continue
            seen.add(record.author)
            kept.append(record)
        return kept[:max(limit, 0)]
