"""Tests for the greedy set cover solver."""

from __future__ import annotations

import pytest

from reviewcover.cover.matrix import AffinityMatrix
from reviewcover.cover.solver import CoverageSolver, solve_cover


class WeightedGroup:
    """A plain coverage group: covers ``covers``, scores via ``weights``."""

    def __init__(self, weights: dict, covers: set | None = None):
        self.weights = weights
        self.covers = set(weights) if covers is None else covers

    def covered(self):
        return set(self.covers)

    def score(self, candidates):
        return sum(self.weights.get(c, 0.0) for c in candidates)


class GhostMapping(dict):
    """Iterates a group id that is no longer present for lookups."""

    def __iter__(self):
        yield "ghost"
        yield from super().__iter__()


class TestSolverBasics:
    def test_empty_universe(self):
        solution = solve_cover([], {"x": WeightedGroup({"a": 1.0})})
        assert solution.chosen == set()
        assert solution.uncovered == set()
        assert solution.rounds == []

    def test_no_groups(self):
        solution = solve_cover(["a", "b"], {})
        assert solution.chosen == set()
        assert solution.uncovered == {"a", "b"}

    def test_single_group_covers_everything(self):
        solution = solve_cover(["a", "b"], {"x": WeightedGroup({"a": 1.0, "b": 0.5})})
        assert solution.order == ["x"]
        assert solution.uncovered == set()

    def test_highest_score_wins(self):
        groups = {
            "alice": WeightedGroup({"A": 1.0}),
            "bob": WeightedGroup({"A": 0.4, "B": 1.0}),
        }
        solution = solve_cover(["A", "B"], groups)
        assert solution.order == ["bob"]
        assert solution.rounds[0].score == pytest.approx(1.4)
        assert solution.rounds[0].removed == {"A", "B"}

    def test_greedy_trace(self):
        groups = {
            "x": WeightedGroup({"a": 1.0, "b": 1.0}),
            "y": WeightedGroup({"b": 1.0, "c": 1.0, "d": 1.0}),
            "z": WeightedGroup({"a": 0.5, "e": 0.2}),
        }
        solution = solve_cover(["a", "b", "c", "d", "e"], groups)
        assert solution.order == ["y", "x", "z"]
        assert [r.removed for r in solution.rounds] == [{"b", "c", "d"}, {"a"}, {"e"}]
        assert [r.score for r in solution.rounds] == pytest.approx([3.0, 1.0, 0.2])
        assert solution.uncovered == set()

    def test_not_optimal_but_greedy(self):
        # Optimal is {left, right}; greedy takes the big middle set first.
        groups = {
            "left": WeightedGroup({1: 1.0, 2: 1.0, 3: 1.0}),
            "right": WeightedGroup({4: 1.0, 5: 1.0, 6: 1.0}),
            "middle": WeightedGroup({2: 1.0, 3: 1.0, 4: 1.0, 5: 1.0}),
        }
        solution = solve_cover([1, 2, 3, 4, 5, 6], groups)
        assert solution.order == ["middle", "left", "right"]


class TestTieBreak:
    def test_first_group_in_mapping_order_wins(self):
        groups = {
            "first": WeightedGroup({"a": 1.0}),
            "second": WeightedGroup({"a": 1.0}),
        }
        assert solve_cover(["a"], groups).order == ["first"]

        reversed_groups = {"second": groups["second"], "first": groups["first"]}
        assert solve_cover(["a"], reversed_groups).order == ["second"]


class TestFootprintRemoval:
    def test_removes_entire_footprint_not_just_scored(self):
        groups = {
            "x": WeightedGroup({"a": 1.0}, covers={"a", "b", "c"}),
            "y": WeightedGroup({"b": 0.9, "c": 0.9}),
        }
        solution = solve_cover(["a", "b", "c"], groups)
        # y scores 1.8 against x's 1.0, so y goes first and removes b, c.
        assert solution.order == ["y", "x"]

        groups["y"] = WeightedGroup({"b": 0.4})
        solution = solve_cover(["a", "b", "c"], groups)
        # x wins and consumes b and c even though only a contributed.
        assert solution.order == ["x"]
        assert solution.rounds[0].removed == {"a", "b", "c"}
        assert solution.uncovered == set()

    def test_footprint_outside_universe_is_ignored(self):
        groups = {"x": WeightedGroup({"a": 1.0, "elsewhere": 1.0})}
        solution = solve_cover(["a"], groups)
        assert solution.rounds[0].removed == {"a"}
        assert solution.rounds[0].score == 1.0


class TestTermination:
    def test_zero_coverage_group_never_chosen(self):
        groups = {
            "empty": WeightedGroup({}),
            "x": WeightedGroup({"a": 1.0}),
        }
        solution = solve_cover(["a", "b"], groups)
        assert solution.order == ["x"]
        assert solution.uncovered == {"b"}

    def test_stops_when_best_score_is_zero(self):
        groups = {"x": WeightedGroup({"a": 1.0}), "y": WeightedGroup({"a": 0.5})}
        solution = solve_cover(["a", "b", "c"], groups)
        # After x, y only covers removed elements and scores 0.
        assert solution.order == ["x"]
        assert solution.uncovered == {"b", "c"}

    def test_rounds_bounded_by_group_count(self):
        groups = {
            f"g{i}": WeightedGroup({i: 1.0, i + 1: 0.5}) for i in range(10)
        }
        solution = solve_cover(range(12), groups)
        assert len(solution.rounds) <= len(groups)
        assert len(set(solution.order)) == len(solution.order)

    def test_removed_elements_never_reappear(self):
        groups = {
            "x": WeightedGroup({"a": 1.0, "b": 1.0}),
            "y": WeightedGroup({"b": 1.0, "c": 0.5}),
            "z": WeightedGroup({"a": 0.3, "c": 1.0, "d": 1.0}),
        }
        solution = solve_cover(["a", "b", "c", "d", "e"], groups)
        seen: set = set()
        for r in solution.rounds:
            assert not (r.removed & seen)
            seen |= r.removed
        assert seen | solution.uncovered == {"a", "b", "c", "d", "e"}
        assert not (seen & solution.uncovered)

    def test_complete_when_every_element_has_a_group(self):
        groups = {
            "x": WeightedGroup({"a": 0.1}),
            "y": WeightedGroup({"b": 0.2}),
            "z": WeightedGroup({"c": 1.0, "b": 0.3}),
        }
        assert solve_cover(["a", "b", "c"], groups).uncovered == set()


class TestMissingGroups:
    def test_group_missing_from_mapping_scores_zero(self):
        groups = GhostMapping(x=WeightedGroup({"a": 1.0}))
        solution = CoverageSolver(groups).solve(["a", "b"])
        assert solution.order == ["x"]
        assert "ghost" not in solution.chosen
        assert solution.uncovered == {"b"}


class TestWithAffinityMatrix:
    def test_matrix_groups_plug_in(self):
        m = AffinityMatrix()
        m.record("alice", "A.txt", 1.0)
        m.record("bob", "A.txt", 0.4)
        m.record("bob", "B.txt", 1.0)
        solution = solve_cover(["A.txt", "B.txt"], m.groups())
        assert solution.chosen == {"bob"}
        assert solution.uncovered == set()
