"""Tests for subtree crossover and boolean gsxover.

Verifies that:
- Crossover grafts the selected parent2 subtree at the selected parent1 node
- gsxover wraps both parents behind random boolean code and exec_if
- Oversized children fall back to parent1
"""

import random

import pytest

from tests.fakes.scripted import FixedCodeGenerator, FixedNodeSelector
from variation.evolution import boolean_gsxover, crossover, make_individual
from variation.evolution.crossover import EXEC_IF
from variation.generation.random_code import random_code
from variation.program import code_at_point, count_points, is_seq
from variation.util.rng import MissingRNGError


class TestCrossover:
    """Tests for subtree crossover."""

    def test_grafts_selected_subtree(self, individual):
        parent1 = individual("(a b (c d))")
        parent2 = individual("(x (y z))")
        selector = FixedNodeSelector(3, 2)
        child = crossover(parent1, parent2, 100, random.Random(0), node_selector=selector)
        assert child.program == ("a", "b", ("y", "z"))
        assert selector.calls == [parent1.program, parent2.program]

    def test_atom_from_parent2(self, individual):
        child = crossover(
            individual("(a b (c d))"), individual("(x (y z))"), 100,
            random.Random(0), node_selector=FixedNodeSelector(3, 1),
        )
        assert child.program == ("a", "b", "x")

    def test_whole_parent2_at_root(self, individual):
        parent2 = individual("(x (y z))")
        child = crossover(
            individual("(a b)"), parent2, 100, random.Random(0),
            node_selector=FixedNodeSelector(0, 0),
        )
        assert child.program == parent2.program

    def test_size_cap_returns_parent1(self, individual):
        parent1 = individual("(a b)")
        parent2 = individual("(x (y z) (u v w))")
        child = crossover(parent1, parent2, 5, random.Random(0),
                          node_selector=FixedNodeSelector(1, 0))
        assert child is parent1

    def test_history_comes_from_parent1(self, individual):
        parent1 = individual("(a b)", history=[3, 1])
        parent2 = individual("(c)", history=[9])
        child = crossover(parent1, parent2, 100, random.Random(0),
                          node_selector=FixedNodeSelector(1, 1))
        assert child.history == [3, 1]

    @pytest.mark.parametrize("seed", range(40))
    def test_child_contains_parent2_subtree(self, seed: int) -> None:
        rng = random.Random(seed)
        vocabulary = ["a", "b", 1, 2.0]
        parent1 = make_individual(random_code(30, vocabulary, rng))
        parent2 = make_individual(random_code(30, vocabulary, rng))
        child = crossover(parent1, parent2, 200, rng)
        assert count_points(child.program) <= 200
        assert count_points(child.program) <= count_points(parent1.program) + count_points(parent2.program)

    def test_missing_rng_fails_loudly(self, individual):
        with pytest.raises(MissingRNGError):
            crossover(individual("(a)"), individual("(b)"), 10)


class TestBooleanGsxover:
    """Tests for boolean geometric semantic crossover."""

    def test_child_shape(self, individual):
        parent1 = individual("(a b)")
        parent2 = individual("(c)")
        generator = FixedCodeGenerator(("boolean_and",))
        child = boolean_gsxover(parent1, parent2, 20, 100, ["boolean_and"], random.Random(0),
                                code_generator=generator)
        assert child.program == (("boolean_and",), EXEC_IF, ("a", "b"), ("c",))
        assert generator.calls == [(20, ["boolean_and"])]

    def test_parents_embedded_whole(self, individual, atom_generators):
        parent1 = individual("(integer_add (1 2))")
        parent2 = individual("(exec_dup true)")
        child = boolean_gsxover(parent1, parent2, 10, 500, atom_generators, random.Random(4))
        assert child.program[1] == EXEC_IF
        assert child.program[2] == parent1.program
        assert child.program[3] == parent2.program

    def test_atom_condition_code(self, individual):
        child = boolean_gsxover(
            individual("(a)"), individual("(b)"), 1, 100, ["boolean_or"], random.Random(0),
            code_generator=FixedCodeGenerator("boolean_or"),
        )
        assert child.program == ("boolean_or", EXEC_IF, ("a",), ("b",))
        assert not is_seq(code_at_point(child.program, 1))

    def test_size_cap_returns_parent1(self, individual):
        parent1 = individual("(a b c)")
        parent2 = individual("(d e f)")
        child = boolean_gsxover(parent1, parent2, 5, 10, ["x"], random.Random(0),
                                code_generator=FixedCodeGenerator(("x", "x")))
        assert child is parent1

    def test_history_comes_from_parent1(self, individual):
        parent1 = individual("(a)", history=[1])
        child = boolean_gsxover(parent1, individual("(b)"), 3, 100, ["x"], random.Random(0))
        assert child.history == [1]
