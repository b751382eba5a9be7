"""Tests for the default collaborators: node selection and random code."""

import random
from collections import Counter

import pytest

from variation.config import NodeSelectionConfig, NodeSelectionMethod
from variation.exceptions import ConfigurationError
from variation.generation import (
    NodeSelector,
    decompose,
    random_code,
    random_code_with_size,
    select_node_index,
)
from variation.interfaces import CodeGenerator
from variation.interfaces import NodeSelector as NodeSelectorProtocol
from variation.program import code_at_point, count_points, is_seq, iter_leaves, subtree_points
from variation.util.rng import MissingRNGError

PROGRAM = ("a", ("b", "c", ("d", "e")), "f")


class TestNodeSelection:
    """Tests for node selection strategies."""

    @pytest.mark.parametrize("method", list(NodeSelectionMethod))
    def test_index_in_range(self, method):
        rng = random.Random(3)
        config = NodeSelectionConfig(method=method)
        for _ in range(200):
            assert 0 <= select_node_index(PROGRAM, rng, config) < count_points(PROGRAM)

    def test_unbiased_reaches_every_node(self):
        rng = random.Random(5)
        seen = {select_node_index(PROGRAM, rng) for _ in range(500)}
        assert seen == set(range(count_points(PROGRAM)))

    def test_leaf_probability_one_picks_leaves(self):
        rng = random.Random(7)
        config = NodeSelectionConfig(method=NodeSelectionMethod.LEAF_PROBABILITY, leaf_probability=1.0)
        for _ in range(100):
            index = select_node_index(PROGRAM, rng, config)
            assert not is_seq(code_at_point(PROGRAM, index))

    def test_leaf_probability_zero_picks_internal_nodes(self):
        rng = random.Random(7)
        config = NodeSelectionConfig(method=NodeSelectionMethod.LEAF_PROBABILITY, leaf_probability=0.0)
        for _ in range(100):
            index = select_node_index(PROGRAM, rng, config)
            assert is_seq(code_at_point(PROGRAM, index))

    def test_leaf_probability_on_bare_atom(self):
        config = NodeSelectionConfig(method=NodeSelectionMethod.LEAF_PROBABILITY, leaf_probability=0.0)
        assert select_node_index("a", random.Random(1), config) == 0

    def test_size_tournament_prefers_bigger_subtrees(self):
        rng = random.Random(11)
        unbiased = NodeSelectionConfig()
        tournament = NodeSelectionConfig(method=NodeSelectionMethod.SIZE_TOURNAMENT, tournament_size=4)

        def mean_size(config):
            sizes = [subtree_points(PROGRAM, select_node_index(PROGRAM, rng, config))
                     for _ in range(2000)]
            return sum(sizes) / len(sizes)

        assert mean_size(tournament) > mean_size(unbiased)

    def test_missing_rng_fails_loudly(self):
        with pytest.raises(MissingRNGError):
            select_node_index(PROGRAM)

    def test_selector_satisfies_protocol(self):
        selector = NodeSelector(NodeSelectionConfig(method=NodeSelectionMethod.SIZE_TOURNAMENT))
        assert isinstance(selector, NodeSelectorProtocol)
        assert 0 <= selector(PROGRAM, random.Random(0)) < count_points(PROGRAM)

    def test_invalid_config(self):
        with pytest.raises(ConfigurationError):
            NodeSelectionConfig(leaf_probability=1.5)
        with pytest.raises(ConfigurationError):
            NodeSelectionConfig(tournament_size=0)


class TestRandomCode:
    """Tests for random program generation."""

    def test_decompose_sums_to_number(self):
        rng = random.Random(2)
        for number in range(1, 30):
            for max_parts in range(0, 6):
                parts = decompose(number, max_parts, rng)
                assert sum(parts) == number
                assert all(part >= 1 for part in parts)
                assert len(parts) <= max(1, max_parts)

    @pytest.mark.parametrize("points", [1, 2, 3, 10, 57])
    def test_exact_size(self, points):
        rng = random.Random(points)
        program = random_code_with_size(points, ["x", "y"], rng)
        assert count_points(program) == points

    @pytest.mark.parametrize("seed", range(30))
    def test_bounded_size(self, seed: int) -> None:
        rng = random.Random(seed)
        program = random_code(15, ["x", 1, 2.0], rng)
        assert 1 <= count_points(program) <= 15

    def test_atoms_come_from_vocabulary(self):
        rng = random.Random(9)
        vocabulary = ["x", "y", 4]
        for _ in range(50):
            for leaf in iter_leaves(random_code(20, vocabulary, rng)):
                assert leaf in vocabulary

    def test_callable_generators_are_invoked(self):
        rng = random.Random(13)
        program = random_code_with_size(12, [lambda r: r.randint(100, 200)], rng)
        leaves = list(iter_leaves(program))
        assert leaves
        assert all(isinstance(leaf, int) and 100 <= leaf <= 200 for leaf in leaves)

    def test_single_point_is_an_atom(self):
        rng = random.Random(0)
        counts = Counter(random_code(1, ["x", "y"], rng) for _ in range(100))
        assert set(counts) == {"x", "y"}

    def test_empty_vocabulary_rejected(self):
        with pytest.raises(ConfigurationError):
            random_code(5, [], random.Random(0))

    def test_function_satisfies_protocol(self):
        assert isinstance(random_code, CodeGenerator)
