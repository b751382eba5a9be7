"""Node selection strategies.

Structural operators edit one node chosen by a ``NodeSelector``. The
strategies here are the PushGP ones:

- Unbiased: every node equally likely. Programs have many more leaves than
  internal nodes, so this mostly edits single atoms.
- Leaf probability: choose between leaves and internal nodes first, then
  uniformly within the chosen kind.
- Size tournament: draw several uniform indices and keep the one heading the
  largest subtree, biasing edits toward bigger chunks of code.
"""

import random
from typing import Optional

from variation.config.node_selection import (
    DEFAULT_NODE_SELECTION_CONFIG,
    NodeSelectionConfig,
    NodeSelectionMethod,
)
from variation.program.addressing import internal_indices, leaf_indices, subtree_points
from variation.program.model import Program, count_points
from variation.util.rng import require_rng_param


def select_node_index(
    program: Program,
    rng: Optional[random.Random] = None,
    config: Optional[NodeSelectionConfig] = None,
) -> int:
    """Return the traversal index of a node chosen by the configured method.

    Args:
        program: Program to choose from
        rng: Random number generator
        config: Node selection configuration (uses default if None)

    Returns:
        Index with 0 <= index < count_points(program)
    """
    rng = require_rng_param(rng, "select_node_index")
    cfg = config or DEFAULT_NODE_SELECTION_CONFIG

    if cfg.method == NodeSelectionMethod.LEAF_PROBABILITY:
        return _select_by_leaf_probability(program, rng, cfg.leaf_probability)
    if cfg.method == NodeSelectionMethod.SIZE_TOURNAMENT:
        return _select_by_size_tournament(program, rng, cfg.tournament_size)
    return rng.randrange(count_points(program))


def _select_by_leaf_probability(program: Program, rng: random.Random, leaf_probability: float) -> int:
    leaves = leaf_indices(program)
    internals = internal_indices(program)
    # Either kind can be missing: a bare atom has no internal nodes and a
    # tree of empty groups has no leaves.
    if not internals:
        return rng.choice(leaves)
    if not leaves:
        return rng.choice(internals)
    if rng.random() < leaf_probability:
        return rng.choice(leaves)
    return rng.choice(internals)


def _select_by_size_tournament(program: Program, rng: random.Random, tournament_size: int) -> int:
    points = count_points(program)
    best_index = rng.randrange(points)
    best_size = subtree_points(program, best_index)
    for _ in range(tournament_size - 1):
        index = rng.randrange(points)
        size = subtree_points(program, index)
        if size > best_size:
            best_index, best_size = index, size
    return best_index


class NodeSelector:
    """Callable node selector bound to one configuration.

    Satisfies ``variation.interfaces.NodeSelector`` so operators can be handed
    a configured strategy.
    """

    def __init__(self, config: Optional[NodeSelectionConfig] = None):
        self.config = config or DEFAULT_NODE_SELECTION_CONFIG

    def __call__(self, program: Program, rng: random.Random) -> int:
        return select_node_index(program, rng, self.config)

    def __repr__(self) -> str:
        return f"NodeSelector({self.config.method.value})"
