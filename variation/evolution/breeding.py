"""Breeding: choose a variation operator and apply it.

The evolutionary loop owns parent selection (lexicase, tournament, ...); it
hands ``breed`` a callable that returns one selected parent per call. Each
child is produced by one operator drawn according to the operator
probabilities of ``VariationConfig``; the probability left over copies a
selected parent unchanged (reproduction).
"""

import logging
import random
from typing import Optional, Sequence

from variation.config.variation import DEFAULT_VARIATION_CONFIG, VariationConfig
from variation.evolution.crossover import boolean_gsxover, crossover
from variation.evolution.individual import Individual
from variation.evolution.mutation import (
    add_parentheses_mutate,
    delete_mutate,
    gaussian_mutate,
    mutate,
    tag_branch_insertion_mutate,
    tagging_mutate,
)
from variation.evolution.ultra import ultra
from variation.generation.node_selection import NodeSelector
from variation.interfaces import AtomGenerator, CodeGenerator, ParentSelector
from variation.util.rng import require_rng_param

logger = logging.getLogger(__name__)

REPRODUCTION = "reproduction"


def choose_operator(config: VariationConfig, rng: random.Random) -> str:
    """Draw an operator name according to the configured probabilities."""
    prob = rng.random()
    cumulative = 0.0
    for name, probability in config.operator_probabilities().items():
        cumulative += probability
        if prob < cumulative:
            return name
    return REPRODUCTION


def apply_operator(
    operator: str,
    select_parent: ParentSelector,
    atom_generators: Sequence[AtomGenerator],
    rng: random.Random,
    config: VariationConfig,
    node_selector: NodeSelector,
    code_generator: Optional[CodeGenerator] = None,
) -> Individual:
    """Apply the named operator to freshly selected parents.

    Raises:
        ValueError: If operator is not a known operator name
    """
    if operator == REPRODUCTION:
        return select_parent(rng)

    parent = select_parent(rng)

    if operator == "mutation":
        return mutate(
            parent, config.mutation_max_points, config.max_points, atom_generators, rng,
            node_selector=node_selector, code_generator=code_generator,
        )
    elif operator == "crossover":
        return crossover(
            parent, select_parent(rng), config.max_points, rng, node_selector=node_selector,
        )
    elif operator == "boolean_gsxover":
        return boolean_gsxover(
            parent, select_parent(rng), config.boolean_gsxover_new_code_max_points,
            config.max_points, atom_generators, rng, code_generator=code_generator,
        )
    elif operator == "deletion":
        return delete_mutate(parent, config.max_points, rng)
    elif operator == "parentheses_addition":
        return add_parentheses_mutate(parent, config.max_points, rng)
    elif operator == "tagging":
        return tagging_mutate(
            parent, config.max_points, config.tag_limit, rng, node_selector=node_selector,
        )
    elif operator == "tag_branch_insertion":
        return tag_branch_insertion_mutate(
            parent, config.max_points, config.tag_branch_type_instruction_pairs, config.tag_limit, rng,
        )
    elif operator == "gaussian_mutation":
        return gaussian_mutate(
            parent,
            config.gaussian_mutation_per_number_mutation_probability,
            config.gaussian_mutation_standard_deviation,
            rng,
            max_points=config.max_points,
        )
    elif operator == "ultra":
        return ultra(
            parent, select_parent(rng), config.max_points,
            config.ultra_alternation_rate, config.ultra_alignment_deviation, config.ultra_mutation_rate,
            atom_generators, rng, code_generator=code_generator,
        )
    raise ValueError(f"Unknown variation operator: {operator!r}")


def breed(
    select_parent: ParentSelector,
    atom_generators: Sequence[AtomGenerator],
    rng: Optional[random.Random] = None,
    config: Optional[VariationConfig] = None,
    node_selector: Optional[NodeSelector] = None,
    code_generator: Optional[CodeGenerator] = None,
) -> Individual:
    """Produce one child.

    Args:
        select_parent: Returns a selected parent each time it is called
        atom_generators: Vocabulary for operators that write new code
        rng: Random number generator
        config: Variation configuration (uses default if None)
        node_selector: Node selection strategy (built from config if None)
        code_generator: Random code generator (``random_code`` if None)

    Returns:
        The child, or a parent when the operator's child broke the size cap
    """
    rng = require_rng_param(rng, "breed")
    cfg = config or DEFAULT_VARIATION_CONFIG
    selector = node_selector or NodeSelector(config.node_selection)

    operator = choose_operator(cfg, rng)
    logger.debug("Breeding with %s", operator)
    return apply_operator(operator, select_parent, atom_generators, rng, cfg, selector, code_generator)
