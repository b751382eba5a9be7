"""Subtree recombination operators.

Crossover Modes:
- Subtree crossover: graft a random subtree of parent2 into parent1
- Boolean geometric semantic crossover (gsxover): run random boolean code,
  then all of parent1 or all of parent2 depending on the result

Both return parent1 unchanged when the child is over the size cap.
"""

import random
from typing import Optional, Sequence

from variation.evolution.commit import commit_child
from variation.evolution.individual import Individual
from variation.generation.node_selection import select_node_index
from variation.generation.random_code import random_code
from variation.interfaces import AtomGenerator, CodeGenerator, NodeSelector
from variation.program.addressing import code_at_point, insert_code_at_point
from variation.util.rng import require_rng_param

# Exec-stack conditional: pops a boolean and keeps one of the next two items.
EXEC_IF = "exec_if"


def crossover(
    parent1: Individual,
    parent2: Individual,
    max_points: int,
    rng: Optional[random.Random] = None,
    node_selector: Optional[NodeSelector] = None,
) -> Individual:
    """Return a copy of parent1 with a random subprogram replaced with a
    random subprogram of parent2.
    """
    rng = require_rng_param(rng, "crossover")
    select = node_selector or select_node_index

    index1 = select(parent1.program, rng)
    index2 = select(parent2.program, rng)
    new_program = insert_code_at_point(
        parent1.program,
        index1,
        code_at_point(parent2.program, index2),
    )
    return commit_child(parent1, new_program, max_points, "crossover")


def boolean_gsxover(
    parent1: Individual,
    parent2: Individual,
    new_code_max_points: int,
    max_points: int,
    atom_generators: Sequence[AtomGenerator],
    rng: Optional[random.Random] = None,
    code_generator: Optional[CodeGenerator] = None,
) -> Individual:
    """Return a child produced by boolean geometric semantic crossover.

    The child has the form ``(new-random-code exec_if parent1-code parent2-code)``.
    The random code is expected to leave a boolean for ``exec_if``; both parent
    programs are embedded whole.

    Args:
        parent1: First parent, supplies history and lineage
        parent2: Second parent
        new_code_max_points: Size bound for the random condition code
        max_points: Size cap for the child
        atom_generators: Vocabulary for the condition code
        rng: Random number generator
        code_generator: Random code generator (``random_code`` if None)
    """
    rng = require_rng_param(rng, "boolean_gsxover")
    generate = code_generator or random_code

    new_program = (
        generate(new_code_max_points, atom_generators, rng),
        EXEC_IF,
        parent1.program,
        parent2.program,
    )
    return commit_child(parent1, new_program, max_points, "boolean_gsxover")
