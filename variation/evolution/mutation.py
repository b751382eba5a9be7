"""Structural mutation operators.

Each operator takes one parent Individual and returns either a new child or,
when the candidate breaks the size cap, the parent itself (see
``variation.evolution.commit``).

Mutation Types:
- Point mutation: replace a selected subtree with random code
- Deletion: remove 1-4 random nodes, sometimes only their parentheses
- Parentheses addition: wrap a random span of the program text in a new pair
- Tagging: move a subtree behind a tag and reference it by tag
- Tag-branch insertion: insert a comparison that branches to one of two tags
- Gaussian: perturb float literals with normal noise
"""

import logging
import random
from typing import Optional, Sequence, Tuple

from variation.evolution.commit import commit_child
from variation.evolution.individual import Individual
from variation.generation.node_selection import select_node_index
from variation.generation.random_code import random_code
from variation.interfaces import AtomGenerator, CodeGenerator, NodeSelector
from variation.program.addressing import (
    code_at_point,
    insert_code_at_point,
    remove_code_at_point,
    remove_parens_at_point,
)
from variation.program.model import Program, count_points, ensure_seq, is_seq, map_leaves
from variation.program.tags import tag_reference_instruction, tag_write_instruction
from variation.program.text import parse_program, program_to_text
from variation.util.rng import perturb_with_gaussian_noise, require_rng_param

logger = logging.getLogger(__name__)

# Number of deletions: roughly binomial(n=4, p=0.25) shifted up by one so 0 is
# never drawn. p(1)=0.32, p(2)=0.42, p(3)=0.21, p(4)=0.05.
DELETION_COUNT_THRESHOLDS: Tuple[Tuple[float, int], ...] = (
    (0.32, 1),
    (0.74, 2),
    (0.95, 3),
)
MAX_DELETIONS = 4

# Chance that a deletion aimed at a sub-list only removes its parentheses.
REMOVE_PARENS_PROBABILITY = 0.2


def mutate(
    ind: Individual,
    mutation_max_points: int,
    max_points: int,
    atom_generators: Sequence[AtomGenerator],
    rng: Optional[random.Random] = None,
    node_selector: Optional[NodeSelector] = None,
    code_generator: Optional[CodeGenerator] = None,
) -> Individual:
    """Return a mutated version of the given individual.

    A node chosen by node_selector is replaced with random code of at most
    mutation_max_points points.

    Args:
        ind: Parent individual
        mutation_max_points: Size bound for the replacement code
        max_points: Size cap for the child
        atom_generators: Vocabulary for the replacement code
        rng: Random number generator
        node_selector: Node selection strategy (unbiased if None)
        code_generator: Random code generator (``random_code`` if None)

    Returns:
        Mutated child, or ind if the child is over max_points
    """
    rng = require_rng_param(rng, "mutate")
    select = node_selector or select_node_index
    generate = code_generator or random_code

    index = select(ind.program, rng)
    replacement = generate(mutation_max_points, atom_generators, rng)
    new_program = insert_code_at_point(ind.program, index, replacement)
    return commit_child(ind, new_program, max_points, "mutation")


def draw_deletion_count(rng: random.Random) -> int:
    prob = rng.random()
    for threshold, count in DELETION_COUNT_THRESHOLDS:
        if prob < threshold:
            return count
    return MAX_DELETIONS


def delete_mutate(
    ind: Individual,
    max_points: int,
    rng: Optional[random.Random] = None,
) -> Individual:
    """Return the individual with between 1 and 4 points deleted.

    Each deletion picks a uniformly random node of the current program. A
    sub-list loses only its parentheses 20% of the time and is removed whole
    otherwise; an atom is removed. Deletion never grows a program, so the
    size cap only matters for parents already over it.
    """
    rng = require_rng_param(rng, "delete_mutate")
    program = ind.program
    for _ in range(draw_deletion_count(rng)):
        index = rng.randrange(count_points(program))
        point = code_at_point(program, index)
        if is_seq(point) and rng.random() < REMOVE_PARENS_PROBABILITY:
            program = remove_parens_at_point(program, index)
        else:
            program = remove_code_at_point(program, index)
    return commit_child(ind, program, max_points, "deletion")


def add_parentheses(program: Program, rng: random.Random) -> Program:
    """Wrap the text between two random spaces of the program in parentheses.

    Programs whose text has fewer than two spaces are returned unchanged.
    """
    text = program_to_text(program)
    space_indices = [i for i, ch in enumerate(text) if ch == " "]
    if len(space_indices) < 2:
        logger.debug("Cannot add parentheses to %r: fewer than two spaces", text)
        return program
    i = rng.choice(space_indices)
    j = rng.choice([s for s in space_indices if s != i])
    start, stop = min(i, j), max(i, j)
    return parse_program(
        text[:start] + " ( " + text[start + 1:stop] + " ) " + text[stop + 1:]
    )


def add_parentheses_mutate(
    ind: Individual,
    max_points: int,
    rng: Optional[random.Random] = None,
) -> Individual:
    """Return a version of the individual with one pair of parentheses added.

    Not compatible with tagged code macros.
    """
    rng = require_rng_param(rng, "add_parentheses_mutate")
    return commit_child(ind, add_parentheses(ind.program, rng), max_points, "parentheses_addition")


def tagging_mutate(
    ind: Individual,
    max_points: int,
    tag_limit: int,
    rng: Optional[random.Random] = None,
    node_selector: Optional[NodeSelector] = None,
) -> Individual:
    """Replace a piece of code with a tag reference and tag it up front.

    The child is ``((tag_exec_N <code>) <program with code replaced by tagged_N>)``.
    """
    rng = require_rng_param(rng, "tagging_mutate")
    select = node_selector or select_node_index
    old_program = ind.program

    index_to_tag = select(old_program, rng)
    tag = rng.randrange(tag_limit)
    new_program = (
        (tag_write_instruction(tag), code_at_point(old_program, index_to_tag)),
        insert_code_at_point(old_program, index_to_tag, tag_reference_instruction(tag)),
    )
    return commit_child(ind, new_program, max_points, "tagging")


def make_tag_branch(
    type_instruction_pairs: Sequence[Tuple[str, str]],
    tag_limit: int,
    rng: random.Random,
) -> Program:
    """Build a tag-branch snippet.

    The snippet copies (without popping) the top two items of a randomly chosen
    type, compares them with that type's instruction and branches to one of
    two random tags on the result:

        (1 integer_yankdup 1 integer_yankdup integer_eq exec_if tagged_7 tagged_3)
    """
    tag_ref_1 = tag_reference_instruction(rng.randrange(tag_limit))
    tag_ref_2 = tag_reference_instruction(rng.randrange(tag_limit))
    type_name, instruction = rng.choice(type_instruction_pairs)
    yankdup = f"{str(type_name).lstrip(':')}_yankdup"
    return (1, yankdup, 1, yankdup, instruction, "exec_if", tag_ref_1, tag_ref_2)


def insert_randomly(item: Program, program: Program, rng: random.Random) -> Program:
    """Insert item at a uniformly random position of program's top level."""
    seq = ensure_seq(program)
    position = rng.randrange(len(seq) + 1)
    return seq[:position] + (item,) + seq[position:]


def tag_branch_insertion_mutate(
    ind: Individual,
    max_points: int,
    type_instruction_pairs: Sequence[Tuple[str, str]],
    tag_limit: int,
    rng: Optional[random.Random] = None,
) -> Individual:
    """Return the individual with a tag-branch inserted at a random location.

    Args:
        ind: Parent individual
        max_points: Size cap for the child
        type_instruction_pairs: (type, comparison instruction) pairs, as in
            ``("integer", "integer_eq")``
        tag_limit: Tags are drawn from [0, tag_limit)
        rng: Random number generator
    """
    rng = require_rng_param(rng, "tag_branch_insertion_mutate")
    tag_branch = make_tag_branch(type_instruction_pairs, tag_limit, rng)
    new_program = insert_randomly(tag_branch, ind.program, rng)
    return commit_child(ind, new_program, max_points, "tag_branch_insertion")


def perturb_code_with_gaussian_noise(
    code: Program,
    per_num_perturb_probability: float,
    sd: float,
    rng: random.Random,
) -> Program:
    """Return code with each float literal perturbed with std dev sd.

    Each float is perturbed independently with probability
    per_num_perturb_probability. Other atoms and the tree shape are untouched.
    """

    def perturb(item):
        if isinstance(item, float) and rng.random() < per_num_perturb_probability:
            return perturb_with_gaussian_noise(sd, item, rng)
        return item

    return map_leaves(perturb, code)


def gaussian_mutate(
    ind: Individual,
    per_num_perturb_probability: float,
    sd: float,
    rng: Optional[random.Random] = None,
    max_points: Optional[int] = None,
) -> Individual:
    """Return a gaussian-mutated version of the given individual."""
    rng = require_rng_param(rng, "gaussian_mutate")
    new_program = perturb_code_with_gaussian_noise(
        ind.program, per_num_perturb_probability, sd, rng
    )
    return commit_child(ind, new_program, max_points, "gaussian_mutation")
