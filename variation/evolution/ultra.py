"""ULTRA: Uniform Linear Transformation with Repair and Alternation.

ULTRA recombines two programs as if they were linear genomes:

1. Pad the shorter parent's top level with empty groups.
2. Flatten both parents into token streams (nesting becomes OPEN/CLOSE).
3. Alternate: walk both streams with one index, copying from the current
   source and occasionally switching sources while shifting the index by
   Gaussian noise (an alignment drift).
4. Mutate tokens uniformly, possibly introducing brackets or empty groups.
5. Repair the brackets so the stream is well-formed again.
6. Read the stream back into a program and drop empty sub-lists.

If either parent is a bare atom the operator returns parent1's program.
"""

import logging
import math
import random
from typing import List, Optional, Sequence

from variation.evolution.commit import commit_child
from variation.evolution.individual import Individual
from variation.generation.random_code import random_code
from variation.interfaces import AtomGenerator, CodeGenerator
from variation.program.model import CLOSE, EMPTY_GROUP, OPEN, Marker, Program, is_seq
from variation.program.tokens import flatten, reconstruct, remove_empties
from variation.util.rng import gaussian_noise_factor, require_rng_param

logger = logging.getLogger(__name__)

# Alternation stops once the child stream grows past this many tokens.
MAX_ALTERNATION_TOKENS = 10000

# Chance that an unmatched bracket is repaired by deletion rather than by
# inserting a partner.
REPAIR_DELETE_PROBABILITY = 0.5


def pad_programs(p1: Program, p2: Program):
    """Extend the shorter top-level sequence with empty groups."""
    difference = len(p1) - len(p2)
    if difference > 0:
        p2 = p2 + (EMPTY_GROUP,) * difference
    elif difference < 0:
        p1 = p1 + (EMPTY_GROUP,) * -difference
    return p1, p2


def alternate(
    s1: Sequence,
    s2: Sequence,
    alternation_rate: float,
    alignment_deviation: float,
    rng: random.Random,
) -> List:
    """Interleave two token streams with Gaussian alignment drift.

    Starting from a random source, each step either copies ``source[i]`` and
    advances i, or (with probability alternation_rate) switches source and
    shifts i by ``round(alignment_deviation * noise)``, clamped at 0, without
    copying. Stops when i runs off the current source or the result passes
    MAX_ALTERNATION_TOKENS.
    """
    if not 0.0 <= alternation_rate < 1.0:
        raise ValueError(f"alternation_rate must be in [0, 1), got {alternation_rate}")
    sources = (list(s1), list(s2))
    use_s1 = rng.choice((True, False))
    i = 0
    result: List = []
    while True:
        current = sources[0] if use_s1 else sources[1]
        if i >= len(current):
            break
        if len(result) > MAX_ALTERNATION_TOKENS:
            logger.debug("Alternation stopped at %d tokens (runaway growth)", len(result))
            break
        if rng.random() < alternation_rate:
            # Round half up, like Math/round.
            shift = math.floor(alignment_deviation * gaussian_noise_factor(rng) + 0.5)
            i = max(0, i + shift)
            use_s1 = not use_s1
        else:
            result.append(current[i])
            i += 1
    return result


def linearly_mutate(
    tokens: Sequence,
    mutation_rate: float,
    atom_generators: Sequence[AtomGenerator],
    rng: random.Random,
    code_generator: Optional[CodeGenerator] = None,
) -> List:
    """Replace each token, with probability mutation_rate, by a random atom.

    The vocabulary is atom_generators plus OPEN, CLOSE and the empty group, so
    mutation can open or close nesting levels.
    """
    generate = code_generator or random_code
    vocabulary = list(atom_generators) + [OPEN, CLOSE, EMPTY_GROUP]
    return [
        generate(1, vocabulary, rng) if rng.random() < mutation_rate else token
        for token in tokens
    ]


def left_balance(tokens: Sequence, left: Marker, right: Marker, rng: random.Random) -> List:
    """Repair every ``right`` that has no earlier unmatched ``left``.

    Scanning left to right, an unmatched right is fixed either by deleting a
    uniformly chosen right from the scanned part (the current one included),
    or by inserting a left at a uniformly chosen position of the scanned part.
    After a repair the scan continues from the repaired position: the prefix
    before it is unchanged and already known to need no repair, so this visits
    the same states, and consumes the same random draws, as rescanning from
    the start.

    Unmatched lefts are left alone; ``balance`` catches them on a reversed pass.
    """
    tokens = list(tokens)
    # depths[j] is the number of unmatched lefts before tokens[j].
    depths: List[int] = []
    extra_lefts = 0
    pos = 0
    while pos < len(tokens):
        token = tokens[pos]
        if token is right and extra_lefts == 0:
            if rng.random() < REPAIR_DELETE_PROBABILITY:
                locations = [j for j in range(pos + 1) if tokens[j] is right]
                repair_at = rng.choice(locations)
                del tokens[repair_at]
            else:
                repair_at = rng.randrange(pos + 1)
                tokens.insert(repair_at, left)
            if repair_at < pos:
                extra_lefts = depths[repair_at]
            del depths[repair_at:]
            pos = repair_at
            continue
        depths.append(extra_lefts)
        if token is left:
            extra_lefts += 1
        elif token is right:
            extra_lefts -= 1
        pos += 1
    return tokens


def balance(tokens: Sequence, rng: random.Random) -> List:
    """Return a well-formed version of a token stream.

    A forward pass repairs unmatched closes; the same pass run over the
    reversed stream with the markers swapped repairs unmatched opens.
    """
    forward = left_balance(tokens, OPEN, CLOSE, rng)
    backward = left_balance(forward[::-1], CLOSE, OPEN, rng)
    return backward[::-1]


def ultra_operate_on_programs(
    p1: Program,
    p2: Program,
    alternation_rate: float,
    alignment_deviation: float,
    mutation_rate: float,
    atom_generators: Sequence[AtomGenerator],
    rng: Optional[random.Random] = None,
    code_generator: Optional[CodeGenerator] = None,
) -> Program:
    """Return the program produced by ULTRA from p1 and p2."""
    rng = require_rng_param(rng, "ultra_operate_on_programs")
    if not is_seq(p1) or not is_seq(p2):
        logger.debug("ULTRA needs two list programs; returning first parent's program")
        return p1

    p1, p2 = pad_programs(p1, p2)
    stream = alternate(flatten(p1), flatten(p2), alternation_rate, alignment_deviation, rng)
    stream = linearly_mutate(stream, mutation_rate, atom_generators, rng, code_generator)
    return remove_empties(reconstruct(balance(stream, rng)))


def ultra(
    parent1: Individual,
    parent2: Individual,
    max_points: int,
    alternation_rate: float,
    alignment_deviation: float,
    mutation_rate: float,
    atom_generators: Sequence[AtomGenerator],
    rng: Optional[random.Random] = None,
    code_generator: Optional[CodeGenerator] = None,
) -> Individual:
    """Return the result of applying ULTRA to parent1 and parent2.

    Args:
        parent1: First parent, supplies history and lineage
        parent2: Second parent
        max_points: Size cap for the child
        alternation_rate: Per-step probability of switching parents
        alignment_deviation: Std dev of the index shift on a switch
        mutation_rate: Per-token probability of linear mutation
        atom_generators: Vocabulary for linear mutation
        rng: Random number generator
        code_generator: Random code generator (``random_code`` if None)
    """
    rng = require_rng_param(rng, "ultra")
    new_program = ultra_operate_on_programs(
        parent1.program,
        parent2.program,
        alternation_rate,
        alignment_deviation,
        mutation_rate,
        atom_generators,
        rng,
        code_generator,
    )
    return commit_child(parent1, new_program, max_points, "ultra")
