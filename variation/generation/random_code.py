"""Random code generation.

Programs are grown top-down to an exact point count: one point goes to the
enclosing list and the rest are decomposed into a random number of children,
each grown the same way. Atom generators are either literal atoms or
callables ``gen(rng) -> atom`` (ephemeral random constants such as a random
integer).
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from variation.exceptions import ConfigurationError
from variation.interfaces import AtomGenerator
from variation.program.model import Program
from variation.util.rng import require_rng_param


def random_atom(atom_generators: Sequence[AtomGenerator], rng: random.Random):
    """Draw one generator and return its atom."""
    element = rng.choice(atom_generators)
    if callable(element):
        return element(rng)
    return element


def decompose(number: int, max_parts: int, rng: random.Random) -> List[int]:
    """Split number into at most max_parts positive parts."""
    parts: List[int] = []
    while max_parts > 1 and number > 1:
        this_part = rng.randrange(number - 1) + 1
        parts.append(this_part)
        number -= this_part
        max_parts -= 1
    parts.append(number)
    return parts


def random_code_with_size(
    points: int,
    atom_generators: Sequence[AtomGenerator],
    rng: random.Random,
) -> Program:
    """Return a random program of exactly the given number of points.

    Children are grown depth-first in order and each list is shuffled once
    all of its children exist.
    """
    if points < 2:
        return random_atom(atom_generators, rng)
    # Each frame holds the child sizes to grow and the children grown so far.
    stack = [(_child_sizes(points, rng), [])]
    while True:
        sizes, children = stack[-1]
        if len(children) == len(sizes):
            stack.pop()
            rng.shuffle(children)
            finished = tuple(children)
            if not stack:
                return finished
            stack[-1][1].append(finished)
            continue
        size = sizes[len(children)]
        if size < 2:
            children.append(random_atom(atom_generators, rng))
        else:
            stack.append((_child_sizes(size, rng), []))


def _child_sizes(points: int, rng: random.Random) -> List[int]:
    """Split the points below a list into child sizes."""
    elements_this_level = rng.randrange(points - 1)
    return decompose(points - 1, elements_this_level, rng)


def random_code(
    max_points: int,
    atom_generators: Sequence[AtomGenerator],
    rng: Optional[random.Random] = None,
) -> Program:
    """Return a random program of between 1 and max_points points.

    Args:
        max_points: Upper bound on the program's point count
        atom_generators: Literal atoms and/or ``gen(rng)`` callables
        rng: Random number generator

    Raises:
        ConfigurationError: If atom_generators is empty or max_points < 1
    """
    rng = require_rng_param(rng, "random_code")
    if not atom_generators:
        raise ConfigurationError("random_code needs at least one atom generator")
    if max_points < 1:
        raise ConfigurationError(f"max_points must be at least 1, got {max_points}")
    return random_code_with_size(rng.randrange(max_points) + 1, atom_generators, rng)
