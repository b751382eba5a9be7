"""Program tree model.

A Push program is either an atom or a tuple of programs:

- Atoms are instruction symbols (``str``), ``int``, ``float`` or ``bool`` literals.
- Sub-programs are tuples, so every program value is immutable and operators
  rebuild only the tuples on the path to an edited node.

Two structural markers exist only inside flattened token streams (see
``variation.program.tokens``): ``Marker.OPEN`` and ``Marker.CLOSE``. The empty
tuple ``()`` doubles as the empty-group marker.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Tuple, Union


class Marker(Enum):
    """Bracket markers used in flattened token streams."""

    OPEN = "open"
    CLOSE = "close"

    def __repr__(self) -> str:
        return f"Marker.{self.name}"


OPEN = Marker.OPEN
CLOSE = Marker.CLOSE
EMPTY_GROUP: Tuple[()] = ()

Atom = Union[str, int, float, bool, Marker]
Program = Union[Atom, Tuple["Program", ...]]


def is_seq(node: object) -> bool:
    """True if node is a sub-program (including the empty group)."""
    return isinstance(node, tuple)


def count_points(program: Program) -> int:
    """Count atoms plus sub-lists.

    An atom counts 1 and a sequence counts 1 plus the points of its children,
    so ``()`` has one point and ``(a (b c))`` has five.
    """
    if not is_seq(program):
        return 1
    total = 0
    stack = [program]
    while stack:
        node = stack.pop()
        total += 1
        if is_seq(node):
            stack.extend(node)
    return total


def iter_leaves(program: Program) -> Iterator[Atom]:
    """Yield atoms left to right. Empty sub-lists contribute nothing."""
    if not is_seq(program):
        yield program
        return
    stack = [iter(program)]
    while stack:
        node = next(stack[-1], _EXHAUSTED)
        if node is _EXHAUSTED:
            stack.pop()
        elif is_seq(node):
            stack.append(iter(node))
        else:
            yield node


def map_leaves(fn, program: Program) -> Program:
    """Return program with every atom replaced by ``fn(atom)``.

    Atoms are visited left to right; tree shape is preserved.
    """
    if not is_seq(program):
        return fn(program)
    # Each frame holds a child iterator and the mapped children so far.
    stack = [(iter(program), [])]
    while True:
        children, mapped = stack[-1]
        child = next(children, _EXHAUSTED)
        if child is _EXHAUSTED:
            stack.pop()
            finished = tuple(mapped)
            if not stack:
                return finished
            stack[-1][1].append(finished)
        elif is_seq(child):
            stack.append((iter(child), []))
        else:
            mapped.append(fn(child))


def programs_equal(a: Program, b: Program) -> bool:
    """Structural equality that also distinguishes atom types.

    Python's ``==`` treats ``1``, ``1.0`` and ``True`` as equal; Push does not.
    """
    stack = [(a, b)]
    while stack:
        x, y = stack.pop()
        if is_seq(x) or is_seq(y):
            if not (is_seq(x) and is_seq(y)) or len(x) != len(y):
                return False
            stack.extend(zip(x, y))
        elif type(x) is not type(y) or x != y:
            return False
    return True


def ensure_seq(program: Program) -> Tuple[Program, ...]:
    """Wrap a bare atom in a one-element sequence."""
    return program if is_seq(program) else (program,)


_EXHAUSTED = object()
