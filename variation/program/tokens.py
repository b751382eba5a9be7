"""Flattened token streams.

A token stream writes nesting as explicit ``Marker.OPEN`` / ``Marker.CLOSE``
tokens:

    (1 2 (a b))  <->  [OPEN, 1, 2, OPEN, a, b, CLOSE, CLOSE]

Empty groups flatten to ``OPEN, CLOSE``. An explicit empty-group token ``()``
can still appear in a stream (linear mutation draws it) and reads back as an
empty sub-list.
"""

from __future__ import annotations

from typing import List, Sequence

from variation.program.model import CLOSE, OPEN, Program, is_seq

_DONE = object()


def flatten(program: Program) -> List:
    """Convert a program into a token stream.

    A bare atom flattens to a one-token stream.
    """
    if not is_seq(program):
        return [program]
    out: List = [OPEN]
    stack = [iter(program)]
    while stack:
        node = next(stack[-1], _DONE)
        if node is _DONE:
            stack.pop()
            out.append(CLOSE)
        elif is_seq(node):
            out.append(OPEN)
            stack.append(iter(node))
        else:
            out.append(node)
    return out


def is_well_formed(tokens: Sequence) -> bool:
    """True if every prefix has no more closes than opens and the totals match."""
    depth = 0
    for token in tokens:
        if token is OPEN:
            depth += 1
        elif token is CLOSE:
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def reconstruct(tokens: Sequence) -> Program:
    """Read a well-formed token stream back into a program.

    The stream is read as the contents of one implicit outer group. If that
    group holds exactly one element, the element itself is returned, so
    ``reconstruct(flatten(p))`` gives back ``p``; otherwise the group is kept.
    An empty stream reads as ``()``.

    Raises:
        ValueError: If the stream is not well-formed
    """
    stack: List[list] = [[]]
    for token in tokens:
        if token is OPEN:
            stack.append([])
        elif token is CLOSE:
            if len(stack) == 1:
                raise ValueError("Unmatched close marker in token stream")
            finished = tuple(stack.pop())
            stack[-1].append(finished)
        else:
            stack[-1].append(token)
    if len(stack) != 1:
        raise ValueError("Unmatched open marker in token stream")
    top = stack[0]
    if len(top) == 1:
        return top[0]
    return tuple(top)


def remove_empties(program: Program) -> Program:
    """Remove empty sub-lists from the tree, bottom-up.

    A sub-list emptied by the removal is removed from its parent as well. The
    root itself is never removed, so ``(())`` becomes ``()``.
    """
    if not is_seq(program):
        return program
    # Each frame holds a child iterator and the kept children so far.
    stack = [(iter(program), [])]
    while True:
        children, kept = stack[-1]
        child = next(children, _DONE)
        if child is _DONE:
            stack.pop()
            finished = tuple(kept)
            if not stack:
                return finished
            if finished:
                stack[-1][1].append(finished)
        elif is_seq(child):
            stack.append((iter(child), []))
        else:
            kept.append(child)

