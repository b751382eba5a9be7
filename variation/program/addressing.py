"""Index-based node addressing over a program tree.

Nodes are numbered by a pre-order, depth-first walk with the root at index 0:

    (a b (c d))  ->  0: (a b (c d))  1: a  2: b  3: (c d)  4: c  5: d

Each call recomputes the walk as an arena of paths (tuples of child positions
from the root), so indices never outlive the program value they were taken
from. Edits rebuild the tuples along one path and share every other branch.
"""

from __future__ import annotations

from typing import List, Tuple

from variation.program.model import Program, count_points, is_seq

Path = Tuple[int, ...]


def node_paths(program: Program) -> List[Path]:
    """Return the path of every node, in traversal order."""
    paths: List[Path] = []
    stack: List[Tuple[Program, Path]] = [(program, ())]
    while stack:
        node, path = stack.pop()
        paths.append(path)
        if is_seq(node):
            for position in range(len(node) - 1, -1, -1):
                stack.append((node[position], path + (position,)))
    return paths


def normalize_index(program: Program, point_index: int) -> int:
    """Fold any integer onto a valid node index."""
    return abs(point_index) % count_points(program)


def path_at_point(program: Program, point_index: int) -> Path:
    return node_paths(program)[normalize_index(program, point_index)]


def _follow(program: Program, path: Path) -> Program:
    node = program
    for position in path:
        node = node[position]
    return node


def _rebuild(program: Program, path: Path, replace_children) -> Program:
    """Rebuild program with the sequence at ``path`` passed through replace_children.

    ``replace_children(children)`` gets the tuple of the addressed sequence and
    returns the new tuple. Ancestors are copied, siblings are shared.
    """
    ancestors = []
    node = program
    for position in path:
        ancestors.append(node)
        node = node[position]
    node = replace_children(node)
    for parent, position in zip(reversed(ancestors), reversed(path)):
        node = parent[:position] + (node,) + parent[position + 1:]
    return node


def code_at_point(program: Program, point_index: int) -> Program:
    """Return the atom or sub-program at the given traversal index."""
    return _follow(program, path_at_point(program, point_index))


def insert_code_at_point(program: Program, point_index: int, new_subtree: Program) -> Program:
    """Return program with the node at point_index replaced by new_subtree.

    Index 0 replaces the whole program.
    """
    path = path_at_point(program, point_index)
    if not path:
        return new_subtree
    parent_path, position = path[:-1], path[-1]
    return _rebuild(
        program,
        parent_path,
        lambda children: children[:position] + (new_subtree,) + children[position + 1:],
    )


def remove_code_at_point(program: Program, point_index: int) -> Program:
    """Return program with the node at point_index removed from its parent.

    The whole program (index 0) cannot be removed. When the removal leaves a
    sub-list empty, that sub-list's slot is removed too, repeatedly, stopping
    at the root.
    """
    path = path_at_point(program, point_index)
    if not path:
        return program
    while len(path) > 1 and len(_follow(program, path[:-1])) == 1:
        path = path[:-1]
    parent_path, position = path[:-1], path[-1]
    return _rebuild(
        program,
        parent_path,
        lambda children: children[:position] + children[position + 1:],
    )


def remove_parens_at_point(program: Program, point_index: int) -> Program:
    """Splice the children of the sub-list at point_index into its parent.

    Removes exactly one level of nesting. Atoms and the root are left alone.
    """
    path = path_at_point(program, point_index)
    node = _follow(program, path)
    if not path or not is_seq(node):
        return program
    parent_path, position = path[:-1], path[-1]
    return _rebuild(
        program,
        parent_path,
        lambda children: children[:position] + node + children[position + 1:],
    )


def leaf_indices(program: Program) -> List[int]:
    """Indices of atom nodes."""
    return [
        index
        for index, path in enumerate(node_paths(program))
        if not is_seq(_follow(program, path))
    ]


def internal_indices(program: Program) -> List[int]:
    """Indices of sequence nodes, empty groups included."""
    return [
        index
        for index, path in enumerate(node_paths(program))
        if is_seq(_follow(program, path))
    ]


def subtree_points(program: Program, point_index: int) -> int:
    return count_points(code_at_point(program, point_index))
