"""Program representation: tree model, node addressing, text and token streams."""

from variation.program.addressing import (
    code_at_point,
    insert_code_at_point,
    internal_indices,
    leaf_indices,
    node_paths,
    remove_code_at_point,
    remove_parens_at_point,
    subtree_points,
)
from variation.program.model import (
    CLOSE,
    EMPTY_GROUP,
    OPEN,
    Atom,
    Marker,
    Program,
    count_points,
    ensure_seq,
    is_seq,
    iter_leaves,
    map_leaves,
    programs_equal,
)
from variation.program.text import parse_program, program_to_text
from variation.program.tokens import flatten, is_well_formed, reconstruct, remove_empties

__all__ = [
    # Model
    "Atom",
    "Program",
    "Marker",
    "OPEN",
    "CLOSE",
    "EMPTY_GROUP",
    "count_points",
    "ensure_seq",
    "is_seq",
    "iter_leaves",
    "map_leaves",
    "programs_equal",
    # Addressing
    "node_paths",
    "code_at_point",
    "insert_code_at_point",
    "remove_code_at_point",
    "remove_parens_at_point",
    "leaf_indices",
    "internal_indices",
    "subtree_points",
    # Text
    "parse_program",
    "program_to_text",
    # Token streams
    "flatten",
    "reconstruct",
    "remove_empties",
    "is_well_formed",
]
