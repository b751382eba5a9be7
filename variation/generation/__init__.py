"""Default collaborators: node selection and random code generation."""

from variation.generation.node_selection import NodeSelector, select_node_index
from variation.generation.random_code import (
    decompose,
    random_atom,
    random_code,
    random_code_with_size,
)

__all__ = [
    "NodeSelector",
    "select_node_index",
    "random_code",
    "random_code_with_size",
    "random_atom",
    "decompose",
]
