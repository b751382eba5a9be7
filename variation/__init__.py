"""Push variation engine.

Mutation, crossover and ULTRA recombination for tree-structured Push
programs, with a size-gated commit policy and optional lineage tracking.
"""

from variation.evolution import (
    Individual,
    add_parentheses_mutate,
    boolean_gsxover,
    breed,
    crossover,
    delete_mutate,
    gaussian_mutate,
    make_individual,
    mutate,
    tag_branch_insertion_mutate,
    tagging_mutate,
    ultra,
)
from variation.exceptions import ConfigurationError, ProgramSyntaxError, VariationError
from variation.program import count_points, parse_program, program_to_text

__version__ = "0.1.0"

__all__ = [
    "Individual",
    "make_individual",
    "mutate",
    "delete_mutate",
    "add_parentheses_mutate",
    "tagging_mutate",
    "tag_branch_insertion_mutate",
    "gaussian_mutate",
    "crossover",
    "boolean_gsxover",
    "ultra",
    "breed",
    "count_points",
    "parse_program",
    "program_to_text",
    "VariationError",
    "ConfigurationError",
    "ProgramSyntaxError",
]
