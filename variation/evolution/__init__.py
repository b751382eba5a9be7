"""Evolution module: the variation operators of PushGP.

Given one or two parent individuals, these operators build new candidate
programs. Parent selection, fitness evaluation and program execution belong
to the surrounding evolutionary loop.

The module consolidates:
- Mutation: point, deletion, parentheses addition, tagging, tag branches, Gaussian
- Crossover: subtree crossover and boolean geometric semantic crossover
- ULTRA: linear alternation with bracket repair
- Commit policy: size cap and lineage tracking shared by all operators
- Breeding: probabilistic choice of operator per child
"""

from variation.evolution.breeding import REPRODUCTION, apply_operator, breed, choose_operator
from variation.evolution.commit import commit_child
from variation.evolution.crossover import boolean_gsxover, crossover
from variation.evolution.individual import Individual, make_individual
from variation.evolution.mutation import (
    add_parentheses_mutate,
    delete_mutate,
    gaussian_mutate,
    mutate,
    perturb_code_with_gaussian_noise,
    tag_branch_insertion_mutate,
    tagging_mutate,
)
from variation.evolution.ultra import (
    alternate,
    balance,
    left_balance,
    linearly_mutate,
    ultra,
    ultra_operate_on_programs,
)

__all__ = [
    # Individuals
    "Individual",
    "make_individual",
    "commit_child",
    # Mutation
    "mutate",
    "delete_mutate",
    "add_parentheses_mutate",
    "tagging_mutate",
    "tag_branch_insertion_mutate",
    "gaussian_mutate",
    "perturb_code_with_gaussian_noise",
    # Crossover
    "crossover",
    "boolean_gsxover",
    # ULTRA
    "ultra",
    "ultra_operate_on_programs",
    "alternate",
    "linearly_mutate",
    "left_balance",
    "balance",
    # Breeding
    "breed",
    "choose_operator",
    "apply_operator",
    "REPRODUCTION",
]
