"""Size-gated commit policy shared by every operator.

An operator builds a candidate program, then hands it here:

- Over ``max_points``: the candidate is discarded and the first parent is
  returned unchanged (no retry).
- Otherwise: a new Individual carrying the parent's history, and, when
  lineage tracking is on, the parent's program at the head of its ancestors.
"""

import logging
from typing import Optional

from variation.config.lineage import maintain_ancestors
from variation.evolution.individual import Individual, make_individual
from variation.program.model import Program, count_points

logger = logging.getLogger(__name__)


def child_ancestors(parent: Individual):
    """Ancestor list for a child of parent under the current lineage setting."""
    if maintain_ancestors():
        return (parent.program,) + tuple(parent.ancestors)
    return parent.ancestors


def commit_child(
    parent: Individual,
    new_program: Program,
    max_points: Optional[int],
    operator: str = "variation",
) -> Individual:
    """Wrap new_program as parent's child, or return parent if it is too big.

    Args:
        parent: The first (or only) parent
        new_program: Candidate program built by the operator
        max_points: Size cap; None skips the check
        operator: Operator name, for logging

    Returns:
        The new child, or parent itself when the cap is exceeded
    """
    if max_points is not None:
        points = count_points(new_program)
        if points > max_points:
            logger.debug(
                "%s child rejected: %d points exceeds max_points=%d",
                operator,
                points,
                max_points,
            )
            return parent
    return make_individual(
        program=new_program,
        history=parent.history,
        ancestors=child_ancestors(parent),
    )
