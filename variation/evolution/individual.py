"""Individuals: immutable wrappers around a program and its lineage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from variation.program.model import Program


@dataclass(frozen=True)
class Individual:
    """One candidate solution.

    Attributes:
        program: The Push program
        ancestors: Earlier programs in this lineage, most recent first
        history: Opaque data owned by the evolutionary loop, passed through
            unchanged by every operator
    """

    program: Program
    ancestors: Tuple[Program, ...] = ()
    history: Any = None


def make_individual(
    program: Program,
    history: Any = None,
    ancestors: Optional[Iterable[Program]] = None,
) -> Individual:
    return Individual(
        program=program,
        ancestors=tuple(ancestors) if ancestors is not None else (),
        history=history,
    )
