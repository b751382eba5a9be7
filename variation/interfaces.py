"""Protocol interfaces for the engine's collaborators.

The variation operators only need a few services from the surrounding
evolutionary loop. These protocols document them:

- NodeSelector: pick the node an operator edits
- CodeGenerator: build a random program from an atom vocabulary
- ParentSelector: hand the breeding dispatcher a parent
- TagStore: the executor-side store behind tag instructions
"""

import random
from typing import TYPE_CHECKING, Any, Callable, Protocol, Sequence, Union, runtime_checkable

if TYPE_CHECKING:
    from variation.evolution.individual import Individual
    from variation.program.model import Atom, Program

# A literal atom, or a callable producing one (an ephemeral random constant).
AtomGenerator = Union["Atom", Callable[[random.Random], "Atom"]]


@runtime_checkable
class NodeSelector(Protocol):
    """Contract for node selection strategies."""

    def __call__(self, program: "Program", rng: random.Random) -> int:
        """
        Choose a node of program.

        Returns:
            A traversal index with 0 <= index < count_points(program)
        """
        ...


@runtime_checkable
class CodeGenerator(Protocol):
    """Contract for random code generation."""

    def __call__(
        self,
        max_points: int,
        atom_generators: Sequence[AtomGenerator],
        rng: random.Random,
    ) -> "Program":
        """Return a valid program of at most max_points points."""
        ...


@runtime_checkable
class ParentSelector(Protocol):
    """Contract for parent selection (lexicase, tournament, ...)."""

    def __call__(self, rng: random.Random) -> "Individual":
        ...


@runtime_checkable
class TagStore(Protocol):
    """Write-once/read-many store used when executing tag instructions.

    Owned by the program executor: ``tag_exec_N`` writes the code that follows
    it under tag N, ``tagged_N`` reads it back later in the run.
    """

    def write(self, tag: int, value: Any) -> None:
        """Bind value to tag."""
        ...

    def read(self, tag: int) -> Any:
        """Return the value bound to tag (or its nearest match)."""
        ...
