"""Node selection configuration."""

from dataclasses import dataclass
from enum import Enum

from variation.exceptions import ConfigurationError


class NodeSelectionMethod(Enum):
    """Strategies for choosing the node an operator edits."""

    UNBIASED = "unbiased"
    """Every node equally likely."""

    LEAF_PROBABILITY = "leaf-probability"
    """Leaves with probability ``leaf_probability``, otherwise internal nodes."""

    SIZE_TOURNAMENT = "size-tournament"
    """Largest subtree among ``tournament_size`` uniform draws."""


@dataclass(frozen=True)
class NodeSelectionConfig:
    method: NodeSelectionMethod = NodeSelectionMethod.UNBIASED
    leaf_probability: float = 0.1
    tournament_size: int = 2

    def __post_init__(self) -> None:
        if not 0.0 <= self.leaf_probability <= 1.0:
            raise ConfigurationError(
                f"leaf_probability must be in [0, 1], got {self.leaf_probability}"
            )
        if self.tournament_size < 1:
            raise ConfigurationError(
                f"tournament_size must be at least 1, got {self.tournament_size}"
            )


DEFAULT_NODE_SELECTION_CONFIG = NodeSelectionConfig()
