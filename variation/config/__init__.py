"""Configuration package for the variation engine.

Operator rates and size caps live in ``variation.config.variation``; the
lineage tracking switch in ``variation.config.lineage``. Environment
variables prefixed ``PUSH_VARIATION_`` override defaults.
"""

from variation.config.lineage import maintain_ancestors, set_maintain_ancestors
from variation.config.node_selection import (
    DEFAULT_NODE_SELECTION_CONFIG,
    NodeSelectionConfig,
    NodeSelectionMethod,
)
from variation.config.variation import DEFAULT_VARIATION_CONFIG, OPERATOR_NAMES, VariationConfig

__all__ = [
    "VariationConfig",
    "DEFAULT_VARIATION_CONFIG",
    "OPERATOR_NAMES",
    "NodeSelectionConfig",
    "NodeSelectionMethod",
    "DEFAULT_NODE_SELECTION_CONFIG",
    "maintain_ancestors",
    "set_maintain_ancestors",
]
