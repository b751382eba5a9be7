"""Variation operator configuration.

These values control size caps, operator rates and how often each operator
is chosen when breeding. Defaults follow PushGP.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Dict, Optional, Tuple

from variation.config.env import ENV_PREFIX, _env_float, _env_int
from variation.config.node_selection import NodeSelectionConfig
from variation.exceptions import ConfigurationError

# Operator names understood by the breeding dispatcher, in draw order.
OPERATOR_NAMES: Tuple[str, ...] = (
    "mutation",
    "crossover",
    "boolean_gsxover",
    "deletion",
    "parentheses_addition",
    "tagging",
    "tag_branch_insertion",
    "gaussian_mutation",
    "ultra",
)


@dataclass(frozen=True)
class VariationConfig:
    """Configuration for variation operators.

    Probabilities are per child; whatever they leave over is plain
    reproduction (the selected parent is copied unchanged).
    """

    # Size caps
    max_points: int = 100
    mutation_max_points: int = 20
    boolean_gsxover_new_code_max_points: int = 20

    # Tags
    tag_limit: int = 10000
    tag_branch_type_instruction_pairs: Tuple[Tuple[str, str], ...] = ()

    # Gaussian mutation
    gaussian_mutation_per_number_mutation_probability: float = 0.5
    gaussian_mutation_standard_deviation: float = 0.1

    # ULTRA
    ultra_alternation_rate: float = 0.01
    ultra_alignment_deviation: float = 10.0
    ultra_mutation_rate: float = 0.01

    # Operator probabilities
    mutation_probability: float = 0.4
    crossover_probability: float = 0.4
    boolean_gsxover_probability: float = 0.0
    deletion_probability: float = 0.0
    parentheses_addition_probability: float = 0.0
    tagging_probability: float = 0.0
    tag_branch_insertion_probability: float = 0.0
    gaussian_mutation_probability: float = 0.0
    ultra_probability: float = 0.0

    node_selection: NodeSelectionConfig = field(default_factory=NodeSelectionConfig)

    def __post_init__(self) -> None:
        for name in ("max_points", "mutation_max_points", "boolean_gsxover_new_code_max_points",
                     "tag_limit"):
            if getattr(self, name) < 1:
                raise ConfigurationError(f"{name} must be at least 1, got {getattr(self, name)}")

        if not 0.0 <= self.ultra_alternation_rate < 1.0:
            raise ConfigurationError(
                f"ultra_alternation_rate must be in [0, 1), got {self.ultra_alternation_rate}"
            )

        rates = (
            "gaussian_mutation_per_number_mutation_probability",
            "ultra_mutation_rate",
        )
        for name in rates + tuple(f"{op}_probability" for op in OPERATOR_NAMES):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be in [0, 1], got {value}")

        if self.gaussian_mutation_standard_deviation < 0:
            raise ConfigurationError("gaussian_mutation_standard_deviation must be non-negative")
        if self.ultra_alignment_deviation < 0:
            raise ConfigurationError("ultra_alignment_deviation must be non-negative")

        total = sum(self.operator_probabilities().values())
        if total > 1.0 + 1e-9:
            raise ConfigurationError(f"Operator probabilities sum to {total:.3f}, above 1.0")

        if self.tag_branch_insertion_probability > 0 and not self.tag_branch_type_instruction_pairs:
            raise ConfigurationError(
                "tag_branch_insertion_probability > 0 requires tag_branch_type_instruction_pairs"
            )

    def operator_probabilities(self) -> Dict[str, float]:
        """Map operator name to its probability, in draw order."""
        return {op: getattr(self, f"{op}_probability") for op in OPERATOR_NAMES}

    @property
    def reproduction_probability(self) -> float:
        return max(0.0, 1.0 - sum(self.operator_probabilities().values()))

    @classmethod
    def from_env(cls, base: Optional["VariationConfig"] = None) -> "VariationConfig":
        """Overlay ``PUSH_VARIATION_<FIELD>`` environment variables on base.

        Only numeric fields are read; malformed values keep the base value.
        """
        base = base or DEFAULT_VARIATION_CONFIG
        overrides = {}
        for f in fields(cls):
            current = getattr(base, f.name)
            key = f"{ENV_PREFIX}{f.name.upper()}"
            if isinstance(current, bool):
                continue
            if isinstance(current, int):
                overrides[f.name] = _env_int(key, current)
            elif isinstance(current, float):
                overrides[f.name] = _env_float(key, current)
        return replace(base, **overrides)


# Default configuration
DEFAULT_VARIATION_CONFIG = VariationConfig()
