"""Process-wide lineage tracking switch.

When enabled, every committed child records its parent's program at the head
of its ancestor list. Initialised from ``PUSH_VARIATION_MAINTAIN_ANCESTORS``.
"""

from __future__ import annotations

from variation.config.env import ENV_PREFIX, _env_bool

_maintain_ancestors: bool = _env_bool(f"{ENV_PREFIX}MAINTAIN_ANCESTORS", False)


def maintain_ancestors() -> bool:
    return _maintain_ancestors


def set_maintain_ancestors(enabled: bool) -> bool:
    """Set the switch and return its previous value."""
    global _maintain_ancestors
    previous = _maintain_ancestors
    _maintain_ancestors = bool(enabled)
    return previous
