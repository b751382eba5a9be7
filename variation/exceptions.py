"""Push variation exception hierarchy.

Centralised base classes so callers can catch engine failures narrowly.
Size-cap overflow is not an error: operators revert to the parent instead.
"""


class VariationError(Exception):
    """Root of all variation-engine exceptions."""


class ProgramSyntaxError(VariationError):
    """Push program text could not be read or written."""


class ConfigurationError(VariationError):
    """Invalid or missing configuration."""
