"""
Topology checks run before (and independently of) a solve pass.
"""

from .report import ValidationReport  # noqa: F401
from .validator import (  # noqa: F401
    ValidatorConfig,
    validate,
    reachable_nodes,
    disconnected_components,
    floating_components,
    zero_resistance_path,
)

__all__ = [
    "ValidationReport",
    "ValidatorConfig",
    "validate",
    "reachable_nodes",
    "disconnected_components",
    "floating_components",
    "zero_resistance_path",
]
