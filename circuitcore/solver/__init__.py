"""
DC operating-point solver.

Node voltages are found by Gauss-Seidel relaxation against a single ideal
voltage source, then every component's current and voltage drop is derived
from them.
"""

from .currents import WireCurrentMode  # noqa: F401
from .relaxation import SolverConfig, Relaxation, relax  # noqa: F401
from .solve import SolveResult, solve  # noqa: F401

__all__ = [
    "SolverConfig",
    "SolveResult",
    "Relaxation",
    "WireCurrentMode",
    "relax",
    "solve",
]
