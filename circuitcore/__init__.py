"""
DC resistive circuit engine.

A circuit is a graph of `Node`s joined by two-terminal components
(source, resistor, lamp, wire, switch). The engine exposes three independent
steps that callers sequence themselves:
- circuitcore.validation.validate: topology checks (source, load,
  completeness, floating parts, short circuits).
- circuitcore.solver.solve: node voltages and component currents, written in
  place on the graph.
- circuitcore.probe.Multimeter: read-only measurements on the solved graph.
"""

from .components import (  # noqa: F401
    OPEN_CIRCUIT,
    Component,
    ComponentKind,
    Lamp,
    Resistor,
    Source,
    Switch,
    Wire,
    resistance,
)
from .diagnostics import Diagnostic, DiagnosticLog, Severity  # noqa: F401
from .network import Circuit, Node, nodes_of  # noqa: F401
from .probe import CircuitTotals, Multimeter, Reading  # noqa: F401
from .solver import SolverConfig, SolveResult, WireCurrentMode, solve  # noqa: F401
from .validation import ValidationReport, ValidatorConfig, validate  # noqa: F401
from . import utils  # noqa: F401

__all__ = [
    "OPEN_CIRCUIT",
    "Component",
    "ComponentKind",
    "Source",
    "Resistor",
    "Lamp",
    "Wire",
    "Switch",
    "resistance",
    "Node",
    "Circuit",
    "nodes_of",
    "Diagnostic",
    "DiagnosticLog",
    "Severity",
    "SolverConfig",
    "SolveResult",
    "WireCurrentMode",
    "solve",
    "ValidationReport",
    "ValidatorConfig",
    "validate",
    "Multimeter",
    "Reading",
    "CircuitTotals",
    "utils",
]
