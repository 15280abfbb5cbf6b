from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING
import math

if TYPE_CHECKING:
    from circuitcore.network.graph import Node

OPEN_CIRCUIT = math.inf


class ComponentKind(str, Enum):
    SOURCE = "source"
    RESISTOR = "resistor"
    LAMP = "lamp"
    WIRE = "wire"
    SWITCH = "switch"


def resistance(component: Component) -> float:
    """
    Return the DC resistance of a component in ohms.

    Every kind is matched explicitly; an open switch is the only element
    that yields `OPEN_CIRCUIT` (math.inf).
    """
    kind = component.kind
    if kind is ComponentKind.SOURCE:
        return 0.0
    if kind is ComponentKind.RESISTOR or kind is ComponentKind.LAMP:
        return float(component.ohms)
    if kind is ComponentKind.WIRE:
        return 0.0
    if kind is ComponentKind.SWITCH:
        return 0.0 if component.closed else OPEN_CIRCUIT
    raise ValueError(f"Unknown component kind '{kind}'.")


def is_open_circuit(ohms: float) -> bool:
    return math.isinf(ohms)


def is_resistive(component: Component) -> bool:
    """True when the component has a finite, strictly positive resistance."""
    r = resistance(component)
    return r > 0 and not is_open_circuit(r)


def is_zero_resistance(component: Component) -> bool:
    """True for wires and closed switches (sources are excluded)."""
    return component.kind is not ComponentKind.SOURCE and resistance(component) == 0


class Component:
    """
    Two-terminal element of a DC circuit.

    Construction registers the component in the incidence list of both
    terminal nodes. `current` and `voltage_drop` are derived values written
    only by the solver; they stay at 0.0 until a solve pass runs.
    """

    kind: ComponentKind

    def __init__(self, name: str, node_a: Node, node_b: Node) -> None:
        if node_a is None or node_b is None:
            raise ValueError(f"Component '{name}' needs two terminal nodes.")
        if node_a is node_b:
            raise ValueError(f"Component '{name}' must connect two distinct nodes.")
        self.name = name
        self.node_a = node_a
        self.node_b = node_b
        self.current = 0.0
        self.voltage_drop = 0.0
        node_a.add_component(self)
        node_b.add_component(self)

    @property
    def resistance(self) -> float:
        return resistance(self)

    @property
    def power(self) -> float:
        return self.voltage_drop * self.current

    def other_node(self, node: Node) -> Node:
        if node is self.node_a:
            return self.node_b
        if node is self.node_b:
            return self.node_a
        raise ValueError(f"Node '{node.name}' is not a terminal of '{self.name}'.")

    def shares_terminal(self, other: Component) -> bool:
        return (
            other.node_a is self.node_a
            or other.node_a is self.node_b
            or other.node_b is self.node_a
            or other.node_b is self.node_b
        )

    def reset(self) -> None:
        self.current = 0.0
        self.voltage_drop = 0.0
