from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, TYPE_CHECKING
import math
from .base import Component, ComponentKind

if TYPE_CHECKING:
    from circuitcore.network.graph import Node


@dataclass(eq=False)
class Resistor(Component):
    name: str
    node_a: Node
    node_b: Node
    ohms: float

    kind: ClassVar[ComponentKind] = ComponentKind.RESISTOR

    def __post_init__(self) -> None:
        if not (self.ohms > 0) or math.isinf(self.ohms):
            raise ValueError(f"Resistor '{self.name}' resistance must be positive and finite.")
        Component.__init__(self, self.name, self.node_a, self.node_b)


@dataclass(eq=False)
class Lamp(Component):
    """
    Incandescent lamp, electrically identical to a resistor.

    `rated_power` (W) is only used for the brightness readout.
    """
    name: str
    node_a: Node
    node_b: Node
    ohms: float
    rated_power: float | None = None

    kind: ClassVar[ComponentKind] = ComponentKind.LAMP

    def __post_init__(self) -> None:
        if not (self.ohms > 0) or math.isinf(self.ohms):
            raise ValueError(f"Lamp '{self.name}' resistance must be positive and finite.")
        if self.rated_power is not None and self.rated_power <= 0:
            raise ValueError(f"Lamp '{self.name}' rated power must be positive.")
        Component.__init__(self, self.name, self.node_a, self.node_b)

    @property
    def is_lit(self) -> bool:
        return self.current > 1e-9

    @property
    def brightness(self) -> float:
        """Dissipated power relative to the rating, clipped to [0, 1]."""
        if not self.is_lit:
            return 0.0
        if self.rated_power is None:
            return 1.0
        return min(1.0, self.power / self.rated_power)


@dataclass(eq=False)
class Wire(Component):
    name: str
    node_a: Node
    node_b: Node

    kind: ClassVar[ComponentKind] = ComponentKind.WIRE

    def __post_init__(self) -> None:
        Component.__init__(self, self.name, self.node_a, self.node_b)


@dataclass(eq=False)
class Switch(Component):
    name: str
    node_a: Node
    node_b: Node
    closed: bool = True

    kind: ClassVar[ComponentKind] = ComponentKind.SWITCH

    def __post_init__(self) -> None:
        Component.__init__(self, self.name, self.node_a, self.node_b)

    @property
    def is_closed(self) -> bool:
        return self.closed

    def toggle(self) -> bool:
        self.closed = not self.closed
        return self.closed
