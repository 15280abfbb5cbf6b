from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, TYPE_CHECKING
import math
from .base import Component, ComponentKind

if TYPE_CHECKING:
    from circuitcore.network.graph import Node


@dataclass(eq=False)
class Source(Component):
    """
    Ideal DC voltage source (battery).

    `node_a` is the positive terminal and `node_b` the negative one; the
    solver grounds `node_b` and holds `node_a` at `emf` volts.
    """
    name: str
    node_a: Node
    node_b: Node
    emf: float

    kind: ClassVar[ComponentKind] = ComponentKind.SOURCE

    def __post_init__(self) -> None:
        if not math.isfinite(self.emf):
            raise ValueError(f"Source '{self.name}' EMF must be finite.")
        Component.__init__(self, self.name, self.node_a, self.node_b)

    @property
    def positive(self) -> Node:
        return self.node_a

    @property
    def negative(self) -> Node:
        return self.node_b
