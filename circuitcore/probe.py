from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple
import logging
import math
from .components.base import Component, ComponentKind
from .diagnostics import DiagnosticLog, DiagnosticSink
from .network.graph import Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reading:
    name: str
    voltage: float
    current: float

    @property
    def power(self) -> float:
        return abs(self.voltage * self.current)

    def __str__(self) -> str:
        return f"[Multimeter] {self.name}: {self.voltage:.3f}V, {self.current:.3f}A"


@dataclass(frozen=True)
class CircuitTotals:
    """Source-side summary: EMF, delivered current and power, equivalent load."""
    voltage: float
    current: float
    power: float
    resistance: float


class Multimeter:
    """
    Read-only probe over a solved graph. Never writes node or component state.

    Only the last `history` diagnostics are kept on `log.entries`; the sink
    receives all of them.
    """

    def __init__(self, sink: DiagnosticSink | None = None, history: int = 100) -> None:
        self.log = DiagnosticLog(logger, sink, limit=history)

    def measure_voltage(self, node_a: Node, node_b: Node) -> float:
        """Potential difference V(node_a) - V(node_b); 0 if either node is unsolved."""
        if math.isnan(node_a.voltage) or math.isnan(node_b.voltage):
            self.log.warning(
                "probe-unsolved",
                f"Multimeter probes on '{node_a.name}'/'{node_b.name}' are not connected "
                "to a solved circuit reference.",
            )
            return 0.0
        return node_a.voltage - node_b.voltage

    def measure_current(self, component: Component) -> float:
        return component.current

    def measure(self, component: Component, positive: Node | None = None,
                negative: Node | None = None) -> Reading:
        """Voltage across (default: the component's own terminals) and current through it."""
        positive = positive or component.node_a
        negative = negative or component.node_b
        return Reading(
            name=component.name,
            voltage=self.measure_voltage(positive, negative),
            current=self.measure_current(component),
        )

    def report(self, probes: Iterable[Component | Tuple[Component, Node, Node]]) -> str:
        """One formatted reading per probe, either a component or (component, +, -)."""
        lines: List[str] = []
        for probe in probes:
            if isinstance(probe, tuple):
                lines.append(str(self.measure(*probe)))
            else:
                lines.append(str(self.measure(probe)))
        return "\n".join(lines)

    def totals(self, components: Sequence[Component]) -> CircuitTotals:
        """
        Totals seen from the first source. The equivalent resistance is
        |EMF| / I, or infinite when the source delivers no current.
        """
        components = list(components)
        source = next((c for c in components if c.kind is ComponentKind.SOURCE), None)
        if source is None:
            return CircuitTotals(0.0, 0.0, 0.0, math.inf)
        current = source.current
        resistance = abs(source.emf) / current if current > 1e-12 else math.inf
        return CircuitTotals(
            voltage=source.emf,
            current=current,
            power=abs(source.emf) * current,
            resistance=resistance,
        )
