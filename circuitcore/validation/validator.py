from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Set
import logging
from ..components.base import (
    Component,
    ComponentKind,
    is_open_circuit,
    is_resistive,
    is_zero_resistance,
)
from ..diagnostics import DiagnosticLog, DiagnosticSink
from ..network.graph import Node, nodes_of
from .report import ValidationReport

logger = logging.getLogger(__name__)


@dataclass
class ValidatorConfig:
    """
    Thresholds used by `validate`.

    Attributes:
        reach_ratio: Minimum fraction of nodes reachable from the source's
            positive terminal for the circuit to count as complete. Below 1 so
            that parts isolated only behind an open switch are tolerated.
        short_threshold: A source-to-source path with less total resistance
            than this (ohms) is reported as a short circuit.
        max_components: Above this many components a readability warning is
            emitted.
        max_node_degree: Above this many components on one node a readability
            warning is emitted.
    """
    reach_ratio: float = 0.8
    short_threshold: float = 0.1
    max_components: int = 20
    max_node_degree: int = 4


def reachable_nodes(start: Node) -> Set[Node]:
    """Breadth-first search through every component that is not an open circuit."""
    visited: Set[Node] = set()
    queue = deque([start])
    while queue:
        node = queue.popleft()
        if node in visited:
            continue
        visited.add(node)
        for comp in node.components:
            other = comp.other_node(node)
            if not is_open_circuit(comp.resistance) and other not in visited:
                queue.append(other)
    return visited


def disconnected_components(components: Sequence[Component], reached: Set[Node]) -> List[Component]:
    return [c for c in components if c.node_a not in reached and c.node_b not in reached]


def floating_components(components: Sequence[Component]) -> List[Component]:
    """Components where neither terminal touches another component."""
    return [c for c in components if c.node_a.degree < 2 and c.node_b.degree < 2]


def zero_resistance_path(start: Node, target: Node, threshold: float) -> List[Component]:
    """
    Depth-first search for a path of wires / closed switches from `start` to
    `target` whose total resistance is below `threshold`.

    Returns the components along the first such path, or an empty list.

    Iterative, with one (node, incident iterator) frame per path step. A node
    is entered at most once; backtracking only shortens the path.
    """
    visited: Set[Node] = {start}
    path: List[Component] = []
    frames = [(start, iter(start.components))]
    while frames:
        current, pending = frames[-1]
        for comp in pending:
            if not is_zero_resistance(comp):
                continue
            other = comp.other_node(current)
            if other is target:
                candidate = path + [comp]
                if sum(c.resistance for c in candidate) < threshold:
                    return candidate
                continue
            if other in visited:
                continue
            visited.add(other)
            path.append(comp)
            frames.append((other, iter(other.components)))
            break
        else:
            frames.pop()
            if path:
                path.pop()
    return []


def validate(components: Iterable[Component], config: ValidatorConfig | None = None,
             sink: DiagnosticSink | None = None) -> ValidationReport:
    """
    Check that a component graph forms a usable, safe circuit.

    Checks, in order: power source present, resistive load present,
    completeness (reachability from the first source), floating components,
    short circuits across each source, size/complexity heuristics.

    Validation never modifies the graph and does not depend on a prior solve.
    """
    cfg = config or ValidatorConfig()
    components = list(components)
    report = ValidationReport(log=DiagnosticLog(logger, sink))

    if not components:
        report.add_error("No components found in circuit", code="empty-circuit")
        return report

    sources = [c for c in components if c.kind is ComponentKind.SOURCE]
    if not sources:
        report.add_error("Circuit must contain a power source", code="missing-source")
    elif len(sources) > 1:
        report.add_warning(
            f"Multiple power sources detected ({len(sources)}); only the first one is solved",
            code="multiple-sources",
        )

    if not any(is_resistive(c) for c in components):
        report.add_warning(
            "Circuit has no resistive components - risk of unbounded current",
            code="no-load",
        )

    nodes = nodes_of(components)
    if sources:
        reached = reachable_nodes(sources[0].node_a)
        n_reached = sum(1 for node in nodes if node in reached)
        if n_reached < len(nodes) * cfg.reach_ratio:
            report.add_error(
                f"Circuit is not complete - only {n_reached} of {len(nodes)} nodes "
                f"are connected to source '{sources[0].name}'",
                code="incomplete",
            )
            for comp in disconnected_components(components, reached):
                report.add_error(
                    f"Component '{comp.name}' is not connected to the main circuit",
                    code="disconnected",
                )

    for comp in floating_components(components):
        report.add_warning(
            f"Component '{comp.name}' appears to be floating (no connections to other components)",
            code="floating",
        )

    for source in sources:
        path = zero_resistance_path(source.node_a, source.node_b, cfg.short_threshold)
        if path:
            names = ", ".join(c.name for c in path)
            report.add_warning(
                f"Potential short circuit across '{source.name}' involving components: {names}",
                code="short-circuit",
            )

    if len(components) > cfg.max_components:
        report.add_warning(
            f"Large number of components ({len(components)}) may be hard to follow",
            code="too-many-components",
        )
    busiest = max((node.degree for node in nodes), default=0)
    if busiest > cfg.max_node_degree:
        report.add_warning(
            f"Complex connection point detected ({busiest} components on one node)",
            code="crowded-node",
        )

    logger.debug("Validation finished: %d error(s), %d warning(s)",
                 len(report.errors), len(report.warnings))
    return report
