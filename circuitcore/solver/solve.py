from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List
import logging
from ..components.base import Component, ComponentKind, is_zero_resistance
from ..diagnostics import Diagnostic, DiagnosticLog, DiagnosticSink
from ..network.graph import nodes_of
from .currents import (
    WireCurrentMode,
    borrow_neighbor_currents,
    conserve_wire_currents,
    node_throughput,
    ohmic_values,
    terminal_sum,
)
from .relaxation import SolverConfig, relax

logger = logging.getLogger(__name__)


@dataclass
class SolveResult:
    """
    Status of one solve pass. The solved values themselves live on the
    nodes and components that were passed in.

    Attributes:
        source: Name of the source used as reference, None if there was none.
        converged: Whether the relaxation met the tolerance within the sweep budget.
        iterations: Sweeps performed.
        max_delta: Largest voltage change of the last sweep (V).
        approximate: True when any value is best-effort: relaxation did not
            converge, or some wire/switch current could not be derived exactly.
        history: Largest voltage change of every sweep.
        diagnostics: Findings emitted during the pass.
    """
    source: str | None = None
    converged: bool = False
    iterations: int = 0
    max_delta: float = 0.0
    approximate: bool = False
    history: List[float] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.source is not None

    def codes(self) -> List[str]:
        return [d.code for d in self.diagnostics]


def solve(components: Iterable[Component], config: SolverConfig | None = None,
          sink: DiagnosticSink | None = None) -> SolveResult:
    """
    Solve the DC operating point of a circuit in place.

    Writes `voltage`/`current` on every node and `current`/`voltage_drop` on
    every component. Only the first source is used; its negative terminal is
    the 0 V reference.

    Args:
        components: Components to solve (a `Circuit` works too).
        config: Solver parameters, `SolverConfig()` when omitted.
        sink: Optional callable receiving every diagnostic as it is emitted.

    Returns:
        SolveResult describing convergence and any findings. A missing source
        is not an error: the graph is left unsolved and `result.ok` is False.
    """
    cfg = config or SolverConfig()
    components = list(components)
    log = DiagnosticLog(logger, sink)
    result = SolveResult(diagnostics=log.entries)

    nodes = nodes_of(components)
    for node in nodes:
        node.reset()
    for comp in components:
        comp.reset()

    sources = [c for c in components if c.kind is ComponentKind.SOURCE]
    if not sources:
        log.warning("missing-source", "No power source found; circuit left unsolved.")
        return result
    if len(sources) > 1:
        log.warning(
            "multiple-sources",
            f"{len(sources)} sources found; only '{sources[0].name}' is used.",
        )
    source = sources[0]
    result.source = source.name
    logger.debug("Solving %d components over %d nodes, source %s = %g V",
                 len(components), len(nodes), source.name, source.emf)

    index_of = {node: i for i, node in enumerate(nodes)}
    relaxed = relax(nodes, components, index_of, source, cfg)
    for node, v in zip(nodes, relaxed.voltages):
        node.voltage = float(v)

    result.converged = relaxed.converged
    result.iterations = relaxed.iterations
    result.max_delta = relaxed.max_delta
    result.history = relaxed.history
    if relaxed.shorted:
        log.warning(
            "source-shorted",
            f"Source '{source.name}' terminals are tied by zero-resistance components.",
        )
    if not relaxed.converged:
        result.approximate = True
        log.warning(
            "not-converged",
            f"Relaxation stopped after {relaxed.iterations} sweeps "
            f"(last change {relaxed.max_delta:.3g} V); values are approximate.",
        )

    ohmic_values(components)
    exact_wires = (cfg.wire_current is WireCurrentMode.CONSERVATION
                   and cfg.merge_zero_resistance and not relaxed.shorted)
    if exact_wires:
        loops = conserve_wire_currents(components, nodes, index_of, relaxed.group_of, source)
        if loops:
            result.approximate = True
            log.info(
                "wire-loop",
                f"{loops} zero-resistance component(s) close a loop; their current is not determined.",
            )
    else:
        borrow_neighbor_currents(components)
        if any(is_zero_resistance(c) for c in components):
            result.approximate = True

    members = set(components)
    leaving = terminal_sum(source.node_a, source, members)
    entering = terminal_sum(source.node_b, source, members)
    source.current = leaving
    if abs(leaving - entering) > cfg.balance_tol:
        log.warning(
            "current-imbalance",
            f"Current mismatch at source '{source.name}': {leaving:.4f} A leaving, "
            f"{entering:.4f} A returning.",
        )
    node_throughput(nodes, members)

    logger.debug("Solve finished: converged=%s after %d sweeps, source current %.6f A",
                 result.converged, result.iterations, source.current)
    return result
