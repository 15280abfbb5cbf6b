from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple
import numpy as np
from ..components.base import Component, is_resistive, is_zero_resistance
from ..components.sources import Source
from ..network.graph import Node
from .currents import WireCurrentMode

Array = np.ndarray


@dataclass
class SolverConfig:
    """
    Configuration parameters for the DC relaxation solver.

    Attributes:
        tol: Stop when the largest voltage change of a sweep is below this (V).
        max_iter: Maximum number of Gauss-Seidel sweeps.
        wire_current: How currents through wires and closed switches are derived.
        balance_tol: Allowed mismatch (A) between the current leaving the
            source's positive terminal and the one entering its negative terminal.
        merge_zero_resistance: Relax nodes joined by wires/closed switches as a
            single potential. When False every node is relaxed on its own and
            zero-resistance components do not carry voltage.
    """
    tol: float = 1e-6
    max_iter: int = 100
    wire_current: WireCurrentMode = WireCurrentMode.CONSERVATION
    balance_tol: float = 1e-2
    merge_zero_resistance: bool = True


@dataclass
class Relaxation:
    """
    Outcome of the node-voltage relaxation.

    Attributes:
        group_of: Node position -> potential group (nodes tied by zero-resistance
            components share a group).
        voltages: Node position -> voltage; `nan` for nodes that no
            finite-resistance path ties to the source.
        converged: True when the last sweep moved no voltage by more than `tol`.
        iterations: Number of sweeps performed.
        max_delta: Largest voltage change of the last sweep.
        history: Largest voltage change of every sweep.
        shorted: True when zero-resistance components tie the source terminals
            together; grouping is then disabled.
    """
    group_of: Array
    voltages: Array
    converged: bool
    iterations: int
    max_delta: float
    history: List[float] = field(default_factory=list)
    shorted: bool = False


def _find(parent: Array, i: int) -> int:
    while parent[i] != i:
        parent[i] = parent[parent[i]]
        i = int(parent[i])
    return i


def group_nodes(nodes: Sequence[Node], components: Sequence[Component],
                index_of: Dict[Node, int], source: Source,
                merge: bool) -> Tuple[Array, bool]:
    """
    Label every node with the potential group it belongs to.

    Groups are numbered 0..G-1 in first-seen node order. Returns the labels
    and whether the source terminals ended up in the same group (in which case
    each node is returned as its own group).
    """
    n = len(nodes)
    identity = np.arange(n, dtype=int)
    if not merge:
        return identity, False

    parent = identity.copy()
    for comp in components:
        if not is_zero_resistance(comp):
            continue
        ra = _find(parent, index_of[comp.node_a])
        rb = _find(parent, index_of[comp.node_b])
        if ra != rb:
            parent[rb] = ra

    if _find(parent, index_of[source.node_a]) == _find(parent, index_of[source.node_b]):
        return identity, True

    labels = np.empty(n, dtype=int)
    root_label: Dict[int, int] = {}
    for i in range(n):
        root = _find(parent, i)
        if root not in root_label:
            root_label[root] = len(root_label)
        labels[i] = root_label[root]
    return labels, False


def _adjacency(components: Sequence[Component], index_of: Dict[Node, int],
               group_of: Array, n_groups: int) -> List[List[Tuple[int, float]]]:
    """(neighbor group, conductance) pairs for every resistive component leaving a group."""
    adjacency: List[List[Tuple[int, float]]] = [[] for _ in range(n_groups)]
    for comp in components:
        if not is_resistive(comp):
            continue
        ga = int(group_of[index_of[comp.node_a]])
        gb = int(group_of[index_of[comp.node_b]])
        if ga == gb:
            continue
        g = 1.0 / comp.resistance
        adjacency[ga].append((gb, g))
        adjacency[gb].append((ga, g))
    return adjacency


def _anchored(adjacency: List[List[Tuple[int, float]]], roots: Sequence[int]) -> Array:
    reached = np.zeros(len(adjacency), dtype=bool)
    queue = deque(roots)
    for r in roots:
        reached[r] = True
    while queue:
        g = queue.popleft()
        for other, _ in adjacency[g]:
            if not reached[other]:
                reached[other] = True
                queue.append(other)
    return reached


def relax(nodes: Sequence[Node], components: Sequence[Component],
          index_of: Dict[Node, int], source: Source, cfg: SolverConfig) -> Relaxation:
    """
    Gauss-Seidel relaxation of the node voltages.

    The source's negative terminal is held at 0 V and its positive terminal
    at the EMF. Every other group is repeatedly replaced by the
    conductance-weighted average of its neighbors, sweeping groups in a fixed
    order and starting from 0 V:

        V_k <- sum(g_kj * V_j) / sum(g_kj)

    Open switches and zero-resistance components never enter the weights.
    A group without any resistive neighbor keeps its current value.

    Returns the last iterate whether or not it converged.
    """
    group_of, shorted = group_nodes(nodes, components, index_of, source, cfg.merge_zero_resistance)
    n_groups = int(group_of.max()) + 1 if len(group_of) else 0
    adjacency = _adjacency(components, index_of, group_of, n_groups)

    g_pos = int(group_of[index_of[source.node_a]])
    g_neg = int(group_of[index_of[source.node_b]])
    v = np.zeros(n_groups, dtype=float)
    v[g_pos] = source.emf
    v[g_neg] = 0.0
    free = [g for g in range(n_groups) if g != g_pos and g != g_neg]

    history: List[float] = []
    converged = False
    max_delta = 0.0
    iterations = 0
    for iterations in range(1, cfg.max_iter + 1):
        max_delta = 0.0
        for g in free:
            weight = 0.0
            total = 0.0
            for other, conductance in adjacency[g]:
                weight += conductance
                total += conductance * v[other]
            if weight > 0.0:
                new = total / weight
                max_delta = max(max_delta, abs(new - v[g]))
                v[g] = new
        history.append(max_delta)
        if max_delta < cfg.tol:
            converged = True
            break

    reached = _anchored(adjacency, (g_pos, g_neg))
    v_groups = np.where(reached, v, np.nan)
    v_groups[g_pos] = source.emf
    v_groups[g_neg] = 0.0
    return Relaxation(
        group_of=group_of,
        voltages=v_groups[group_of] if n_groups else np.empty(0),
        converged=converged,
        iterations=iterations,
        max_delta=float(max_delta),
        history=history,
        shorted=shorted,
    )
