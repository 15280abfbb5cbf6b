"""
Per-component currents and voltage drops derived from solved node voltages.
"""

from __future__ import annotations
from collections import deque
from enum import Enum
from typing import Dict, List, Sequence, Set
import math
import numpy as np
from ..components.base import Component, ComponentKind, is_resistive, is_zero_resistance
from ..components.sources import Source
from ..network.graph import Node

Array = np.ndarray


class WireCurrentMode(str, Enum):
    """
    NEIGHBOR: a wire or closed switch copies the current of the first
        resistive component sharing one of its terminals. Exact on a simple
        series path, wrong at junctions that feed several branches.
    CONSERVATION: the current is obtained from Kirchhoff's current law on a
        spanning tree of the zero-resistance components of each potential group.
    """
    NEIGHBOR = "neighbor"
    CONSERVATION = "conservation"


def ohmic_values(components: Sequence[Component]) -> None:
    """
    Set drop and current for sources, resistive parts and open switches.

    Zero-resistance parts get a zero drop here; their current is assigned by
    `borrow_neighbor_currents` or `conserve_wire_currents`.
    """
    for comp in components:
        comp.reset()
        if comp.kind is ComponentKind.SOURCE:
            comp.voltage_drop = comp.emf
        elif is_resistive(comp):
            va, vb = comp.node_a.voltage, comp.node_b.voltage
            if math.isnan(va) or math.isnan(vb):
                continue
            comp.voltage_drop = abs(va - vb)
            comp.current = comp.voltage_drop / comp.resistance


def borrow_neighbor_currents(components: Sequence[Component]) -> int:
    """
    Copy into every zero-resistance component the current of the first
    resistive component, in collection order, that shares a terminal with it.

    Returns how many components found no resistive neighbor (left at 0 A).
    """
    orphans = 0
    for comp in components:
        if not is_zero_resistance(comp):
            continue
        for other in components:
            if other is not comp and is_resistive(other) and other.shares_terminal(comp):
                comp.current = other.current
                break
        else:
            orphans += 1
    return orphans


def _signed_flow(comp: Component) -> float:
    """Current from node_a to node_b through a solved resistive component."""
    va, vb = comp.node_a.voltage, comp.node_b.voltage
    if math.isnan(va) or math.isnan(vb):
        return 0.0
    return (va - vb) / comp.resistance


def conserve_wire_currents(components: Sequence[Component], nodes: Sequence[Node],
                           index_of: Dict[Node, int], group_of: Array,
                           source: Source) -> int:
    """
    Solve the currents of wires and closed switches from current conservation.

    For every node, `surplus` is the net current pushed into it by resistive
    components and by the source; that surplus has to leave through the
    zero-resistance components of the node's group. Walking a BFS spanning
    tree of each group from its leaves up, the tree edge above a node carries
    exactly the accumulated surplus of its subtree.

    Zero-resistance components that close a loop inside a group (parallel
    wires) have no unique current and are left at 0 A.

    Returns the number of such loop-closing components.
    """
    surplus = np.zeros(len(nodes), dtype=float)
    for comp in components:
        if not is_resistive(comp):
            continue
        flow = _signed_flow(comp)
        surplus[index_of[comp.node_a]] -= flow
        surplus[index_of[comp.node_b]] += flow

    # The source supplies whatever leaves its positive group.
    pos_group = group_of[index_of[source.node_a]]
    source_current = -float(surplus[group_of == pos_group].sum())
    surplus[index_of[source.node_a]] += source_current
    surplus[index_of[source.node_b]] -= source_current

    members: Dict[int, List[int]] = {}
    for i in range(len(nodes)):
        members.setdefault(int(group_of[i]), []).append(i)

    links: List[List[tuple[int, Component]]] = [[] for _ in nodes]
    for comp in components:
        if is_zero_resistance(comp):
            ia, ib = index_of[comp.node_a], index_of[comp.node_b]
            links[ia].append((ib, comp))
            links[ib].append((ia, comp))

    loops = 0
    tree_edges: set[int] = set()
    for group in members.values():
        if len(group) < 2:
            continue
        root = group[0]
        parent: Dict[int, tuple[int, Component]] = {}
        order = [root]
        seen = {root}
        queue = deque([root])
        while queue:
            i = queue.popleft()
            for j, comp in links[i]:
                if j in seen:
                    continue
                seen.add(j)
                parent[j] = (i, comp)
                tree_edges.add(id(comp))
                order.append(j)
                queue.append(j)
        for i in reversed(order[1:]):
            up, comp = parent[i]
            flow = float(surplus[i])
            comp.current = abs(flow)
            surplus[up] += flow

    for comp in components:
        if is_zero_resistance(comp) and id(comp) not in tree_edges:
            comp.current = 0.0
            loops += 1
    return loops


def terminal_sum(node: Node, exclude: Component, members: Set[Component]) -> float:
    """Current through the components of `members` at `node`, other than `exclude`."""
    return sum(c.current for c in node.components if c is not exclude and c in members)


def node_throughput(nodes: Sequence[Node], members: Set[Component]) -> None:
    """
    Aggregate node current: half the sum of the incident current magnitudes,
    i.e. what flows in (and, by KCL, out of) the junction. Components outside
    `members` were not solved and are ignored.
    """
    for node in nodes:
        node.current = 0.5 * sum(abs(c.current) for c in node.components if c in members)
