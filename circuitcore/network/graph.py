from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List
import math
from ..components.base import Component
from ..components.passive import Lamp, Resistor, Switch, Wire
from ..components.sources import Source


@dataclass(eq=False)
class Node:
    """
    Electrical junction shared by reference between components.

    Nodes are compared and hashed by identity, never by name: two distinct
    `Node("n1")` objects are two different junctions.

    Attributes:
        name: Label used in messages and lookups.
        index: Integer handle inside the owning `Circuit` (-1 when the node
            is not registered in one).
        voltage: Solved potential in volts, `nan` until a solve pass reaches it.
        current: Solved current flowing through the junction.
        components: Incident components, each present once.
    """
    name: str
    index: int = -1
    voltage: float = math.nan
    current: float = 0.0
    components: List[Component] = field(default_factory=list, repr=False)

    def add_component(self, component: Component) -> None:
        if component not in self.components:
            self.components.append(component)

    @property
    def degree(self) -> int:
        return len(self.components)

    @property
    def is_solved(self) -> bool:
        return not math.isnan(self.voltage)

    def reset(self) -> None:
        self.voltage = math.nan
        self.current = 0.0


def nodes_of(components: Iterable[Component]) -> List[Node]:
    """
    Collect the terminal nodes of `components` in first-seen order,
    deduplicated by identity.
    """
    seen: set[Node] = set()
    ordered: List[Node] = []
    for comp in components:
        for node in (comp.node_a, comp.node_b):
            if node not in seen:
                seen.add(node)
                ordered.append(node)
    return ordered


@dataclass
class Circuit:
    """
    Arena owning the nodes and components of one circuit.

    Nodes receive an integer handle (`Node.index`) equal to their position in
    `node_list`; components keep their insertion order, which is also the
    order the solver and validator scan them in.

    Example:
        circuit = Circuit()
        circuit.source("B1", "n1", "n3", emf=6.0)
        circuit.resistor("R1", "n1", "n2", ohms=3.0)
        circuit.resistor("R2", "n2", "n3", ohms=3.0)
    """
    nodes: Dict[str, Node] = field(default_factory=dict)
    components: Dict[str, Component] = field(default_factory=dict)
    node_list: List[Node] = field(default_factory=list, repr=False)

    def node(self, name: str) -> Node:
        """Return the node called `name`, creating it if needed."""
        existing = self.nodes.get(name)
        if existing is not None:
            return existing
        node = Node(name)
        self._register_node(node)
        return node

    def _register_node(self, node: Node) -> None:
        existing = self.nodes.get(node.name)
        if existing is node:
            return
        if existing is not None:
            raise ValueError(f"A different node named '{node.name}' already exists.")
        node.index = len(self.node_list)
        self.nodes[node.name] = node
        self.node_list.append(node)

    def _resolve(self, ref: Node | str) -> Node:
        if isinstance(ref, Node):
            self._register_node(ref)
            return ref
        return self.node(ref)

    def _check_free(self, name: str) -> None:
        if name in self.components:
            raise ValueError(f"Component '{name}' already exists.")

    def add(self, component: Component) -> Component:
        self._check_free(component.name)
        self._register_node(component.node_a)
        self._register_node(component.node_b)
        self.components[component.name] = component
        return component

    # builders

    def source(self, name: str, positive: Node | str, negative: Node | str, emf: float) -> Source:
        self._check_free(name)
        return self.add(Source(name, self._resolve(positive), self._resolve(negative), emf=emf))

    def resistor(self, name: str, node_a: Node | str, node_b: Node | str, ohms: float) -> Resistor:
        self._check_free(name)
        return self.add(Resistor(name, self._resolve(node_a), self._resolve(node_b), ohms=ohms))

    def lamp(self, name: str, node_a: Node | str, node_b: Node | str, ohms: float,
             rated_power: float | None = None) -> Lamp:
        self._check_free(name)
        return self.add(Lamp(name, self._resolve(node_a), self._resolve(node_b),
                             ohms=ohms, rated_power=rated_power))

    def wire(self, name: str, node_a: Node | str, node_b: Node | str) -> Wire:
        self._check_free(name)
        return self.add(Wire(name, self._resolve(node_a), self._resolve(node_b)))

    def switch(self, name: str, node_a: Node | str, node_b: Node | str, closed: bool = True) -> Switch:
        self._check_free(name)
        return self.add(Switch(name, self._resolve(node_a), self._resolve(node_b), closed=closed))

    # lookup

    def component(self, name: str) -> Component:
        if name not in self.components:
            raise KeyError(f"Component '{name}' not present in the circuit.")
        return self.components[name]

    def __getitem__(self, name: str) -> Component:
        return self.component(name)

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components.values())

    def __len__(self) -> int:
        return len(self.components)

    def reset(self) -> None:
        """Drop every solved value, returning the graph to its unsolved state."""
        for node in self.node_list:
            node.reset()
        for comp in self.components.values():
            comp.reset()
