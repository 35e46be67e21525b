"""
Circuit topology checks.

Optional diagnostics pass over a component list. It never raises and
never changes what the solver does: floating islands still solve to
zero/None. The warnings exist so a caller can explain *why* a reading
is zero.
"""

from collections import defaultdict, deque
from typing import Dict, List, Sequence, Set

from engine.components import Component, ComponentType
from engine.config import DEFAULT_CONFIG, SimulationConfig
from engine.nodes import select_ground


def _adjacency(components: Sequence[Component]) -> Dict[str, Set[str]]:
    graph: Dict[str, Set[str]] = defaultdict(set)
    for comp in components:
        graph[comp.node_a].add(comp.node_b)
        graph[comp.node_b].add(comp.node_a)
    return graph


def find_floating_nodes(
    components: Sequence[Component],
    ground_label: str = DEFAULT_CONFIG.ground_label,
) -> List[str]:
    """
    Nodes with no path to ground through any component.

    Returned in first-seen order.
    """
    ground = select_ground(components, ground_label)
    if ground is None:
        return []

    graph = _adjacency(components)
    reached = {ground}
    queue = deque([ground])
    while queue:
        node = queue.popleft()
        for neighbour in graph[node]:
            if neighbour not in reached:
                reached.add(neighbour)
                queue.append(neighbour)

    floating = []
    for comp in components:
        for label in (comp.node_a, comp.node_b):
            if label not in reached and label not in floating:
                floating.append(label)
    return floating


def find_dangling_nodes(
    components: Sequence[Component],
    ground_label: str = DEFAULT_CONFIG.ground_label,
) -> List[str]:
    """Non-ground nodes touched by exactly one component terminal."""
    ground = select_ground(components, ground_label)
    counts: Dict[str, int] = {}
    for comp in components:
        for label in (comp.node_a, comp.node_b):
            counts[label] = counts.get(label, 0) + 1
    return [label for label, count in counts.items() if count == 1 and label != ground]


def validate_circuit(
    components: Sequence[Component],
    config: SimulationConfig = DEFAULT_CONFIG,
) -> List[str]:
    """
    Collect human-readable warnings about a circuit.

    Checks:
    1. Nodes with no path to ground (the solve will return zeros)
    2. Dangling endpoints that carry no current
    3. Components shorted onto a single node
    4. Non-positive passive values and zero-frequency AC sources
    """
    warnings = []

    for label in find_floating_nodes(components, config.ground_label):
        warnings.append(f"Node '{label}' is not connected to ground")

    for label in find_dangling_nodes(components, config.ground_label):
        warnings.append(f"Node '{label}' is only connected to one component terminal")

    for comp in components:
        if comp.node_a == comp.node_b:
            warnings.append(f"{comp.id}: both terminals are on node '{comp.node_a}'")
        if comp.type in (ComponentType.RESISTOR, ComponentType.CAPACITOR, ComponentType.INDUCTOR) and comp.value <= 0:
            warnings.append(f"{comp.id}: value must be positive, got {comp.value}")
        if comp.type == ComponentType.AC_SOURCE and comp.frequency is not None and comp.frequency <= 0:
            warnings.append(f"{comp.id}: AC frequency must be positive, got {comp.frequency}")

    return warnings
