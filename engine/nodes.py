"""
Node resolution: electrical node labels → dense matrix indices.

Index 0 is always ground. The node set is rebuilt from the component
list on every solve, so indices are only meaningful for the solve that
produced them; labels are the stable key across rebuilds.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from engine.components import Component


@dataclass
class NodeMap:
    """Result of resolving a component list."""
    index: Dict[str, int] = field(default_factory=dict)
    labels: List[str] = field(default_factory=list)

    @property
    def ground(self) -> Optional[str]:
        return self.labels[0] if self.labels else None

    @property
    def non_ground_count(self) -> int:
        """Number of node-voltage unknowns (N)."""
        return max(len(self.labels) - 1, 0)

    def __getitem__(self, label: str) -> int:
        return self.index[label]

    def __contains__(self, label: str) -> bool:
        return label in self.index

    def __len__(self) -> int:
        return len(self.labels)


def select_ground(components: Sequence[Component], ground_label: str = 'gnd') -> Optional[str]:
    """
    Choose the label that becomes node 0.

    Policy:
        1. If any component references ``ground_label``, that label is
           ground regardless of where it appears in the list.
        2. Otherwise the ``node_a`` of the first component is promoted
           to ground. This depends on list order; callers that need a
           deterministic reference must either wire a literal ground or
           control the order.

    Returns None for an empty component list.
    """
    if not components:
        return None
    for comp in components:
        if comp.node_a == ground_label or comp.node_b == ground_label:
            return ground_label
    return components[0].node_a


def resolve_nodes(components: Sequence[Component], ground_label: str = 'gnd') -> NodeMap:
    """
    Map every distinct node label to an index.

    Ground gets index 0; the remaining labels receive 1, 2, ... in
    first-seen order (node_a then node_b of each component). Labels are
    never rejected: an unseen label simply becomes a new node.
    """
    node_map = NodeMap()
    ground = select_ground(components, ground_label)
    if ground is None:
        return node_map

    node_map.index[ground] = 0
    node_map.labels.append(ground)

    for comp in components:
        for label in (comp.node_a, comp.node_b):
            if label not in node_map.index:
                node_map.index[label] = len(node_map.labels)
                node_map.labels.append(label)

    return node_map
