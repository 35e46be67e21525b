"""
Modified Nodal Analysis (MNA) system assembly.

Unknown vector layout for N non-ground nodes and M voltage sources:

    x[0 .. N-1]     node voltages for node indices 1..N
    x[N .. N+M-1]   branch currents of the voltage sources, in list order

Ground (node index 0) has no row or column; any stamp that touches it
is dropped.

Two variants share the same stamping code:

    Transient   backward-Euler companion models, real-valued
    ACPhasor    complex admittances at a single angular frequency, with
                a unit phasor on exactly one source

Element admittances:
    R  →  y = 1/R                    (R floored at min_resistance)
    C  →  y = C/dt,  i_eq = C·v_prev/dt         (transient)
          y = jωC                                (AC)
    L  →  y = dt/L,  i_eq = -i_prev              (transient)
          y = -j/(ωL)                            (AC)
"""

import math
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Union

import numpy as np

from engine.components import Component, ComponentType
from engine.config import DEFAULT_CONFIG, SimulationConfig
from engine.nodes import NodeMap

# Stand-in for a zero-henry inductor (an ideal short).
MIN_INDUCTANCE = 1e-12


@dataclass
class ElementState:
    """Transient memory of one energy-storage element."""
    cap_voltage: float = 0.0
    ind_current: float = 0.0


@dataclass(frozen=True)
class Transient:
    dt: float
    time: float


@dataclass(frozen=True)
class ACPhasor:
    omega: float
    excited_source_id: str


Variant = Union[Transient, ACPhasor]


@dataclass
class LinearSystem:
    """Assembled G·x = b with the bookkeeping needed to read x back."""
    G: np.ndarray
    b: np.ndarray
    node_map: NodeMap
    sources: List[Component] = field(default_factory=list)

    @property
    def size(self) -> int:
        return self.b.shape[0]

    @property
    def node_count(self) -> int:
        return self.node_map.non_ground_count

    def node_row(self, label: str) -> Optional[int]:
        """Row of a node voltage unknown, or None for ground."""
        idx = self.node_map[label]
        return idx - 1 if idx > 0 else None

    def branch_row(self, position: int) -> int:
        """Row of the branch current of the ``position``-th voltage source."""
        return self.node_count + position


def effective_resistance(comp: Component, config: SimulationConfig = DEFAULT_CONFIG) -> float:
    return max(comp.value, config.min_resistance)


def effective_inductance(comp: Component) -> float:
    return max(comp.value, MIN_INDUCTANCE)


def source_value(comp: Component, time: float, config: SimulationConfig = DEFAULT_CONFIG) -> float:
    """Instantaneous source voltage at ``time``."""
    if comp.type == ComponentType.AC_SOURCE:
        freq = comp.frequency or config.default_ac_frequency
        return comp.value * math.sin(2 * math.pi * freq * time)
    return comp.value


def _stamp_admittance(G: np.ndarray, i: int, j: int, y) -> None:
    """Four-quadrant two-terminal stamp between node indices i and j."""
    if i > 0:
        G[i - 1, i - 1] += y
    if j > 0:
        G[j - 1, j - 1] += y
    if i > 0 and j > 0:
        G[i - 1, j - 1] -= y
        G[j - 1, i - 1] -= y


def _stamp_current(b: np.ndarray, i: int, j: int, current) -> None:
    """Inject ``current`` into node i and withdraw it from node j."""
    if i > 0:
        b[i - 1] += current
    if j > 0:
        b[j - 1] -= current


def _stamp_voltage_source(G: np.ndarray, i: int, j: int, row: int) -> None:
    if i > 0:
        G[i - 1, row] += 1
        G[row, i - 1] += 1
    if j > 0:
        G[j - 1, row] -= 1
        G[row, j - 1] -= 1


def build_system(
    components: Sequence[Component],
    node_map: NodeMap,
    states: Mapping[str, ElementState],
    variant: Variant,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> LinearSystem:
    """
    Assemble the MNA system for one solve.

    Pure function: ``states`` is only read. Elements without a recorded
    state are treated as uncharged.

    Args:
        components: Circuit in registry order.
        node_map: Result of resolve_nodes() on the same list.
        states: Per-component transient memory keyed by component id.
        variant: Transient(dt, time) or ACPhasor(omega, excited_source_id).
        config: Engine settings.

    Returns:
        LinearSystem of size N + M.
    """
    is_ac = isinstance(variant, ACPhasor)
    dtype = complex if is_ac else float

    sources = [c for c in components if c.is_source]
    n = node_map.non_ground_count
    size = n + len(sources)

    G = np.zeros((size, size), dtype=dtype)
    b = np.zeros(size, dtype=dtype)

    for position, src in enumerate(sources):
        row = n + position
        _stamp_voltage_source(G, node_map[src.node_a], node_map[src.node_b], row)
        if is_ac:
            b[row] = 1.0 + 0j if src.id == variant.excited_source_id else 0.0
        else:
            b[row] = source_value(src, variant.time, config)

    for comp in components:
        i = node_map[comp.node_a]
        j = node_map[comp.node_b]

        if comp.type == ComponentType.RESISTOR:
            _stamp_admittance(G, i, j, 1.0 / effective_resistance(comp, config))

        elif comp.type == ComponentType.CAPACITOR:
            if is_ac:
                _stamp_admittance(G, i, j, 1j * variant.omega * comp.value)
            else:
                g = comp.value / variant.dt
                _stamp_admittance(G, i, j, g)
                state = states.get(comp.id)
                v_prev = state.cap_voltage if state else 0.0
                _stamp_current(b, i, j, g * v_prev)

        elif comp.type == ComponentType.INDUCTOR:
            inductance = effective_inductance(comp)
            if is_ac:
                _stamp_admittance(G, i, j, -1j / (variant.omega * inductance))
            else:
                _stamp_admittance(G, i, j, variant.dt / inductance)
                state = states.get(comp.id)
                i_prev = state.ind_current if state else 0.0
                _stamp_current(b, i, j, -i_prev)

    return LinearSystem(G=G, b=b, node_map=node_map, sources=sources)
