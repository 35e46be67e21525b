"""
Fixed-step transient simulation (backward Euler).

Each step rebuilds the MNA system from the current component list and
the stored element state, solves it, then derives per-component
currents from the solved node voltages and advances the stored state.
The state makes this an initial value problem: skipping or reordering
steps changes the trajectory.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

import numpy as np

from engine.components import Component, ComponentType
from engine.config import DEFAULT_CONFIG, SimulationConfig
from engine.mna import (
    ElementState,
    Transient,
    build_system,
    effective_inductance,
    effective_resistance,
)
from engine.nodes import resolve_nodes
from engine.solver import solve

logger = logging.getLogger(__name__)


def _finite(value) -> float:
    value = float(value)
    return value if math.isfinite(value) else 0.0


@dataclass
class TransientResult:
    voltages: Dict[str, float] = field(default_factory=dict)
    currents: Dict[str, float] = field(default_factory=dict)
    time: float = 0.0

    def to_dict(self) -> Dict:
        return {
            'voltages': dict(self.voltages),
            'currents': dict(self.currents),
            'time': self.time,
        }


class TransientStepper:
    """Owns simulated time and the per-element companion state."""

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.time = 0.0
        self.states: Dict[str, ElementState] = {}

    @property
    def dt(self) -> float:
        return self.config.dt

    def reset(self) -> None:
        self.time = 0.0
        self.states.clear()

    def forget(self, component_id: str) -> None:
        """Drop the stored state of a removed component."""
        self.states.pop(component_id, None)

    def _state(self, component_id: str) -> ElementState:
        state = self.states.get(component_id)
        if state is None:
            state = self.states[component_id] = ElementState()
        return state

    def step(self, components: Sequence[Component]) -> TransientResult:
        """
        Advance simulated time by one dt.

        Returns empty maps (and leaves time untouched) when the circuit
        has no unknowns. An unsolvable system is treated as an all-zero
        solution.
        """
        dt = self.dt
        node_map = resolve_nodes(components, self.config.ground_label)
        system = build_system(
            components, node_map, self.states, Transient(dt=dt, time=self.time), self.config,
        )
        if system.size == 0:
            return TransientResult(time=self.time)

        x = solve(system.G, system.b, self.config.singular_rcond)
        if x is None:
            logger.debug("Unsolvable step at t=%.6f, using zero solution", self.time)
            x = np.zeros(system.size)

        voltages = {node_map.ground: 0.0}
        for label in node_map.labels[1:]:
            voltages[label] = _finite(x[system.node_row(label)])

        currents = {}
        for position, src in enumerate(system.sources):
            currents[src.id] = _finite(x[system.branch_row(position)])

        for comp in components:
            v_diff = voltages[comp.node_a] - voltages[comp.node_b]

            if comp.type == ComponentType.RESISTOR:
                currents[comp.id] = v_diff / effective_resistance(comp, self.config)
            elif comp.type == ComponentType.CAPACITOR:
                state = self._state(comp.id)
                currents[comp.id] = comp.value * (v_diff - state.cap_voltage) / dt
                state.cap_voltage = v_diff
            elif comp.type == ComponentType.INDUCTOR:
                state = self._state(comp.id)
                state.ind_current += (dt / effective_inductance(comp)) * v_diff
                currents[comp.id] = state.ind_current

        self.time += dt
        return TransientResult(voltages=voltages, currents=currents, time=self.time)

    def run(self, components: Sequence[Component], steps: int = 1) -> TransientResult:
        """Advance ``steps`` sub-steps and return the last result."""
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")
        result = TransientResult(time=self.time)
        for _ in range(steps):
            result = self.step(components)
        return result
