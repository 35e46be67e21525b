"""
Circuit simulator: component registry plus the two analyses.

This is the surface consumed by the UI/state layer. It owns the ordered
component list and the transient state table; callers must serialize
calls (the simulator holds no locks).

    sim = CircuitSimulator()
    sim.add_component({'id': 'V1', 'type': 'V_DC', 'nodeA': 'a', 'nodeB': 'gnd', 'value': 5})
    sim.add_component({'id': 'R1', 'type': 'R', 'nodeA': 'a', 'nodeB': 'gnd', 'value': 1000})
    result = sim.step_transient()      # result.currents['R1'] ≈ 5 mA
    sim.calculate_equivalent_inductance()
"""

import logging
from typing import Dict, List, Optional, Union

from engine.components import Component
from engine.config import DEFAULT_CONFIG, SimulationConfig
from engine.impedance import equivalent_inductance
from engine.topology import validate_circuit
from engine.transient import TransientResult, TransientStepper

logger = logging.getLogger(__name__)


class CircuitSimulator:

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._components: List[Component] = []
        self._stepper = TransientStepper(self.config)

    @property
    def components(self) -> List[Component]:
        return list(self._components)

    @property
    def time(self) -> float:
        return self._stepper.time

    @property
    def dt(self) -> float:
        return self._stepper.dt

    def get_component(self, component_id: str) -> Optional[Component]:
        for comp in self._components:
            if comp.id == component_id:
                return comp
        return None

    def add_component(self, component: Union[Component, Dict]) -> Component:
        """
        Register a component.

        An existing component with the same id is replaced in place and
        its transient state is discarded.
        """
        if not isinstance(component, Component):
            component = Component.from_dict(component)

        for position, existing in enumerate(self._components):
            if existing.id == component.id:
                logger.debug("Replacing component '%s'", component.id)
                self._components[position] = component
                self._stepper.forget(component.id)
                return component

        self._components.append(component)
        return component

    def remove_component(self, component_id: str) -> bool:
        """Remove a component and its state. Returns False if the id is unknown."""
        remaining = [c for c in self._components if c.id != component_id]
        removed = len(remaining) != len(self._components)
        self._components = remaining
        self._stepper.forget(component_id)
        return removed

    def clear(self) -> None:
        """Remove every component and reset time and element state."""
        self._components = []
        self._stepper.reset()

    def step_transient(self) -> TransientResult:
        return self._stepper.step(self._components)

    def run(self, steps: int) -> TransientResult:
        """Advance several steps at the same dt; returns the last one."""
        return self._stepper.run(self._components, steps)

    def calculate_equivalent_inductance(self) -> Optional[float]:
        return equivalent_inductance(self._components, self.config)

    def validate(self) -> List[str]:
        return validate_circuit(self._components, self.config)
