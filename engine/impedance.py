"""
Small-signal impedance seen from the first voltage source.

The circuit is solved once in the phasor domain at a fixed test
frequency ω, with the first source driven by 1∠0 V and every other
source shorted (0 V). The input impedance is then

    Z = V / I = 1 / I

where I is the current the source delivers into the circuit. The
reactive part is reported as an equivalent inductance:

    L_eq = Im(Z) / ω

A negative L_eq means the network looks capacitive at ω; the matching
capacitance is C_eq = -1 / (ω² · L_eq).
"""

import cmath
import logging
from typing import Optional, Sequence

from engine.components import Component
from engine.config import DEFAULT_CONFIG, SimulationConfig
from engine.mna import ACPhasor, build_system
from engine.nodes import resolve_nodes
from engine.solver import solve

logger = logging.getLogger(__name__)


def input_impedance(
    components: Sequence[Component],
    config: SimulationConfig = DEFAULT_CONFIG,
) -> Optional[complex]:
    """
    Complex impedance seen by the first voltage source at config.test_omega.

    Returns None when there is no source, the system cannot be solved,
    or the source delivers no current (open circuit).
    """
    sources = [c for c in components if c.is_source]
    if not sources:
        return None

    excited = sources[0]
    node_map = resolve_nodes(components, config.ground_label)
    system = build_system(
        components, node_map, {}, ACPhasor(omega=config.test_omega, excited_source_id=excited.id), config,
    )

    x = solve(system.G, system.b, config.singular_rcond)
    if x is None:
        return None

    # The branch unknown flows into the source's positive terminal;
    # the delivered current is its negation.
    delivered = -complex(x[system.branch_row(0)])
    if delivered == 0 or not cmath.isfinite(delivered):
        logger.debug("Source '%s' delivers no current, impedance undefined", excited.id)
        return None

    return 1.0 / delivered


def equivalent_inductance(
    components: Sequence[Component],
    config: SimulationConfig = DEFAULT_CONFIG,
) -> Optional[float]:
    """
    Equivalent inductance (H) seen from the first voltage source.

    Positive → net inductive, negative → net capacitive, None → undefined.
    Does not read or modify any transient state.
    """
    Z = input_impedance(components, config)
    if Z is None:
        return None
    return Z.imag / config.test_omega


def equivalent_capacitance(inductance: Optional[float], omega: float = DEFAULT_CONFIG.test_omega) -> Optional[float]:
    """Convert a negative equivalent inductance into farads; None otherwise."""
    if inductance is None or inductance >= 0:
        return None
    return -1.0 / (omega ** 2 * inductance)


def describe_reactance(inductance: Optional[float]) -> str:
    """Short display string for an equivalent inductance."""
    if inductance is None:
        return "N/A"
    if inductance < 0:
        return "Capacitive"
    return f"{inductance * 1000:.2f} mH"
