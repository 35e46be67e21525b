"""
Breadboard Simulation Engine

Core computation library for the breadboard designer: node resolution,
Modified Nodal Analysis stamping, backward-Euler transient stepping and
small-signal impedance analysis.

All math is deterministic and synchronous — no I/O in the engine.
"""

from engine.components import Component, ComponentType, engineering_notation
from engine.config import SimulationConfig, DEFAULT_CONFIG
from engine.nodes import NodeMap, resolve_nodes, select_ground
from engine.mna import ElementState, LinearSystem, Transient, ACPhasor, build_system
from engine.solver import solve
from engine.transient import TransientStepper, TransientResult
from engine.impedance import equivalent_inductance, input_impedance, equivalent_capacitance, describe_reactance
from engine.topology import find_floating_nodes, find_dangling_nodes, validate_circuit
from engine.simulation import CircuitSimulator

__version__ = "0.1.0"
