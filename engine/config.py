"""Tunable constants for the simulation engine."""

from dataclasses import dataclass

from engine.components import DEFAULT_AC_FREQUENCY


@dataclass(frozen=True)
class SimulationConfig:
    """
    Engine settings.

    Attributes:
        dt: Fixed transient time step (s).
        test_omega: Angular frequency for the small-signal impedance test (rad/s).
            Not derived from any AC source's own frequency.
        ground_label: Node label that is always pinned to index 0 when present.
        min_resistance: Floor applied to resistor values before inverting (Ω).
        default_ac_frequency: Waveform frequency for AC sources without one (Hz).
        singular_rcond: Systems whose reciprocal condition number falls below
            this are reported as unsolvable.
    """
    dt: float = 1e-3
    test_omega: float = 1000.0
    ground_label: str = 'gnd'
    min_resistance: float = 1e-6
    default_ac_frequency: float = DEFAULT_AC_FREQUENCY
    singular_rcond: float = 1e-14

    def __post_init__(self):
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.test_omega <= 0:
            raise ValueError(f"test_omega must be positive, got {self.test_omega}")
        if self.min_resistance <= 0:
            raise ValueError(f"min_resistance must be positive, got {self.min_resistance}")
        if not self.ground_label:
            raise ValueError("ground_label must be a non-empty string")


DEFAULT_CONFIG = SimulationConfig()
