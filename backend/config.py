"""Environment-driven settings for the simulation service."""

import os

from engine.config import DEFAULT_CONFIG, SimulationConfig


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def load_simulation_config() -> SimulationConfig:
    """Build the engine config from SIM_* environment variables."""
    return SimulationConfig(
        dt=_env_float("SIM_DT", DEFAULT_CONFIG.dt),
        test_omega=_env_float("SIM_TEST_OMEGA", DEFAULT_CONFIG.test_omega),
        ground_label=os.getenv("SIM_GROUND_LABEL") or DEFAULT_CONFIG.ground_label,
        min_resistance=_env_float("SIM_MIN_RESISTANCE", DEFAULT_CONFIG.min_resistance),
        default_ac_frequency=_env_float("SIM_DEFAULT_AC_FREQUENCY", DEFAULT_CONFIG.default_ac_frequency),
    )


def session_ttl_hours() -> float:
    return _env_float("SIM_SESSION_TTL_HOURS", 24.0)
