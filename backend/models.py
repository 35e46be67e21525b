"""Pydantic models for the simulation API requests and responses."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from engine.components import Component, ComponentType


# --- Components ---

class ComponentDescriptor(BaseModel):
    """A placed component as sent by the breadboard UI."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, max_length=200, description="Unique component id")
    type: ComponentType
    node_a: str = Field(..., alias="nodeA", min_length=1, description="First terminal node label")
    node_b: str = Field(..., alias="nodeB", min_length=1, description="Second terminal node label")
    value: float = Field(..., allow_inf_nan=False, description="Ohms, Farads, Henries or Volts")
    frequency: Optional[float] = Field(None, gt=0, allow_inf_nan=False, description="V_AC frequency (Hz)")

    def to_component(self) -> Component:
        return Component.from_dict(self.model_dump(by_alias=True))

    @classmethod
    def from_component(cls, comp: Component) -> "ComponentDescriptor":
        return cls(**comp.to_dict())


# --- Sessions ---

class SessionCreatedResponse(BaseModel):
    session_id: str
    dt: float
    test_omega: float


class CircuitStateResponse(BaseModel):
    session_id: str
    components: list[ComponentDescriptor]
    time: float
    equivalent_inductance: Optional[float] = None
    inductance_display: str = "N/A"
    warnings: list[str] = []


# --- Analyses ---

class StepRequest(BaseModel):
    steps: int = Field(10, ge=1, le=10000, description="Sub-steps to advance at the fixed dt")


class StepResponse(BaseModel):
    time: float
    voltages: dict[str, float]
    currents: dict[str, float]
    voltage_display: dict[str, str] = Field(default_factory=dict, description="Node voltages with SI prefixes")
    current_display: dict[str, str] = Field(default_factory=dict, description="Component currents with SI prefixes")


class InductanceResponse(BaseModel):
    equivalent_inductance: Optional[float] = Field(None, description="Henries; negative means capacitive")
    display: str
    equivalent_capacitance: Optional[float] = Field(None, description="Farads, when capacitive")
    test_omega: float
