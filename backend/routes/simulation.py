"""Simulation routes — breadboard sessions driving the engine."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Request

from backend.models import (
    CircuitStateResponse,
    ComponentDescriptor,
    InductanceResponse,
    SessionCreatedResponse,
    StepRequest,
    StepResponse,
)
from backend.session_store import InMemorySimulationStore, SimulationSession
from engine.components import engineering_notation
from engine.impedance import describe_reactance, equivalent_capacitance

router = APIRouter()


def _get_store(request: Request) -> InMemorySimulationStore:
    return request.app.state.simulation_store


async def _get_session(request: Request, session_id: str) -> SimulationSession:
    session = await _get_store(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Simulation session not found")
    return session


def _circuit_state(session: SimulationSession) -> CircuitStateResponse:
    """Registry snapshot with a freshly computed equivalent inductance."""
    sim = session.simulator
    inductance = sim.calculate_equivalent_inductance()
    return CircuitStateResponse(
        session_id=session.id,
        components=[ComponentDescriptor.from_component(c) for c in sim.components],
        time=sim.time,
        equivalent_inductance=inductance,
        inductance_display=describe_reactance(inductance),
        warnings=sim.validate(),
    )


@router.post("/simulations", response_model=SessionCreatedResponse)
async def create_simulation(request: Request):
    """Start an empty breadboard."""
    store = _get_store(request)
    await store.cleanup_expired()
    session = await store.create_session()
    return SessionCreatedResponse(
        session_id=session.id,
        dt=session.simulator.dt,
        test_omega=session.simulator.config.test_omega,
    )


@router.get("/simulations/{session_id}", response_model=CircuitStateResponse)
async def get_simulation(session_id: str, request: Request):
    session = await _get_session(request, session_id)
    async with session.lock:
        return _circuit_state(session)


@router.delete("/simulations/{session_id}")
async def delete_simulation(session_id: str, request: Request):
    if not await _get_store(request).delete_session(session_id):
        raise HTTPException(status_code=404, detail="Simulation session not found")
    return {"deleted": True}


@router.post("/simulations/{session_id}/components", response_model=CircuitStateResponse)
async def add_component(session_id: str, body: ComponentDescriptor, request: Request):
    """Place a component (or replace one with the same id)."""
    session = await _get_session(request, session_id)
    async with session.lock:
        try:
            session.simulator.add_component(body.to_component())
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        await _get_store(request).touch_session(session)
        return _circuit_state(session)


@router.delete("/simulations/{session_id}/components/{component_id}", response_model=CircuitStateResponse)
async def remove_component(session_id: str, component_id: str, request: Request):
    session = await _get_session(request, session_id)
    async with session.lock:
        if not session.simulator.remove_component(component_id):
            raise HTTPException(status_code=404, detail=f"Component '{component_id}' not found")
        await _get_store(request).touch_session(session)
        return _circuit_state(session)


@router.post("/simulations/{session_id}/clear", response_model=CircuitStateResponse)
async def clear_simulation(session_id: str, request: Request):
    """Remove every component and reset simulated time."""
    session = await _get_session(request, session_id)
    async with session.lock:
        session.simulator.clear()
        await _get_store(request).touch_session(session)
        return _circuit_state(session)


@router.post("/simulations/{session_id}/step", response_model=StepResponse)
async def step_simulation(session_id: str, request: Request, body: Optional[StepRequest] = None):
    """Advance the transient simulation by one or more fixed steps."""
    session = await _get_session(request, session_id)
    steps = body.steps if body else StepRequest().steps
    async with session.lock:
        result = session.simulator.run(steps)
        await _get_store(request).touch_session(session)
    return StepResponse(
        time=result.time,
        voltages=result.voltages,
        currents=result.currents,
        voltage_display={node: engineering_notation(v, "V") for node, v in result.voltages.items()},
        current_display={cid: engineering_notation(i, "A") for cid, i in result.currents.items()},
    )


@router.get("/simulations/{session_id}/inductance", response_model=InductanceResponse)
async def get_inductance(session_id: str, request: Request):
    """Equivalent inductance seen from the first voltage source."""
    session = await _get_session(request, session_id)
    async with session.lock:
        sim = session.simulator
        inductance = sim.calculate_equivalent_inductance()
    omega = sim.config.test_omega
    return InductanceResponse(
        equivalent_inductance=inductance,
        display=describe_reactance(inductance),
        equivalent_capacitance=equivalent_capacitance(inductance, omega),
        test_omega=omega,
    )
