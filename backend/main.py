"""Breadboard Simulator Backend — FastAPI application entry point."""

import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.config import load_simulation_config, session_ttl_hours
from backend.routes import simulation

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    from backend.session_store import InMemorySimulationStore
    store = InMemorySimulationStore(load_simulation_config(), ttl_hours=session_ttl_hours())
    app.state.simulation_store = store
    yield


app = FastAPI(
    title="Breadboard Simulator API",
    description="Transient and small-signal simulation for breadboard circuits",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS — allow frontend origins
_frontend_url = os.getenv("FRONTEND_URL")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[_frontend_url] if _frontend_url else [],
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(simulation.router, prefix="/api", tags=["Simulation"])


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "breadboard-simulator"}
