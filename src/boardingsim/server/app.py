"""FastAPI server with REST API and WebSocket frame streaming.

Provides:
- WebSocket /ws/frames: Stream SceneState snapshots at ~30 FPS
- REST API for scene summary, particles and walls
- Play/pause/reset/speed controls for the background simulation
"""

from __future__ import annotations

import asyncio
import logging
import threading
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect, status
from pydantic import BaseModel, Field

from boardingsim.config import BoardingConfig, get_config
from boardingsim.engine.scenario import create_scene
from boardingsim.engine.simulation import should_stop, tick_scene
from boardingsim.projection.projector import ParticleState, SceneState, project

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from boardingsim.model.scene import BoardingScene

logger = logging.getLogger(__name__)


class SimulationState:
    """Thread-safe simulation state manager.

    Owns the live BoardingScene and synchronizes the background simulation
    thread with the WebSocket and REST endpoints. The scene stops advancing
    once its stop condition holds; reset() builds a fresh one.
    """

    def __init__(self, config: BoardingConfig | None = None) -> None:
        self._config = config if config is not None else get_config()
        self._scene = create_scene(self._config)
        self._running = False
        self._speed = 1.0  # Simulation speed multiplier
        self._paused = True  # Start paused
        self._lock = threading.Lock()
        self._latest_state: SceneState | None = None
        self._stop_event = threading.Event()

    @property
    def config(self) -> BoardingConfig:
        return self._config

    @property
    def scene(self) -> BoardingScene:
        """Get current scene (thread-safe)."""
        with self._lock:
            return self._scene

    @property
    def paused(self) -> bool:
        with self._lock:
            return self._paused

    @paused.setter
    def paused(self, value: bool) -> None:
        with self._lock:
            self._paused = value

    @property
    def speed(self) -> float:
        with self._lock:
            return self._speed

    @speed.setter
    def speed(self, value: float) -> None:
        """Set simulation speed (clamped to 0.1-10.0)."""
        with self._lock:
            self._speed = max(0.1, min(10.0, value))

    @property
    def finished(self) -> bool:
        """Whether the scene has met its stop condition."""
        with self._lock:
            return should_stop(self._scene)

    @property
    def latest_state(self) -> SceneState | None:
        with self._lock:
            return self._latest_state

    def snapshot(self) -> SceneState:
        """Project the current scene (thread-safe)."""
        with self._lock:
            return project(self._scene)

    def tick(self) -> bool:
        """Execute one simulation tick (thread-safe).

        Returns:
            False if the scene had already finished and was not advanced.
        """
        with self._lock:
            if should_stop(self._scene):
                return False
            tick_scene(self._scene)
            self._latest_state = project(self._scene)
            return True

    def reset(self) -> None:
        """Replace the scene with a freshly created one."""
        with self._lock:
            self._scene = create_scene(self._config)
            self._latest_state = None
        logger.info("Scene reset")

    def start(self) -> None:
        """Start the background simulation thread."""
        if self._running:
            return
        self._running = True
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._simulation_loop, daemon=True)
        self._thread.start()
        logger.info("Simulation thread started")

    def stop(self) -> None:
        """Stop the background simulation thread."""
        if not self._running:
            return
        self._running = False
        self._stop_event.set()
        if hasattr(self, "_thread"):
            self._thread.join(timeout=2.0)
        logger.info("Simulation thread stopped")

    def _simulation_loop(self) -> None:
        """Background loop at ~30 ticks/second base rate."""
        target_fps = 30.0
        while self._running and not self._stop_event.is_set():
            if not self.paused and not self.tick():
                logger.info("Scene finished at t=%.2fs, pausing", self.scene.time)
                self.paused = True

            effective_speed = self.speed if not self.paused else 1.0
            self._stop_event.wait(timeout=1.0 / (target_fps * effective_speed))


# Global simulation state
_sim_state: SimulationState | None = None


def get_sim_state() -> SimulationState:
    """Get or create the global simulation state."""
    global _sim_state
    if _sim_state is None:
        _sim_state = SimulationState()
    return _sim_state


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager: start/stop simulation thread."""
    sim = get_sim_state()
    sim.start()
    yield
    sim.stop()


app = FastAPI(
    title="boardingsim",
    description="Contractile particle simulation of airplane boarding",
    version="0.1.0",
    lifespan=lifespan,
)


# Pydantic models for REST responses


class ParticleResponse(BaseModel):
    """Response model for one passenger."""

    id: int = Field(description="Particle ID")
    x: float = Field(description="X position (m)")
    y: float = Field(description="Y position (m)")
    vx: float = Field(description="X velocity (m/s)")
    vy: float = Field(description="Y velocity (m/s)")
    radius: float = Field(description="Current radius (m)")
    stage: str = Field(description="Current route stage")
    reached_goal: bool = Field(description="Whether the passenger is seated")
    waiting: bool = Field(description="Whether a movement gate holds the passenger")


class WallResponse(BaseModel):
    """Response model for one wall segment."""

    x1: float
    y1: float
    x2: float
    y2: float


class SceneSummaryResponse(BaseModel):
    """Response model for the scene summary."""

    tick: int = Field(description="Current simulation tick")
    time: float = Field(description="Elapsed simulated time (s)")
    time_step: float = Field(description="Time step (s)")
    speed: float = Field(description="Simulation speed")
    paused: bool = Field(description="Whether simulation is paused")
    finished: bool = Field(description="Whether the stop condition holds")
    strategy: str = Field(description="Boarding strategy")
    particle_count: int = Field(description="Number of passengers")
    seated_count: int = Field(description="Number of seated passengers")
    wall_count: int = Field(description="Number of wall segments")
    all_seated_at: float | None = Field(description="Time every passenger was seated")


class ControlCommandResponse(BaseModel):
    """Response for control commands."""

    success: bool = Field(description="Whether command succeeded")
    message: str = Field(description="Status message")


def _particle_response(particle: ParticleState) -> ParticleResponse:
    return ParticleResponse(
        id=particle.id,
        x=particle.x,
        y=particle.y,
        vx=particle.vx,
        vy=particle.vy,
        radius=particle.radius,
        stage=particle.stage,
        reached_goal=particle.reached_goal,
        waiting=particle.waiting,
    )


# REST endpoints


@app.get("/api/scene", response_model=SceneSummaryResponse, tags=["scene"])
async def get_scene() -> SceneSummaryResponse:
    """Get current scene summary."""
    sim = get_sim_state()
    state = sim.snapshot()
    return SceneSummaryResponse(
        tick=state.tick,
        time=state.time,
        time_step=state.time_step,
        speed=sim.speed,
        paused=sim.paused,
        finished=sim.finished,
        strategy=sim.config.strategy.value,
        particle_count=len(state.particles),
        seated_count=state.seated_count,
        wall_count=len(state.walls),
        all_seated_at=sim.scene.all_seated_at,
    )


@app.get("/api/particles", response_model=list[ParticleResponse], tags=["particles"])
async def get_particles() -> list[ParticleResponse]:
    """Get all passengers."""
    state = get_sim_state().snapshot()
    return [_particle_response(p) for p in state.particles]


@app.get("/api/particles/{particle_id}", response_model=ParticleResponse, tags=["particles"])
async def get_particle(particle_id: int) -> ParticleResponse:
    """Get a specific passenger by ID."""
    state = get_sim_state().snapshot()
    for particle in state.particles:
        if particle.id == particle_id:
            return _particle_response(particle)
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Particle '{particle_id}' not found",
    )


@app.get("/api/walls", response_model=list[WallResponse], tags=["walls"])
async def get_walls() -> list[WallResponse]:
    """Get all wall segments."""
    state = get_sim_state().snapshot()
    return [WallResponse(**asdict(wall)) for wall in state.walls]


@app.post("/api/scene/reset", response_model=ControlCommandResponse, tags=["scene"])
async def reset_scene() -> ControlCommandResponse:
    """Reset the scene to its initial state."""
    get_sim_state().reset()
    return ControlCommandResponse(success=True, message="Scene reset")


@app.post("/api/scene/pause", response_model=ControlCommandResponse, tags=["scene"])
async def pause_simulation() -> ControlCommandResponse:
    """Pause the simulation."""
    get_sim_state().paused = True
    return ControlCommandResponse(success=True, message="Simulation paused")


@app.post("/api/scene/play", response_model=ControlCommandResponse, tags=["scene"])
async def play_simulation() -> ControlCommandResponse:
    """Resume the simulation."""
    sim = get_sim_state()
    if sim.finished:
        return ControlCommandResponse(success=False, message="Scene finished, reset it first")
    sim.paused = False
    return ControlCommandResponse(success=True, message="Simulation playing")


@app.post("/api/scene/speed", response_model=ControlCommandResponse, tags=["scene"])
async def set_speed(speed: float = 1.0) -> ControlCommandResponse:
    """Set simulation speed multiplier (0.1-10.0)."""
    sim = get_sim_state()
    sim.speed = speed
    return ControlCommandResponse(success=True, message=f"Speed set to {sim.speed}")


# WebSocket connections management


class ConnectionManager:
    """Manage WebSocket connections for frame streaming."""

    def __init__(self) -> None:
        self.frame_connections: list[WebSocket] = []

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.frame_connections.append(websocket)
        logger.info("Frame client connected, total: %d", len(self.frame_connections))

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self.frame_connections:
            self.frame_connections.remove(websocket)
        logger.info("Frame client disconnected, remaining: %d", len(self.frame_connections))


# Global connection manager
manager = ConnectionManager()


def _state_to_dict(state: SceneState) -> dict[str, Any]:
    """Convert a SceneState to a JSON-serializable dict."""
    return {
        "tick": state.tick,
        "time": state.time,
        "seated": state.seated_count,
        "particles": [asdict(p) for p in state.particles],
        "walls": [asdict(w) for w in state.walls],
    }


@app.websocket("/ws/frames")
async def websocket_frames(websocket: WebSocket) -> None:
    """WebSocket endpoint streaming scene snapshots at ~30 FPS.

    Before the first tick the current scene is projected so clients can draw
    the initial layout right away.
    """
    await manager.connect(websocket)
    sim = get_sim_state()

    try:
        interval = 1.0 / 30.0
        loop = asyncio.get_running_loop()
        while True:
            start = loop.time()

            state = sim.latest_state
            if state is None:
                state = sim.snapshot()
            await websocket.send_json(_state_to_dict(state))

            elapsed = loop.time() - start
            await asyncio.sleep(max(0.0, interval - elapsed))

    except WebSocketDisconnect:
        manager.disconnect(websocket)
    except Exception as e:
        logger.error("Frame streaming error: %s", str(e))
        manager.disconnect(websocket)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
