"""Scene projector: BoardingScene state to immutable snapshots for reporting.

Each SceneState is a read-only copy of everything an output writer or the
HTTP server needs for one frame, so reporting never touches live simulation
objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from boardingsim.engine.simulation import may_move
from boardingsim.model.vector import ZERO

if TYPE_CHECKING:
    from boardingsim.model.particle import Particle
    from boardingsim.model.scene import BoardingScene
    from boardingsim.model.wall import Wall


@dataclass(frozen=True)
class ParticleState:
    """Snapshot of one passenger."""

    id: int
    radius: float
    x: float
    y: float
    vx: float
    vy: float
    reached_goal: bool
    stage: str
    waiting: bool = False  # held by a movement gate


@dataclass(frozen=True)
class WallState:
    """Snapshot of one wall."""

    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class SceneState:
    """Snapshot of a whole scene at one instant."""

    tick: int
    time: float
    time_step: float

    particles: tuple[ParticleState, ...] = field(default_factory=tuple)
    walls: tuple[WallState, ...] = field(default_factory=tuple)

    @property
    def seated_count(self) -> int:
        return sum(1 for particle in self.particles if particle.reached_goal)


def project_particle(particle: Particle, waiting: bool = False) -> ParticleState:
    """Snapshot a single particle.

    A waiting particle stands still, so its last committed velocity is not reported.
    """
    velocity = ZERO if waiting else particle.velocity
    return ParticleState(
        id=particle.id,
        radius=particle.radius,
        x=particle.position.x,
        y=particle.position.y,
        vx=velocity.x,
        vy=velocity.y,
        reached_goal=particle.has_reached_goal,
        stage=particle.goal.stage.value,
        waiting=waiting,
    )


def project_wall(wall: Wall) -> WallState:
    """Snapshot a single wall."""
    return WallState(
        x1=wall.initial_point.x,
        y1=wall.initial_point.y,
        x2=wall.final_point.x,
        y2=wall.final_point.y,
    )


def project(scene: BoardingScene) -> SceneState:
    """Project the scene into an immutable SceneState.

    Args:
        scene: The scene to snapshot

    Returns:
        SceneState with one ParticleState per passenger and one WallState per wall.
    """
    return SceneState(
        tick=scene.tick,
        time=scene.time,
        time_step=scene.time_step,
        particles=tuple(
            project_particle(particle, waiting=not may_move(scene, particle))
            for particle in scene.particles
        ),
        walls=tuple(project_wall(wall) for wall in scene.walls),
    )
