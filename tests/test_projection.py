"""Tests for the scene projector."""

import dataclasses

import pytest
from conftest import FakeRoute, make_particle

from boardingsim.engine.gates import BatchCallUp
from boardingsim.model.goal import Stage
from boardingsim.model.scene import BoardingScene
from boardingsim.model.vector import Vector2D
from boardingsim.model.wall import Wall
from boardingsim.projection.projector import (
    ParticleState,
    SceneState,
    project,
    project_particle,
    project_wall,
)


@pytest.fixture
def scene() -> BoardingScene:
    seated = make_particle(1.0, 2.0, goal=FakeRoute(Stage.REACHED), identifier=0)
    queued = make_particle(5.0, 6.0, radius=0.3, identifier=1)
    return BoardingScene(
        time_step=0.05,
        duration=10.0,
        walls=[Wall(Vector2D(0.0, 0.0), Vector2D(1.0, 0.0))],
        particles=[seated, queued],
        gates=[BatchCallUp({seated: 0, queued: 1})],
        tick=3,
        time=0.15,
    )


class TestProjectParticle:
    """Tests for project_particle."""

    def test_copies_fields(self) -> None:
        """Position, velocity, radius and stage are copied."""
        particle = make_particle(1.5, -2.0, radius=0.3, identifier=7)
        state = project_particle(particle)
        assert state == ParticleState(
            id=7,
            radius=0.3,
            x=1.5,
            y=-2.0,
            vx=0.0,
            vy=0.0,
            reached_goal=False,
            stage="final",
            waiting=False,
        )

    def test_is_immutable(self) -> None:
        """Snapshots cannot be changed."""
        state = project_particle(make_particle())
        with pytest.raises(dataclasses.FrozenInstanceError):
            state.x = 1.0  # type: ignore[misc]


class TestProject:
    """Tests for project."""

    def test_scene_state(self, scene: BoardingScene) -> None:
        """The scene clock and contents are captured."""
        state = project(scene)
        assert isinstance(state, SceneState)
        assert state.tick == 3
        assert state.time == 0.15
        assert state.time_step == 0.05
        assert len(state.particles) == 2
        assert state.walls == (project_wall(scene.walls[0]),)

    def test_seated_and_waiting(self, scene: BoardingScene) -> None:
        """Seated passengers are flagged, gated passengers are waiting."""
        state = project(scene)
        seated, queued = state.particles
        assert seated.reached_goal
        assert seated.stage == "reached"
        assert not seated.waiting
        assert queued.waiting
        assert state.seated_count == 1

    def test_waiting_particles_stand_still(self, scene: BoardingScene) -> None:
        """A held passenger is reported without its last velocity."""
        seated, queued = scene.particles
        seated.velocity = Vector2D(0.5, 0.0)
        queued.velocity = Vector2D(1.0, 0.0)
        seated_state, queued_state = project(scene).particles
        assert (seated_state.vx, seated_state.vy) == (0.5, 0.0)
        assert (queued_state.vx, queued_state.vy) == (0.0, 0.0)

    def test_snapshot_is_detached(self, scene: BoardingScene) -> None:
        """Changing the scene afterwards does not change the snapshot."""
        state = project(scene)
        scene.particles[1].position = Vector2D(9.0, 9.0)
        assert state.particles[1].x == 5.0

    def test_wall_state(self) -> None:
        """Walls are projected as their two endpoints."""
        wall_state = project_wall(Wall(Vector2D(1.0, 2.0), Vector2D(3.0, 4.0)))
        assert (wall_state.x1, wall_state.y1, wall_state.x2, wall_state.y2) == (1.0, 2.0, 3.0, 4.0)
