"""Tests for the scene tick driver and the scenario factory."""

import random

import pytest
from conftest import MAX_RADIUS, MIN_RADIUS, make_particle

from boardingsim.config import BoardingConfig
from boardingsim.engine.gates import BatchCallUp, LuggageStowing
from boardingsim.engine.scenario import create_scene
from boardingsim.engine.simulation import (
    find_contacts,
    may_move,
    run_scene,
    should_stop,
    tick_scene,
)
from boardingsim.model.airplane import AirplaneLayout, AirplaneSide
from boardingsim.model.goal import Goal, Stage, StaticGoal
from boardingsim.model.particle import Particle
from boardingsim.model.scene import BoardingScene
from boardingsim.model.vector import Vector2D
from boardingsim.model.wall import Wall


def small_config(**overrides: object) -> BoardingConfig:
    values: dict[str, object] = {
        "rows": 2,
        "columns": 1,
        "batch_size": 2,
        "luggage_probability": 0.0,
        "seed": 1,
        "duration": 2.0,
    }
    values.update(overrides)
    return BoardingConfig(**values)


class TestBoardingScene:
    """Tests for BoardingScene bookkeeping."""

    def test_validation(self) -> None:
        """Clock parameters must be positive."""
        with pytest.raises(ValueError, match="time_step"):
            BoardingScene(time_step=0.0, duration=1.0)
        with pytest.raises(ValueError, match="duration"):
            BoardingScene(time_step=0.1, duration=0.0)
        with pytest.raises(ValueError, match="settle_time"):
            BoardingScene(time_step=0.1, duration=1.0, settle_time=-1.0)

    def test_empty_scene_is_not_seated(self) -> None:
        """A scene without passengers never counts as all seated."""
        scene = BoardingScene(time_step=0.1, duration=1.0)
        assert scene.seated_count == 0
        assert not scene.all_seated


class TestTickScene:
    """Tests for tick_scene."""

    def test_advances_clock(self) -> None:
        """One tick increments tick and time."""
        scene = BoardingScene(time_step=0.25, duration=10.0, particles=[make_particle()])
        tick_scene(scene)
        assert scene.tick == 1
        assert scene.time == 0.25

    def test_find_contacts(self) -> None:
        """Contacts include overlapping walls and particles, never the particle itself."""
        wall = Wall(Vector2D(-1.0, 0.3), Vector2D(1.0, 0.3))
        far_wall = Wall(Vector2D(-1.0, 5.0), Vector2D(1.0, 5.0))
        a = make_particle(0.0, 0.0, identifier=0)
        b = make_particle(0.5, 0.0, identifier=1)
        c = make_particle(5.0, 0.0, identifier=2)
        scene = BoardingScene(
            time_step=0.1, duration=1.0, walls=[wall, far_wall], particles=[a, b, c]
        )
        assert find_contacts(scene, a) == [wall, b]
        assert find_contacts(scene, c) == []

    def test_order_independent(self) -> None:
        """The result of a tick does not depend on the order of the particles."""

        def build() -> list:
            return [
                make_particle(0.0, 0.0, identifier=0),
                make_particle(0.5, 0.1, identifier=1),
                make_particle(0.9, -0.2, radius=MIN_RADIUS, identifier=2),
                make_particle(3.0, 3.0, identifier=3),
            ]

        walls = [Wall(Vector2D(-1.0, -0.5), Vector2D(2.0, -0.5))]
        forward = BoardingScene(time_step=0.05, duration=1.0, walls=walls, particles=build())
        backward = BoardingScene(
            time_step=0.05, duration=1.0, walls=walls, particles=list(reversed(build()))
        )
        for _ in range(5):
            tick_scene(forward)
            tick_scene(backward)

        def state(scene: BoardingScene) -> list[float]:
            values: list[float] = []
            for p in sorted(scene.particles, key=lambda p: p.id):
                values.extend((p.position.x, p.position.y, p.velocity.x, p.velocity.y, p.radius))
            return values

        assert state(forward) == pytest.approx(state(backward))

    def test_held_particles_do_not_move(self) -> None:
        """A particle held by a gate keeps its state but still blocks others."""
        waiting = make_particle(10.0, 0.0, identifier=1)
        walker = make_particle(0.0, 0.0, identifier=0)
        gate = BatchCallUp({walker: 0, waiting: 1})
        scene = BoardingScene(
            time_step=0.05, duration=1.0, particles=[walker, waiting], gates=[gate]
        )
        assert may_move(scene, walker)
        assert not may_move(scene, waiting)
        tick_scene(scene)
        assert waiting.position == Vector2D(10.0, 0.0)
        assert walker.position != Vector2D(0.0, 0.0)
        assert find_contacts(scene, make_particle(10.3, 0.0)) == [waiting]

    def test_records_all_seated_time(self) -> None:
        """The first tick after which every passenger is seated is recorded."""
        particle = make_particle(goal=StaticGoal(Vector2D(0.05, 0.0), 0.01))
        scene = BoardingScene(time_step=0.05, duration=1.0, particles=[particle])
        tick_scene(scene)
        assert scene.all_seated
        assert scene.all_seated_at == scene.time

    def test_radius_stays_in_bounds(self) -> None:
        """Crowded particles never leave [min_radius, max_radius]."""
        rng = random.Random(4)
        particles = [
            make_particle(
                rng.uniform(0.0, 2.0),
                rng.uniform(0.0, 2.0),
                goal=StaticGoal(Vector2D(1.0, 1.0), 0.01),
                identifier=i,
            )
            for i in range(15)
        ]
        scene = BoardingScene(time_step=0.05, duration=5.0, particles=particles)
        for _ in range(50):
            tick_scene(scene)
            assert all(MIN_RADIUS <= p.radius <= MAX_RADIUS for p in scene.particles)


class TestStopCondition:
    """Tests for should_stop and run_scene."""

    def test_stops_after_duration(self) -> None:
        """Without seated passengers the run ends once time exceeds duration."""
        scene = BoardingScene(time_step=0.25, duration=1.0)
        ticks = run_scene(scene)
        assert ticks == 5
        assert scene.time == 1.25

    def test_not_stopped_at_exact_duration(self) -> None:
        """Reaching the duration exactly is not enough to stop."""
        scene = BoardingScene(time_step=0.25, duration=1.0, time=1.0)
        assert not should_stop(scene)

    def test_stops_after_settle_time(self) -> None:
        """Once everyone is seated the run continues for settle_time."""
        particles = [make_particle(goal=StaticGoal(None, 0.1), identifier=i) for i in range(2)]
        scene = BoardingScene(
            time_step=0.25, duration=100.0, particles=particles, settle_time=0.5
        )
        ticks = run_scene(scene)
        assert scene.all_seated_at == 0.25
        assert ticks == 3
        assert scene.time == 0.75

    def test_callback_sees_every_state(self) -> None:
        """on_tick runs before the first tick and after every tick."""
        scene = BoardingScene(time_step=0.25, duration=1.0)
        seen: list[int] = []
        ticks = run_scene(scene, on_tick=lambda s: seen.append(s.tick))
        assert seen == list(range(ticks + 1))


class TestScenario:
    """Tests for create_scene."""

    def test_builds_full_scene(self) -> None:
        """The scene holds every passenger and the whole environment."""
        scene = create_scene(small_config())
        assert len(scene.particles) == 4
        # 8 hull + 2 per row, 2 jet bridge, 4 waiting room
        assert len(scene.walls) == 8 + 2 * 2 + 2 + 4
        assert any(isinstance(g, BatchCallUp) for g in scene.gates)
        assert not any(isinstance(g, LuggageStowing) for g in scene.gates)
        assert scene.tick == 0

    def test_luggage_gate_enabled(self) -> None:
        """A positive luggage probability adds the luggage gate."""
        scene = create_scene(small_config(luggage_probability=0.5))
        assert any(isinstance(g, LuggageStowing) for g in scene.gates)

    def test_seeded_scenes_are_reproducible(self) -> None:
        """The same seed gives the same passengers and the same run."""
        config = small_config(strategy="random", seed=9)
        first = create_scene(config)
        second = create_scene(config)
        for _ in range(20):
            tick_scene(first)
            tick_scene(second)
        assert [p.position for p in first.particles] == [p.position for p in second.particles]
        assert [p.goal.seat for p in first.particles] == [p.goal.seat for p in second.particles]

    def test_run_respects_invariants(self) -> None:
        """A short real run keeps radii in bounds and stops by its duration."""
        scene = create_scene(small_config())
        spawns = [p.position for p in scene.particles]

        def check(current: BoardingScene) -> None:
            for particle in current.particles:
                assert MIN_RADIUS <= particle.radius <= MAX_RADIUS

        run_scene(scene, on_tick=check)
        assert should_stop(scene)
        assert scene.time > 0
        assert any(p.position != q for p, q in zip(scene.particles, spawns, strict=True))

    def test_back_to_front_boarding_completes(self) -> None:
        """Every passenger of a small airplane reaches its seat."""
        config = BoardingConfig(
            rows=4,
            seed=1,
            luggage_probability=0.0,
            strategy="back_to_front",
            duration=300.0,
        )
        scene = create_scene(config)
        run_scene(scene)
        assert scene.all_seated_at is not None
        assert scene.all_seated_at < config.duration
        assert scene.seated_count == len(scene.particles) == 24


class TestHeadOnCollision:
    """Two passengers walking toward the same jet bridge region from both sides."""

    def test_goal_driven_collision(self, layout: AirplaneLayout) -> None:
        """At the colliding step both compress and walk apart along their centers."""
        spawn_x = 30.0

        def passenger(x: float, identifier: int) -> Particle:
            goal = Goal(
                layout,
                0,
                0,
                AirplaneSide.RIGHT,
                spawn_x=spawn_x,
                jet_bridge_width=1.0,
                margin=MIN_RADIUS,
                rng=random.Random(identifier),
            )
            return make_particle(x, 0.5, goal=goal, identifier=identifier)

        left = passenger(spawn_x - 1.5, 0)
        right = passenger(spawn_x + 1.5, 1)
        scene = BoardingScene(time_step=0.05, duration=10.0, particles=[left, right])

        for _ in range(100):
            touching = left.does_overlap(right)
            tick_scene(scene)
            if touching:
                break
            assert left.velocity.x > 0
            assert right.velocity.x < 0
        else:
            pytest.fail("The passengers never met")

        assert left.radius == MIN_RADIUS
        assert right.radius == MIN_RADIUS
        apart = left.position.subtract(right.position).normalize()
        assert left.velocity.as_tuple() == pytest.approx(apart.as_tuple())
        assert right.velocity.as_tuple() == pytest.approx(apart.scale(-1.0).as_tuple())
        assert left.goal.stage == Stage.APPROACH_JET_BRIDGE
        assert right.goal.stage == Stage.APPROACH_JET_BRIDGE
