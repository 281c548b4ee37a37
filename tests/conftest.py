"""Shared fixtures and helpers for boardingsim tests."""

from __future__ import annotations

import logging

import pytest

from boardingsim.model.airplane import AirplaneLayout
from boardingsim.model.goal import Stage, StaticGoal
from boardingsim.model.particle import Particle
from boardingsim.model.vector import ZERO, Vector2D

MIN_RADIUS = 0.25
MAX_RADIUS = 0.4


class FakeRoute:
    """Route whose stage is set by the test."""

    def __init__(self, stage: Stage = Stage.APPROACH_JET_BRIDGE) -> None:
        self.stage = stage
        self.target: Vector2D | None = None
        self.moves = 0

    @property
    def has_reached(self) -> bool:
        return self.stage == Stage.REACHED

    def notify_move(self, position: Vector2D) -> bool:
        self.moves += 1
        return False


def make_particle(
    x: float = 0.0,
    y: float = 0.0,
    radius: float = MAX_RADIUS,
    goal: object | None = None,
    identifier: int = 0,
    **kwargs: float,
) -> Particle:
    """Particle with the default model constants and a static goal far away."""
    params = {
        "min_radius": MIN_RADIUS,
        "max_radius": MAX_RADIUS,
        "tao": 0.5,
        "beta": 0.9,
        "max_speed": 1.0,
    }
    params.update(kwargs)
    return Particle(
        id=identifier,
        radius=radius,
        position=Vector2D(x, y),
        velocity=ZERO,
        goal=goal if goal is not None else StaticGoal(Vector2D(100.0, 100.0), MIN_RADIUS),
        **params,
    )


@pytest.fixture
def layout() -> AirplaneLayout:
    """Small airplane: 3 rows, 2 seats per side."""
    return AirplaneLayout(
        rows=3,
        seats_per_side=2,
        central_hall_width=0.85,
        front_hall_length=2.0,
        seat_width=0.5,
        seat_separation=0.7,
        door_length=1.0,
    )


@pytest.fixture(autouse=True)
def restore_logger():
    """Leave the boardingsim logger as it was after each test."""
    logger = logging.getLogger("boardingsim")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
