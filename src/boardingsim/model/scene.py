"""BoardingScene dataclass: container holding all simulation state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from boardingsim.engine.gates import MovementGate
    from boardingsim.model.particle import Particle
    from boardingsim.model.wall import Wall


@dataclass
class BoardingScene:
    """The walls, passengers and clock of one boarding simulation.

    The scene is the source of truth for the simulation; it is advanced by
    boardingsim.engine.simulation.tick_scene().
    """

    time_step: float
    duration: float  # max. simulated time

    walls: list[Wall] = field(default_factory=list)
    particles: list[Particle] = field(default_factory=list)

    # Scheduling predicates consulted before a particle may move
    gates: list[MovementGate] = field(default_factory=list)

    # Simulation clock
    settle_time: float = 0.0  # grace period after every passenger is seated
    tick: int = 0
    time: float = 0.0

    # Time at which every passenger first had no more targets
    all_seated_at: float | None = None

    def __post_init__(self) -> None:
        if self.time_step <= 0:
            msg = "time_step must be positive"
            raise ValueError(msg)
        if self.duration <= 0:
            msg = "duration must be positive"
            raise ValueError(msg)
        if self.settle_time < 0:
            msg = "settle_time must not be negative"
            raise ValueError(msg)

    @property
    def seated_count(self) -> int:
        return sum(1 for particle in self.particles if particle.has_reached_goal)

    @property
    def all_seated(self) -> bool:
        return bool(self.particles) and all(p.has_reached_goal for p in self.particles)
