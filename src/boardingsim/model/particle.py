"""Particle: a passenger modeled as a contractile disk.

The particle's radius shrinks to its minimum when it touches an obstacle and
relaxes back to its maximum while free. Its desired speed is coupled to the
radius, so compressed passengers walk slower.

Updates are two-phase: prepare_move() computes the next radius and velocity
from the current state of every particle, then move() commits them. This
keeps one simulation step independent of the order particles are visited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from boardingsim.model.obstacle import InvalidStateError
from boardingsim.model.vector import ZERO, Vector2D

if TYPE_CHECKING:
    from collections.abc import Sequence

    from boardingsim.model.goal import Route
    from boardingsim.model.obstacle import Obstacle


@dataclass(eq=False)
class Particle:
    """A passenger with position, velocity, dynamic radius and a goal.

    Particles compare by identity so they can be used as dict keys.
    """

    id: int
    radius: float
    position: Vector2D
    velocity: Vector2D
    goal: Route

    # Model constants
    min_radius: float
    max_radius: float
    tao: float  # radius relaxation time
    beta: float  # exponent coupling speed to radius
    max_speed: float

    # Staged state, only set between prepare_move() and move()
    _staged_radius: float | None = field(default=None, init=False, repr=False)
    _staged_velocity: Vector2D | None = field(default=None, init=False, repr=False)
    _prepared: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.radius <= 0 or self.min_radius <= 0 or self.max_radius <= 0:
            msg = "The radius must be positive"
            raise ValueError(msg)
        if not self.min_radius <= self.radius <= self.max_radius:
            msg = "The radius must have a value between min_radius and max_radius"
            raise ValueError(msg)
        if self.position is None or self.velocity is None:
            msg = "Position and velocity must not be None"
            raise ValueError(msg)
        if self.goal is None:
            msg = "The goal must not be None"
            raise ValueError(msg)
        if self.tao <= 0:
            msg = "tao must be positive"
            raise ValueError(msg)
        if self.beta < 0:
            msg = "beta must not be negative"
            raise ValueError(msg)
        if self.max_speed <= 0:
            msg = "The max. speed must be positive"
            raise ValueError(msg)

    @property
    def prepared(self) -> bool:
        return self._prepared

    @property
    def has_reached_goal(self) -> bool:
        return self.goal.has_reached

    def desired_speed(self, radius: float) -> float:
        """Free-walking speed for the given radius.

        max_speed * ((radius - min_radius) / (max_radius - min_radius)) ** beta
        """
        span = self.max_radius - self.min_radius
        if span == 0:
            return self.max_speed
        return self.max_speed * ((radius - self.min_radius) / span) ** self.beta

    def prepare_move(self, in_contact: Sequence[Obstacle], time_step: float) -> None:
        """Compute the next radius and velocity without changing the current state.

        Args:
            in_contact: Obstacles currently overlapping this particle.
            time_step: Simulation time step.
        """
        if not in_contact:
            new_radius = min(self.max_radius, self.radius + self.max_radius * time_step / self.tao)
            speed = self.desired_speed(new_radius)
            target = self.goal.target
            direction = ZERO if target is None else target.subtract(self.position).normalize()
            new_velocity = direction.scale(speed)
        else:
            new_radius = self.min_radius
            escape = ZERO
            for obstacle in in_contact:
                escape = escape.add(obstacle.escape_direction(self))
            # A sum that cancels out normalizes to zero: no movement this step
            new_velocity = escape.normalize().scale(self.max_speed)

        self._staged_radius = new_radius
        self._staged_velocity = new_velocity
        self._prepared = True

    def move(self, time_step: float) -> None:
        """Commit the prepared state, advance the position and notify the goal.

        Raises:
            InvalidStateError: If prepare_move() was not called first in this step.
        """
        if not self._prepared or self._staged_radius is None or self._staged_velocity is None:
            msg = (
                "The particle cannot move because it was not prepared yet. "
                "Call prepare_move() before each move()."
            )
            raise InvalidStateError(msg)

        self.radius = self._staged_radius
        self.velocity = self._staged_velocity
        self.position = self.position.add(self.velocity.scale(time_step))

        self.goal.notify_move(self.position)

        self._staged_radius = None
        self._staged_velocity = None
        self._prepared = False

    def overlaps(self, position: Vector2D, radius: float) -> bool:
        """Whether a disk with the given center and radius would overlap this particle."""
        return self.radius + radius - self.position.distance(position) > 0

    def does_overlap(self, particle: Particle) -> bool:
        return self.overlaps(particle.position, particle.radius)

    def escape_direction(self, particle: Particle) -> Vector2D:
        """Unit vector from this particle toward the other one.

        Coincident centers give the zero vector.

        Raises:
            InvalidStateError: If the particles do not overlap.
        """
        if not self.does_overlap(particle):
            msg = "Tried to calculate an escape direction with a particle that is not overlapping"
            raise InvalidStateError(msg)
        return particle.position.subtract(self.position).normalize()
