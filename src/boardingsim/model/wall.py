"""Wall dataclass: static, rigid line-segment obstacle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from boardingsim.model.obstacle import InvalidStateError
from boardingsim.model.vector import Vector2D

if TYPE_CHECKING:
    from boardingsim.model.particle import Particle


@dataclass(frozen=True)
class Wall:
    """A finite line segment going from initial_point to final_point.

    A particle collides with the wall only if its center projects inside the
    segment's extent; overlapping the infinite line beyond an endpoint does
    not count. A zero-length wall behaves as a point obstacle.
    """

    initial_point: Vector2D
    final_point: Vector2D

    @property
    def direction(self) -> Vector2D:
        """Direction vector from the initial point to the final point."""
        return self.final_point.subtract(self.initial_point)

    @property
    def length(self) -> float:
        return self.direction.norm()

    def _projection_factor(self, point: Vector2D) -> float | None:
        """Scalar t such that initial_point + t * direction is the foot of point.

        Returns None for a zero-length wall.
        """
        direction = self.direction
        norm_sq = direction.norm_sq()
        if norm_sq == 0.0:
            return None
        return point.subtract(self.initial_point).dot(direction) / norm_sq

    def _closest_point(self, point: Vector2D) -> Vector2D | None:
        """Foot of the perpendicular from point, or None if it lies outside the segment."""
        t = self._projection_factor(point)
        if t is None:
            return self.initial_point
        # Inclusive at both endpoints; t < 0 means the projection points backwards
        if t < 0.0 or t > 1.0:
            return None
        return self.initial_point.add(self.direction.scale(t))

    def does_overlap(self, particle: Particle) -> bool:
        """Whether the particle's disk crosses this segment."""
        foot = self._closest_point(particle.position)
        if foot is None:
            return False
        return particle.radius - foot.distance(particle.position) > 0

    def escape_direction(self, particle: Particle) -> Vector2D:
        """Unit vector from the closest point on the wall toward the particle's center.

        Raises:
            InvalidStateError: If the particle does not overlap this wall.
        """
        foot = self._closest_point(particle.position)
        if foot is None or particle.radius - foot.distance(particle.position) <= 0:
            msg = "Tried to calculate an escape direction for a particle not overlapping the wall"
            raise InvalidStateError(msg)
        return particle.position.subtract(foot).normalize()
