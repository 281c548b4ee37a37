"""Vector2D dataclass: immutable 2D vector used for positions and velocities."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2D:
    """An immutable 2D vector.

    Every operation returns a new vector, so a particle's position or velocity
    can only change by assigning a new value to the field holding it.
    """

    x: float = 0.0
    y: float = 0.0

    def add(self, other: Vector2D) -> Vector2D:
        """Add another vector to this one."""
        return Vector2D(self.x + other.x, self.y + other.y)

    def subtract(self, other: Vector2D) -> Vector2D:
        """Subtract another vector from this one."""
        return Vector2D(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> Vector2D:
        """Multiply both components by a scalar."""
        return Vector2D(self.x * factor, self.y * factor)

    def dot(self, other: Vector2D) -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y

    def norm_sq(self) -> float:
        """Squared Euclidean norm."""
        return self.x * self.x + self.y * self.y

    def norm(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.norm_sq())

    def distance(self, other: Vector2D) -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def normalize(self) -> Vector2D:
        """Return the unit vector with the same direction.

        The zero vector has no direction and normalizes to itself.
        """
        norm = self.norm()
        if norm == 0.0:
            return ZERO
        return Vector2D(self.x / norm, self.y / norm)

    def __add__(self, other: Vector2D) -> Vector2D:
        return self.add(other)

    def __sub__(self, other: Vector2D) -> Vector2D:
        return self.subtract(other)

    def __mul__(self, factor: float) -> Vector2D:
        return self.scale(factor)

    __rmul__ = __mul__

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


ZERO = Vector2D(0.0, 0.0)
