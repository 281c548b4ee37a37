"""Obstacle protocol: anything a particle can overlap with and escape from."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from boardingsim.model.particle import Particle
    from boardingsim.model.vector import Vector2D


class InvalidStateError(RuntimeError):
    """Raised when the simulation protocol is violated.

    Examples are committing a particle move that was never prepared, or asking
    for an escape direction while there is no overlap. These point at a bug in
    the driving loop and must abort the run.
    """


@runtime_checkable
class Obstacle(Protocol):
    """Something that blocks particles: walls and other particles."""

    def does_overlap(self, particle: Particle) -> bool:
        """Whether the given particle overlaps this obstacle."""
        ...

    def escape_direction(self, particle: Particle) -> Vector2D:
        """Unit vector pushing the given particle out of this obstacle.

        Only valid while does_overlap(particle) holds.
        """
        ...
