"""Ovito XYZ writer: one frame per saved SceneState.

Frame layout:
    <number of lines below the frame number>
    <frame number>
    x y vx vy radius red green blue id      (one line per passenger)
    x y 0 0 0.05 1 1 1 id                   (two lines per wall, one per endpoint)

Passengers are colored by compression: green at max. radius, red at min.
radius, blue once seated.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from types import TracebackType

    from boardingsim.projection.projector import ParticleState, SceneState, WallState

logger = logging.getLogger(__name__)

WALL_POINT_RADIUS = 0.05


def particle_color(
    particle: ParticleState, min_radius: float, max_radius: float
) -> tuple[float, float, float]:
    """RGB color for a passenger."""
    if particle.reached_goal:
        return (0.0, 0.0, 1.0)
    span = max_radius - min_radius
    if span <= 0:
        return (0.0, 1.0, 0.0)
    red = (max_radius - particle.radius) / span
    green = (particle.radius - min_radius) / span
    return (red, green, 0.0)


def _particle_line(particle: ParticleState, min_radius: float, max_radius: float) -> str:
    red, green, blue = particle_color(particle, min_radius, max_radius)
    return (
        f"{particle.x} {particle.y} {particle.vx} {particle.vy} {particle.radius} "
        f"{red} {green} {blue} {particle.id}"
    )


def _wall_lines(wall: WallState, identifier: int) -> list[str]:
    return [
        f"{x} {y} 0 0 {WALL_POINT_RADIUS} 1 1 1 {identifier}"
        for x, y in ((wall.x1, wall.y1), (wall.x2, wall.y2))
    ]


def format_frame(state: SceneState, frame: int, min_radius: float, max_radius: float) -> str:
    """Render one SceneState as an XYZ frame."""
    lines = [_particle_line(p, min_radius, max_radius) for p in state.particles]
    identifier = len(state.particles)
    for wall in state.walls:
        lines.extend(_wall_lines(wall, identifier))
        identifier += 1
    header = [str(len(lines)), str(frame)]
    return "\n".join(header + lines) + "\n"


class OvitoWriter:
    """Streams frames into an XYZ file.

    Use as a context manager:

        with OvitoWriter(path, min_radius, max_radius) as writer:
            writer.write(project(scene))
    """

    def __init__(self, path: str | Path, min_radius: float, max_radius: float) -> None:
        self.path = Path(path)
        self.min_radius = min_radius
        self.max_radius = max_radius
        self.frames = 0
        self._file: TextIO | None = None

    def __enter__(self) -> OvitoWriter:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.path.open("w", encoding="utf-8")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
        logger.info("Saved %d frames to %s", self.frames, self.path)

    def write(self, state: SceneState) -> None:
        if self._file is None:
            msg = "OvitoWriter must be opened before writing"
            raise RuntimeError(msg)
        self._file.write(format_frame(state, self.frames, self.min_radius, self.max_radius))
        self.frames += 1
