"""Projection: immutable scene snapshots for output writers and the server."""

from boardingsim.projection.projector import (
    ParticleState,
    SceneState,
    WallState,
    project,
    project_particle,
    project_wall,
)

__all__ = [
    "ParticleState",
    "SceneState",
    "WallState",
    "project",
    "project_particle",
    "project_wall",
]
