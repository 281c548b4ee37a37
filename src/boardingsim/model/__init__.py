"""Domain model: Vector2D, Wall, Particle, Goal, airplane geometry and the scene."""

from boardingsim.model.airplane import (
    AirplaneLayout,
    AirplaneSide,
    build_airplane_walls,
    build_jet_bridge_walls,
    build_waiting_room_walls,
)
from boardingsim.model.goal import (
    ArrivalKind,
    Goal,
    GoalStateMachine,
    Region,
    Route,
    Stage,
    StaticGoal,
    Waypoint,
)
from boardingsim.model.obstacle import InvalidStateError, Obstacle
from boardingsim.model.particle import Particle
from boardingsim.model.scene import BoardingScene
from boardingsim.model.vector import ZERO, Vector2D
from boardingsim.model.wall import Wall

__all__ = [
    "ZERO",
    "AirplaneLayout",
    "AirplaneSide",
    "ArrivalKind",
    "BoardingScene",
    "Goal",
    "GoalStateMachine",
    "InvalidStateError",
    "Obstacle",
    "Particle",
    "Region",
    "Route",
    "Stage",
    "StaticGoal",
    "Vector2D",
    "Wall",
    "Waypoint",
    "build_airplane_walls",
    "build_jet_bridge_walls",
    "build_waiting_room_walls",
]
