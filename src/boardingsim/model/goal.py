"""Goal and GoalStateMachine: per-passenger waypoint sequencing.

A passenger is routed from its spawn point in the waiting room to its seat
through a fixed, forward-only chain of stages:

1. APPROACH_JET_BRIDGE - walk down to the jet bridge lane (region arrival)
2. REACH_DOOR - walk along the jet bridge into the airplane (region arrival)
3. FRONT_HALL - turn into the front of the central hall (line crossing)
4. MIDDLE(row) - one per row before the target row (line crossing)
5. LAST_MIDDLE - step into the target row on the target side (region arrival)
6. FINAL - reach the seat center (point arrival)
7. REACHED - absorbing

Each stage is a Waypoint value carrying its precomputed target and arrival
rule. A single transition function computes the successor of any waypoint.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from boardingsim.model.airplane import AirplaneLayout, AirplaneSide
from boardingsim.model.vector import Vector2D

logger = logging.getLogger(__name__)


class Stage(Enum):
    """Stages of a passenger's route, in visiting order."""

    APPROACH_JET_BRIDGE = "approach_jet_bridge"
    REACH_DOOR = "reach_door"
    FRONT_HALL = "front_hall"
    MIDDLE = "middle"
    LAST_MIDDLE = "last_middle"
    FINAL = "final"
    REACHED = "reached"

    @property
    def order(self) -> int:
        return _STAGE_ORDER.index(self)

    def at_least(self, other: Stage) -> bool:
        """Whether this stage comes at or after the given one."""
        return self.order >= other.order


_STAGE_ORDER: list[Stage] = list(Stage)


class ArrivalKind(Enum):
    """How a stage decides that its target was reached."""

    REGION = "region"  # position strictly inside a rectangle
    LINE = "line"  # y coordinate crossed the target's y
    POINT = "point"  # distance to the target below the margin
    NONE = "none"  # never (terminal stage)


@dataclass(frozen=True)
class Region:
    """Axis-aligned rectangle used by region arrival stages."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @classmethod
    def from_bounds(cls, x1: float, x2: float, y1: float, y2: float) -> Region:
        """Build a region from unordered bounds."""
        return cls(min(x1, x2), max(x1, x2), min(y1, y2), max(y1, y2))

    @property
    def center(self) -> Vector2D:
        return Vector2D((self.x_min + self.x_max) / 2, (self.y_min + self.y_max) / 2)

    def contains(self, point: Vector2D) -> bool:
        return self.x_min < point.x < self.x_max and self.y_min < point.y < self.y_max


@dataclass(frozen=True)
class Waypoint:
    """One stage of the route with its target and arrival rule."""

    stage: Stage
    target: Vector2D
    arrival: ArrivalKind
    region: Region | None = None
    row: int | None = None  # only for MIDDLE stages


class Route(Protocol):
    """What a particle needs from its goal."""

    @property
    def target(self) -> Vector2D | None: ...

    @property
    def stage(self) -> Stage: ...

    @property
    def has_reached(self) -> bool: ...

    def notify_move(self, position: Vector2D) -> bool: ...


class GoalStateMachine:
    """Holds the current waypoint and advances it along the route.

    Transitions are monotonic: a stage is replaced only by its successor and
    REACHED is absorbing.
    """

    def __init__(
        self,
        layout: AirplaneLayout,
        target_row: int,
        target_column: int,
        target_side: AirplaneSide,
        spawn_x: float,
        jet_bridge_width: float,
        margin: float,
        rng: random.Random | None = None,
    ) -> None:
        if not 0 <= target_row < layout.rows:
            msg = f"Target row {target_row} out of range [0, {layout.rows})"
            raise ValueError(msg)
        if not 0 <= target_column < layout.seats_per_side:
            msg = f"Target column {target_column} out of range [0, {layout.seats_per_side})"
            raise ValueError(msg)
        if jet_bridge_width <= 0:
            msg = "Jet bridge width must be positive"
            raise ValueError(msg)
        if margin <= 0:
            msg = "Goal margin must be positive"
            raise ValueError(msg)
        if 2 * margin >= jet_bridge_width or 2 * margin >= layout.door_length:
            msg = "Goal margin is too large for the jet bridge or door"
            raise ValueError(msg)
        if margin >= layout.half_hall_width:
            msg = "Goal margin must be smaller than half the central hall width"
            raise ValueError(msg)

        self.layout = layout
        self.target_row = target_row
        self.target_column = target_column
        self.target_side = target_side
        self.spawn_x = spawn_x
        self.jet_bridge_width = jet_bridge_width
        self.margin = margin
        self._rng = rng if rng is not None else random.Random()
        self.seat = layout.seat_center(target_row, target_column, target_side)
        self.current = self._build(Stage.APPROACH_JET_BRIDGE)

    def _random_hall_x(self) -> float:
        """Random lateral position in the target side's half of the central hall."""
        span = self.layout.half_hall_width - self.margin
        return self.target_side.sign * self._rng.uniform(0.0, span)

    def _build(self, stage: Stage, row: int | None = None) -> Waypoint:
        """Create the waypoint for a stage. Random offsets are sampled here."""
        layout = self.layout
        margin = self.margin

        if stage == Stage.APPROACH_JET_BRIDGE:
            region = Region.from_bounds(
                self.spawn_x - margin,
                self.spawn_x + margin,
                margin,
                self.jet_bridge_width - margin,
            )
            return Waypoint(stage, region.center, ArrivalKind.REGION, region=region)

        if stage == Stage.REACH_DOOR:
            x = layout.half_hall_width
            region = Region.from_bounds(x, x + 2 * margin, margin, layout.door_length - margin)
            return Waypoint(stage, region.center, ArrivalKind.REGION, region=region)

        if stage == Stage.FRONT_HALL:
            target = Vector2D(self._random_hall_x(), layout.door_length)
            return Waypoint(stage, target, ArrivalKind.LINE)

        if stage == Stage.MIDDLE:
            if row is None:
                msg = "MIDDLE waypoints need a row"
                raise ValueError(msg)
            target = Vector2D(self._random_hall_x(), layout.row_end_y(row))
            return Waypoint(stage, target, ArrivalKind.LINE, row=row)

        if stage == Stage.LAST_MIDDLE:
            region = Region.from_bounds(
                0.0,
                self.target_side.sign * layout.half_width,
                layout.row_start_y(self.target_row),
                layout.row_end_y(self.target_row),
            )
            return Waypoint(stage, region.center, ArrivalKind.REGION, region=region)

        if stage == Stage.FINAL:
            return Waypoint(stage, self.seat, ArrivalKind.POINT)

        return Waypoint(Stage.REACHED, self.seat, ArrivalKind.NONE)

    def successor(self, waypoint: Waypoint) -> Waypoint:
        """Transition function: the waypoint that follows the given one."""
        stage = waypoint.stage
        if stage == Stage.APPROACH_JET_BRIDGE:
            return self._build(Stage.REACH_DOOR)
        if stage == Stage.REACH_DOOR:
            return self._build(Stage.FRONT_HALL)
        if stage == Stage.FRONT_HALL:
            if self.target_row == 0:
                return self._build(Stage.LAST_MIDDLE)
            return self._build(Stage.MIDDLE, row=0)
        if stage == Stage.MIDDLE:
            next_row = (waypoint.row or 0) + 1
            if next_row >= self.target_row:
                return self._build(Stage.LAST_MIDDLE)
            return self._build(Stage.MIDDLE, row=next_row)
        if stage == Stage.LAST_MIDDLE:
            return self._build(Stage.FINAL)
        return self._build(Stage.REACHED)

    def arrived(self, position: Vector2D) -> bool:
        """Evaluate the current waypoint's arrival predicate at the given position."""
        waypoint = self.current
        if waypoint.arrival == ArrivalKind.REGION:
            return waypoint.region is not None and waypoint.region.contains(position)
        if waypoint.arrival == ArrivalKind.LINE:
            return position.y > waypoint.target.y
        if waypoint.arrival == ArrivalKind.POINT:
            return position.distance(waypoint.target) < self.margin
        return False

    def notify_move(self, position: Vector2D) -> bool:
        """Advance to the next waypoint if the current one was reached.

        Returns:
            True if the stage changed.
        """
        if self.current.stage == Stage.REACHED or not self.arrived(position):
            return False
        previous = self.current
        self.current = self.successor(previous)
        logger.debug(
            "Goal for seat (%d, %d, %s) advanced %s -> %s",
            self.target_row,
            self.target_column,
            self.target_side.name,
            previous.stage.value,
            self.current.stage.value,
        )
        return True


class Goal:
    """A passenger's route to its assigned seat."""

    def __init__(
        self,
        layout: AirplaneLayout,
        target_row: int,
        target_column: int,
        target_side: AirplaneSide,
        spawn_x: float,
        jet_bridge_width: float,
        margin: float,
        rng: random.Random | None = None,
    ) -> None:
        self._machine = GoalStateMachine(
            layout,
            target_row,
            target_column,
            target_side,
            spawn_x,
            jet_bridge_width,
            margin,
            rng,
        )

    @property
    def state_machine(self) -> GoalStateMachine:
        return self._machine

    @property
    def waypoint(self) -> Waypoint:
        return self._machine.current

    @property
    def stage(self) -> Stage:
        return self._machine.current.stage

    @property
    def target(self) -> Vector2D | None:
        return self._machine.current.target

    @property
    def seat(self) -> Vector2D:
        return self._machine.seat

    @property
    def has_reached(self) -> bool:
        return self.no_more_targets()

    def notify_move(self, position: Vector2D) -> bool:
        return self._machine.notify_move(position)

    def is_inside_airplane(self) -> bool:
        """Whether the passenger already went through the door."""
        return self.stage.at_least(Stage.FRONT_HALL)

    def is_in_seating_area(self) -> bool:
        """Whether the passenger already stepped into its target row."""
        return self.stage.at_least(Stage.LAST_MIDDLE)

    def is_the_last_target(self) -> bool:
        return self.stage == Stage.FINAL

    def no_more_targets(self) -> bool:
        return self.stage == Stage.REACHED

    def __repr__(self) -> str:
        machine = self._machine
        return (
            f"Goal(row={machine.target_row}, column={machine.target_column}, "
            f"side={machine.target_side.name}, stage={self.stage.value})"
        )


class StaticGoal:
    """A single fixed target with point arrival.

    Once reached the goal has no more targets, so its particle stops driving.
    A goal without a center never has a target.
    """

    def __init__(self, center: Vector2D | None, margin: float) -> None:
        if margin <= 0:
            msg = "Goal margin must be positive"
            raise ValueError(msg)
        self.center = center
        self.margin = margin
        self._reached = center is None

    @property
    def target(self) -> Vector2D | None:
        return None if self._reached else self.center

    @property
    def stage(self) -> Stage:
        return Stage.REACHED if self._reached else Stage.FINAL

    @property
    def has_reached(self) -> bool:
        return self._reached

    def notify_move(self, position: Vector2D) -> bool:
        if self._reached or self.center is None:
            return False
        if position.distance(self.center) < self.margin:
            self._reached = True
            return True
        return False
