"""Static environment geometry: airplane, jet bridge and waiting room walls.

Coordinates have their origin with x on the airplane's central hall axis and
y on the airplane's front (bottom) wall. Seat rows grow toward +y and the door
is on the right (+x) side, where the jet bridge and waiting room are placed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from boardingsim.model.vector import Vector2D
from boardingsim.model.wall import Wall

# Nose geometry in front of the bottom wall
NOSE_SIDE_DEPTH = 5.0
NOSE_TIP_DEPTH = 7.0


class AirplaneSide(Enum):
    """Side of the central hall; the value is the sign of lateral offsets."""

    LEFT = -1
    RIGHT = 1

    @property
    def sign(self) -> int:
        return self.value


@dataclass(frozen=True)
class AirplaneLayout:
    """Dimensional constants of the airplane cabin."""

    rows: int
    seats_per_side: int
    central_hall_width: float
    front_hall_length: float
    seat_width: float
    seat_separation: float
    door_length: float

    def __post_init__(self) -> None:
        if self.rows < 1 or self.seats_per_side < 1:
            msg = "An airplane needs at least one row and one seat per side"
            raise ValueError(msg)
        for name in (
            "central_hall_width",
            "front_hall_length",
            "seat_width",
            "seat_separation",
            "door_length",
        ):
            if getattr(self, name) <= 0:
                msg = f"{name} must be positive"
                raise ValueError(msg)

    @property
    def half_hall_width(self) -> float:
        return self.central_hall_width / 2

    @property
    def seats_width(self) -> float:
        """Width of the seat block on one side."""
        return self.seat_width * self.seats_per_side

    @property
    def width(self) -> float:
        return 2 * self.seats_width + self.central_hall_width

    @property
    def half_width(self) -> float:
        return self.width / 2

    @property
    def length(self) -> float:
        return self.front_hall_length + self.seat_separation * self.rows

    def row_start_y(self, row: int) -> float:
        """The y coordinate where the given row begins (front boundary)."""
        return self.front_hall_length + self.seat_separation * row

    def row_end_y(self, row: int) -> float:
        """The y coordinate where the given row ends, i.e. where its seat wall is."""
        return self.front_hall_length + self.seat_separation * (row + 1)

    def seat_center(self, row: int, column: int, side: AirplaneSide) -> Vector2D:
        """Center of a seat. Column 0 is the seat next to the central hall."""
        if not 0 <= row < self.rows:
            msg = f"Row {row} out of range [0, {self.rows})"
            raise ValueError(msg)
        if not 0 <= column < self.seats_per_side:
            msg = f"Column {column} out of range [0, {self.seats_per_side})"
            raise ValueError(msg)
        x = side.sign * (self.half_hall_width + self.seat_width * (column + 0.5))
        y = self.front_hall_length + self.seat_separation * (row + 0.5)
        return Vector2D(x, y)


def build_airplane_walls(layout: AirplaneLayout) -> list[Wall]:
    """Build the airplane hull and one seat wall per row and side.

    The right wall starts above the door so the door stays open.
    """
    left = -layout.half_width
    right = layout.half_width
    bottom = 0.0
    top = layout.length

    bottom_wall = Wall(Vector2D(left, bottom), Vector2D(right, bottom))
    upper_wall = Wall(Vector2D(left, top), Vector2D(right, top))
    left_wall = Wall(Vector2D(left, bottom), Vector2D(left, top))
    right_wall = Wall(Vector2D(right, layout.door_length), Vector2D(right, top))
    left_bottom_wall = Wall(bottom_wall.initial_point, Vector2D(left, -NOSE_SIDE_DEPTH))
    right_bottom_wall = Wall(bottom_wall.final_point, Vector2D(right, -NOSE_SIDE_DEPTH))
    left_nose = Wall(left_bottom_wall.final_point, Vector2D(0.0, -NOSE_TIP_DEPTH))
    right_nose = Wall(right_bottom_wall.final_point, Vector2D(0.0, -NOSE_TIP_DEPTH))

    walls = [
        bottom_wall,
        upper_wall,
        left_wall,
        right_wall,
        left_bottom_wall,
        right_bottom_wall,
        left_nose,
        right_nose,
    ]

    left_seats_end = left + layout.seats_width
    right_seats_start = right - layout.seats_width
    for row in range(layout.rows):
        y = layout.row_end_y(row)
        walls.append(Wall(Vector2D(left, y), Vector2D(left_seats_end, y)))
    for row in range(layout.rows):
        y = layout.row_end_y(row)
        walls.append(Wall(Vector2D(right_seats_start, y), Vector2D(right, y)))

    return walls


def build_jet_bridge_walls(width: float, length: float, airplane_width: float) -> list[Wall]:
    """Build the jet bridge: two walls along x, starting at the airplane's right side."""
    if width <= 0 or length <= 0:
        msg = "Jet bridge width and length must be positive"
        raise ValueError(msg)
    start_x = airplane_width / 2
    return [
        Wall(Vector2D(start_x, 0.0), Vector2D(start_x + length, 0.0)),
        Wall(Vector2D(start_x, width), Vector2D(start_x + length, width)),
    ]


def build_waiting_room_walls(
    width: float,
    length: float,
    airplane_width: float,
    jet_bridge_width: float,
    jet_bridge_length: float,
) -> list[Wall]:
    """Build the waiting room at the far end of the jet bridge.

    The left wall starts at the jet bridge's upper wall, leaving its mouth open.
    """
    if width <= 0 or length <= 0:
        msg = "Waiting room width and length must be positive"
        raise ValueError(msg)
    start_x = airplane_width / 2 + jet_bridge_length
    bottom_wall = Wall(Vector2D(start_x, 0.0), Vector2D(start_x + width, 0.0))
    upper_wall = Wall(Vector2D(start_x, length), Vector2D(start_x + width, length))
    left_wall = Wall(Vector2D(start_x, jet_bridge_width), upper_wall.initial_point)
    right_wall = Wall(bottom_wall.final_point, upper_wall.final_point)
    return [bottom_wall, upper_wall, left_wall, right_wall]
