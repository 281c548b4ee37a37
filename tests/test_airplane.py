"""Tests for airplane geometry and wall builders."""

import pytest
from conftest import make_particle

from boardingsim.model.airplane import (
    AirplaneLayout,
    AirplaneSide,
    build_airplane_walls,
    build_jet_bridge_walls,
    build_waiting_room_walls,
)
from boardingsim.model.vector import Vector2D
from boardingsim.model.wall import Wall


class TestAirplaneLayout:
    """Tests for AirplaneLayout dimensions."""

    def test_derived_dimensions(self, layout: AirplaneLayout) -> None:
        """Width and length follow from seats, hall and rows."""
        assert layout.half_hall_width == pytest.approx(0.425)
        assert layout.seats_width == pytest.approx(1.0)
        assert layout.width == pytest.approx(2.85)
        assert layout.half_width == pytest.approx(1.425)
        assert layout.length == pytest.approx(4.1)

    def test_row_bounds(self, layout: AirplaneLayout) -> None:
        """Rows start after the front hall and are seat_separation deep."""
        assert layout.row_start_y(0) == pytest.approx(2.0)
        assert layout.row_end_y(0) == pytest.approx(2.7)
        assert layout.row_start_y(1) == pytest.approx(layout.row_end_y(0))

    def test_seat_center(self, layout: AirplaneLayout) -> None:
        """Seat centers are mirrored across the aisle; column 0 is next to it."""
        right = layout.seat_center(0, 0, AirplaneSide.RIGHT)
        left = layout.seat_center(0, 0, AirplaneSide.LEFT)
        assert right.x == pytest.approx(0.675)
        assert right.y == pytest.approx(2.35)
        assert left == Vector2D(-right.x, right.y)
        window = layout.seat_center(2, 1, AirplaneSide.RIGHT)
        assert window.x == pytest.approx(1.175)
        assert window.y == pytest.approx(3.75)

    def test_seat_out_of_range(self, layout: AirplaneLayout) -> None:
        """Seats outside the layout raise ValueError."""
        with pytest.raises(ValueError, match="Row"):
            layout.seat_center(3, 0, AirplaneSide.LEFT)
        with pytest.raises(ValueError, match="Column"):
            layout.seat_center(0, -1, AirplaneSide.LEFT)

    def test_invalid_layout(self) -> None:
        """Non-positive dimensions are rejected."""
        with pytest.raises(ValueError, match="door_length"):
            AirplaneLayout(
                rows=1,
                seats_per_side=1,
                central_hall_width=0.85,
                front_hall_length=2.0,
                seat_width=0.5,
                seat_separation=0.7,
                door_length=0.0,
            )

    def test_side_sign(self) -> None:
        """LEFT is negative x, RIGHT positive."""
        assert AirplaneSide.LEFT.sign == -1
        assert AirplaneSide.RIGHT.sign == 1


class TestAirplaneWalls:
    """Tests for build_airplane_walls."""

    def test_wall_count(self, layout: AirplaneLayout) -> None:
        """Eight hull walls plus one seat wall per row and side."""
        walls = build_airplane_walls(layout)
        assert len(walls) == 8 + 2 * layout.rows

    def test_door_left_open(self, layout: AirplaneLayout) -> None:
        """A passenger standing in the door touches no hull wall."""
        walls = build_airplane_walls(layout)
        passenger = make_particle(layout.half_width, layout.door_length / 2, radius=0.25)
        assert not any(wall.does_overlap(passenger) for wall in walls[:8])

    def test_right_wall_starts_above_door(self, layout: AirplaneLayout) -> None:
        """The right hull wall spans from the door to the back."""
        right_wall = build_airplane_walls(layout)[3]
        assert right_wall == Wall(
            Vector2D(layout.half_width, layout.door_length),
            Vector2D(layout.half_width, layout.length),
        )

    def test_seat_walls_leave_aisle_free(self, layout: AirplaneLayout) -> None:
        """Seat walls stop at the central hall."""
        seat_walls = build_airplane_walls(layout)[8:]
        for wall in seat_walls:
            xs = sorted((wall.initial_point.x, wall.final_point.x))
            on_right = xs[0] >= layout.half_hall_width - 1e-9
            on_left = xs[1] <= -layout.half_hall_width + 1e-9
            assert on_right or on_left
            assert wall.initial_point.y == wall.final_point.y

    def test_seat_walls_at_row_ends(self, layout: AirplaneLayout) -> None:
        """Each side has one seat wall per row at the row's end line."""
        seat_walls = build_airplane_walls(layout)[8:]
        left = seat_walls[: layout.rows]
        right = seat_walls[layout.rows :]
        for row in range(layout.rows):
            assert left[row].initial_point.y == pytest.approx(layout.row_end_y(row))
            assert left[row].initial_point.x == pytest.approx(-layout.half_width)
            assert right[row].final_point.x == pytest.approx(layout.half_width)


class TestJetBridgeAndWaitingRoom:
    """Tests for the boarding area builders."""

    def test_jet_bridge(self) -> None:
        """Two parallel walls leave the airplane's right side."""
        lower, upper = build_jet_bridge_walls(1.0, 20.0, 2.85)
        assert lower.initial_point.as_tuple() == pytest.approx((1.425, 0.0))
        assert lower.final_point.as_tuple() == pytest.approx((21.425, 0.0))
        assert upper.initial_point.y == 1.0
        assert upper.length == pytest.approx(20.0)

    def test_jet_bridge_validation(self) -> None:
        """Non-positive dimensions are rejected."""
        with pytest.raises(ValueError):
            build_jet_bridge_walls(0.0, 20.0, 2.85)

    def test_waiting_room_mouth_open(self) -> None:
        """The room's left wall starts above the jet bridge."""
        bottom, upper, left, right = build_waiting_room_walls(6.0, 10.0, 2.85, 1.0, 20.0)
        assert bottom.initial_point.as_tuple() == pytest.approx((21.425, 0.0))
        assert left.initial_point.as_tuple() == pytest.approx((21.425, 1.0))
        assert left.final_point == upper.initial_point
        assert right.final_point.as_tuple() == pytest.approx((27.425, 10.0))
        passenger = make_particle(21.425, 0.5, radius=0.25)
        assert not left.does_overlap(passenger)
