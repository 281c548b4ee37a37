"""Boarding strategies and passenger population.

Seats are ordered by a boarding strategy and the resulting passengers are
queued in the waiting room in batches: passengers of the same batch stand in
one line across the room, and later batches stand further back.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import StrEnum

from boardingsim.model.airplane import AirplaneLayout, AirplaneSide
from boardingsim.model.goal import Goal
from boardingsim.model.particle import Particle
from boardingsim.model.vector import ZERO, Vector2D

SeatAssignment = tuple[int, int, AirplaneSide]  # (row, column, side)


class BoardingStrategy(StrEnum):
    """Order in which seats are called."""

    BACK_TO_FRONT = "back_to_front"
    FRONT_TO_BACK = "front_to_back"
    OUTSIDE_IN = "outside_in"
    INSIDE_OUT = "inside_out"
    RANDOM = "random"


@dataclass(frozen=True)
class ParticleParameters:
    """Contractile-particle constants shared by every passenger."""

    min_radius: float
    max_radius: float
    tao: float
    beta: float
    max_speed: float

    @property
    def spacing(self) -> float:
        """Separation between passengers queued in the waiting room."""
        return 5 * self.max_radius


@dataclass(frozen=True)
class Population:
    """Passengers ready to board, with their batch calling numbers."""

    particles: list[Particle]
    calling_numbers: dict[Particle, int]

    @property
    def batches(self) -> int:
        return max(self.calling_numbers.values(), default=-1) + 1


def seat_order(
    strategy: BoardingStrategy,
    rows: int,
    seats_per_side: int,
    rng: random.Random | None = None,
) -> list[SeatAssignment]:
    """List every seat in the order the strategy calls them.

    Column 0 is the aisle seat, so "outside" means the highest column.
    Both sides of a row/column pair are always called together.
    """
    sides = (AirplaneSide.LEFT, AirplaneSide.RIGHT)
    back_rows = range(rows - 1, -1, -1)
    window_first = range(seats_per_side - 1, -1, -1)

    if strategy == BoardingStrategy.BACK_TO_FRONT:
        return [(r, c, s) for r in back_rows for c in window_first for s in sides]
    if strategy == BoardingStrategy.FRONT_TO_BACK:
        return [(r, c, s) for r in range(rows) for c in window_first for s in sides]
    if strategy == BoardingStrategy.OUTSIDE_IN:
        return [(r, c, s) for c in window_first for r in back_rows for s in sides]
    if strategy == BoardingStrategy.INSIDE_OUT:
        return [(r, c, s) for c in range(seats_per_side) for r in back_rows for s in sides]

    seats = [(r, c, s) for r in range(rows) for c in range(seats_per_side) for s in sides]
    (rng if rng is not None else random.Random()).shuffle(seats)
    return seats


def waiting_room_size(
    layout: AirplaneLayout,
    params: ParticleParameters,
    batch_size: int,
    jet_bridge_width: float,
) -> tuple[float, float]:
    """Width and length of a waiting room fitting every batch."""
    spacing = params.spacing
    passengers = 2 * layout.rows * layout.seats_per_side
    width = (batch_size + 1) * 2 * spacing
    length = _start_y(params, jet_bridge_width) + passengers * 2 * spacing / batch_size
    return width, length


def _start_y(params: ParticleParameters, jet_bridge_width: float) -> float:
    return jet_bridge_width + 3 * params.spacing


def create_population(
    layout: AirplaneLayout,
    params: ParticleParameters,
    strategy: BoardingStrategy,
    batch_size: int,
    jet_bridge_width: float,
    jet_bridge_length: float,
    goal_margin: float,
    rng: random.Random | None = None,
) -> Population:
    """Create one passenger per seat, queued in the waiting room.

    Passenger i belongs to batch i // batch_size and stands at lateral slot
    i % batch_size. Every passenger starts at max. radius and rest.
    """
    if batch_size < 1:
        msg = "batch_size must be at least 1"
        raise ValueError(msg)
    rng = rng if rng is not None else random.Random()

    spacing = params.spacing
    start_x = 2 * spacing + layout.half_width + params.max_radius + jet_bridge_length
    start_y = _start_y(params, jet_bridge_width)

    particles: list[Particle] = []
    calling_numbers: dict[Particle, int] = {}
    seats = seat_order(strategy, layout.rows, layout.seats_per_side, rng)
    for index, (row, column, side) in enumerate(seats):
        calling_number = index // batch_size
        slot = index % batch_size
        position = Vector2D(
            start_x + 2 * spacing * slot,
            start_y + 2 * spacing * calling_number,
        )
        goal = Goal(
            layout,
            row,
            column,
            side,
            spawn_x=position.x,
            jet_bridge_width=jet_bridge_width,
            margin=goal_margin,
            rng=rng,
        )
        particle = Particle(
            id=index,
            radius=params.max_radius,
            position=position,
            velocity=ZERO,
            goal=goal,
            min_radius=params.min_radius,
            max_radius=params.max_radius,
            tao=params.tao,
            beta=params.beta,
            max_speed=params.max_speed,
        )
        particles.append(particle)
        calling_numbers[particle] = calling_number

    return Population(particles=particles, calling_numbers=calling_numbers)
