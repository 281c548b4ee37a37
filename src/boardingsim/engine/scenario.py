"""Scenario factory: builds a ready-to-run BoardingScene from a configuration."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from boardingsim.engine.boarding import create_population, waiting_room_size
from boardingsim.engine.gates import BatchCallUp, LuggageStowing, MovementGate
from boardingsim.model.airplane import (
    build_airplane_walls,
    build_jet_bridge_walls,
    build_waiting_room_walls,
)
from boardingsim.model.scene import BoardingScene

if TYPE_CHECKING:
    from boardingsim.config import BoardingConfig

logger = logging.getLogger(__name__)


def create_scene(config: BoardingConfig, rng: random.Random | None = None) -> BoardingScene:
    """Build the airplane, jet bridge, waiting room and passengers.

    Args:
        config: Simulation configuration
        rng: Random source; defaults to one seeded with config.seed

    Returns:
        A scene at time 0 with batch call-up and, if enabled, luggage stowing gates.
    """
    if rng is None:
        rng = random.Random(config.seed)

    layout = config.build_layout()
    params = config.particle_parameters()

    walls = build_airplane_walls(layout)
    walls.extend(
        build_jet_bridge_walls(config.jet_bridge_width, config.jet_bridge_length, layout.width)
    )
    room_width, room_length = waiting_room_size(
        layout, params, config.batch_size, config.jet_bridge_width
    )
    walls.extend(
        build_waiting_room_walls(
            room_width,
            room_length,
            layout.width,
            config.jet_bridge_width,
            config.jet_bridge_length,
        )
    )

    population = create_population(
        layout,
        params,
        config.strategy,
        config.batch_size,
        config.jet_bridge_width,
        config.jet_bridge_length,
        config.goal_margin,
        rng,
    )

    gates: list[MovementGate] = [BatchCallUp(population.calling_numbers)]
    if config.luggage_probability > 0:
        gates.append(
            LuggageStowing(
                config.luggage_probability,
                config.luggage_min_time,
                config.luggage_max_time,
                rng,
            )
        )

    logger.info(
        "Created scene: strategy=%s, passengers=%d, batches=%d, walls=%d",
        config.strategy.value,
        len(population.particles),
        population.batches,
        len(walls),
    )
    return BoardingScene(
        time_step=config.time_step,
        duration=config.duration,
        walls=walls,
        particles=population.particles,
        gates=gates,
        settle_time=config.settle_time,
    )
