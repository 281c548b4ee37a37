"""Simulation engine: tick driver, movement gates, boarding population, scenario factory."""

from boardingsim.engine.boarding import (
    BoardingStrategy,
    ParticleParameters,
    Population,
    create_population,
    seat_order,
    waiting_room_size,
)
from boardingsim.engine.gates import BatchCallUp, LuggageStowing, MovementGate
from boardingsim.engine.scenario import create_scene
from boardingsim.engine.simulation import (
    find_contacts,
    may_move,
    run_scene,
    should_stop,
    tick_scene,
)

__all__ = [
    "BatchCallUp",
    "BoardingStrategy",
    "LuggageStowing",
    "MovementGate",
    "ParticleParameters",
    "Population",
    "create_population",
    "create_scene",
    "find_contacts",
    "may_move",
    "run_scene",
    "seat_order",
    "should_stop",
    "tick_scene",
    "waiting_room_size",
]
