"""Scene tick driver: executes one contractile-particle simulation step.

Tick sequence:
1. Select the particles every movement gate lets move
2. For each of them, collect overlapping walls and particles and prepare the move
3. Commit every prepared move (the goals are notified inside move())
4. Update the movement gates
5. Increment scene.tick and scene.time
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from boardingsim.model.obstacle import Obstacle
    from boardingsim.model.particle import Particle
    from boardingsim.model.scene import BoardingScene

logger = logging.getLogger(__name__)

LOG_INTERVAL = 100  # ticks between progress debug logs


def may_move(scene: BoardingScene, particle: Particle) -> bool:
    """Whether every gate of the scene lets the particle move."""
    return all(gate.may_move(particle) for gate in scene.gates)


def find_contacts(scene: BoardingScene, particle: Particle) -> list[Obstacle]:
    """Walls and other particles currently overlapping the given particle."""
    in_contact: list[Obstacle] = [wall for wall in scene.walls if wall.does_overlap(particle)]
    in_contact.extend(
        other for other in scene.particles if other is not particle and other.does_overlap(particle)
    )
    return in_contact


def tick_scene(scene: BoardingScene) -> None:
    """Advance the scene by one time step.

    Every particle is prepared against the unchanged state of the scene before
    any of them moves, so the result does not depend on particle order.

    Args:
        scene: The scene to advance

    Side effects:
        - Mutates radius, velocity and position of movable particles
        - May advance particle goals
        - Updates gate state, scene.tick, scene.time and scene.all_seated_at
    """
    movable = [particle for particle in scene.particles if may_move(scene, particle)]

    # 1. Prepare, all against the same snapshot
    for particle in movable:
        particle.prepare_move(find_contacts(scene, particle), scene.time_step)

    # 2. Commit
    for particle in movable:
        particle.move(scene.time_step)

    # 3. Scheduling
    for gate in scene.gates:
        gate.update(scene)

    # 4. Clock
    scene.tick += 1
    scene.time += scene.time_step

    if scene.all_seated_at is None and scene.all_seated:
        scene.all_seated_at = scene.time
        logger.info("Every passenger is seated", extra={"sim_time": scene.time})

    if scene.tick % LOG_INTERVAL == 0:
        logger.debug(
            "Simulation tick %d: movable=%d, seated=%d/%d",
            scene.tick,
            len(movable),
            scene.seated_count,
            len(scene.particles),
            extra={"sim_time": scene.time},
        )


def should_stop(scene: BoardingScene) -> bool:
    """Whether the simulation should stop.

    True once the configured duration is exceeded, or once every passenger has
    been seated for at least scene.settle_time.
    """
    if scene.time > scene.duration:
        return True
    if scene.all_seated_at is not None:
        return scene.time - scene.all_seated_at >= scene.settle_time
    return False


def run_scene(
    scene: BoardingScene,
    on_tick: Callable[[BoardingScene], None] | None = None,
) -> int:
    """Tick the scene until should_stop() holds.

    Args:
        scene: The scene to simulate
        on_tick: Called with the scene once before the first tick and after every tick

    Returns:
        Number of ticks executed.
    """
    logger.info(
        "Starting simulation: particles=%d, walls=%d, dt=%s, duration=%ss",
        len(scene.particles),
        len(scene.walls),
        scene.time_step,
        scene.duration,
    )
    if on_tick is not None:
        on_tick(scene)

    ticks = 0
    while not should_stop(scene):
        tick_scene(scene)
        ticks += 1
        if on_tick is not None:
            on_tick(scene)

    logger.info(
        "Finished simulation: t=%.2fs, ticks=%d, seated=%d/%d",
        scene.time,
        ticks,
        scene.seated_count,
        len(scene.particles),
    )
    return ticks
