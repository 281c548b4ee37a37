"""Movement gates: scheduling predicates deciding whether a passenger may move.

Gates are consulted before prepare_move() and updated once per tick after all
moves were committed. A held passenger is neither prepared nor moved, but it
still occupies space and blocks the others.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Protocol

from boardingsim.model.goal import Stage

if TYPE_CHECKING:
    from boardingsim.model.particle import Particle
    from boardingsim.model.scene import BoardingScene

logger = logging.getLogger(__name__)


class MovementGate(Protocol):
    """Decides whether a particle may move during the current tick."""

    def may_move(self, particle: Particle) -> bool: ...

    def update(self, scene: BoardingScene) -> None: ...


class BatchCallUp:
    """Calls passengers from the waiting room in batches.

    Batch 0 is called from the start. Batch n is called once every passenger
    of batch n - 1 has walked down into the jet bridge lane.
    """

    def __init__(self, calling_numbers: dict[Particle, int]) -> None:
        self._calling_numbers = dict(calling_numbers)
        self._batches: dict[int, list[Particle]] = {}
        for particle, number in self._calling_numbers.items():
            self._batches.setdefault(number, []).append(particle)
        self._last_batch = max(self._batches, default=0)
        self.called = 0

    def calling_number(self, particle: Particle) -> int:
        return self._calling_numbers.get(particle, 0)

    def may_move(self, particle: Particle) -> bool:
        return self.calling_number(particle) <= self.called

    def update(self, scene: BoardingScene) -> None:
        while self.called < self._last_batch and self._batch_left_waiting_room(self.called):
            self.called += 1
            logger.info("Calling batch %d", self.called, extra={"sim_time": scene.time})

    def _batch_left_waiting_room(self, number: int) -> bool:
        return all(
            particle.goal.stage.at_least(Stage.REACH_DOOR)
            for particle in self._batches.get(number, [])
        )


class LuggageStowing:
    """Holds passengers still while they stow their luggage.

    When a passenger first heads for its seat (the FINAL stage), a coin with
    the given probability decides whether it stops for a random time drawn
    uniformly from [min_time, max_time].
    """

    def __init__(
        self,
        probability: float,
        min_time: float,
        max_time: float,
        rng: random.Random | None = None,
    ) -> None:
        if not 0.0 <= probability <= 1.0:
            msg = "Luggage probability must be within [0, 1]"
            raise ValueError(msg)
        if min_time < 0 or max_time < min_time:
            msg = "Luggage times must satisfy 0 <= min_time <= max_time"
            raise ValueError(msg)
        self.probability = probability
        self.min_time = min_time
        self.max_time = max_time
        self._rng = rng if rng is not None else random.Random()
        self._remaining: dict[Particle, float] = {}
        self._decided: set[Particle] = set()

    def remaining(self, particle: Particle) -> float:
        """Time this particle still has to spend stowing luggage."""
        return max(0.0, self._remaining.get(particle, 0.0))

    def may_move(self, particle: Particle) -> bool:
        return self.remaining(particle) <= 0.0

    def update(self, scene: BoardingScene) -> None:
        for particle, left in list(self._remaining.items()):
            if left > 0:
                self._remaining[particle] = left - scene.time_step

        for particle in scene.particles:
            if particle in self._decided or particle.goal.stage != Stage.FINAL:
                continue
            self._decided.add(particle)
            if self._rng.random() < self.probability:
                stow_time = self._rng.uniform(self.min_time, self.max_time)
                self._remaining[particle] = stow_time
                logger.debug(
                    "Particle %d stows luggage for %.1fs",
                    particle.id,
                    stow_time,
                    extra={"sim_time": scene.time},
                )
