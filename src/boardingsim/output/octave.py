"""Octave and JSON summary writers for post-run analysis."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from boardingsim.projection.projector import SceneState

logger = logging.getLogger(__name__)


def format_octave(last_state: SceneState) -> str:
    """Octave script defining the run's duration and time step."""
    return f"duration = {last_state.time};\ndt = {last_state.time_step};\n"


def write_octave(path: str | Path, last_state: SceneState) -> None:
    """Write the Octave script for the final state of a run."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_octave(last_state), encoding="utf-8")
    logger.info("Saved Octave output to %s", path)


def build_summary(
    last_state: SceneState,
    all_seated_at: float | None,
    strategy: str,
) -> dict[str, Any]:
    """Summary statistics of a finished run."""
    return {
        "strategy": strategy,
        "passengers": len(last_state.particles),
        "seated": last_state.seated_count,
        "boarding_time": all_seated_at,
        "simulated_time": last_state.time,
        "time_step": last_state.time_step,
        "ticks": last_state.tick,
    }


def write_summary(path: str | Path, summary: dict[str, Any]) -> None:
    """Write a run summary as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2), encoding="utf-8")
    logger.info("Saved summary to %s", path)
