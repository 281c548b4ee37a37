"""Command-line interface for boardingsim."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING, Any

import uvicorn
from pydantic import ValidationError

from boardingsim.config import BoardingConfig
from boardingsim.engine.boarding import BoardingStrategy
from boardingsim.engine.scenario import create_scene
from boardingsim.engine.simulation import run_scene
from boardingsim.logging_config import configure_logging
from boardingsim.output import OvitoWriter, build_summary, write_octave, write_summary
from boardingsim.projection.projector import project

if TYPE_CHECKING:
    from boardingsim.model.scene import BoardingScene

logger = logging.getLogger(__name__)

# CLI option -> BoardingConfig field, for options left unset unless given
_RUN_OVERRIDES = {
    "strategy": "strategy",
    "seed": "seed",
    "rows": "rows",
    "columns": "columns",
    "batch_size": "batch_size",
    "duration": "duration",
    "time_step": "time_step",
    "luggage_probability": "luggage_probability",
    "output_every": "output_every",
    "ovito": "ovito_path",
    "octave": "octave_path",
    "summary": "summary_path",
}


def run_simulation(config: BoardingConfig) -> dict[str, Any]:
    """Run one boarding simulation and write its outputs.

    Ovito frames are written every ``config.output_every`` ticks, followed by
    the Octave script and the JSON summary of the final state.

    Args:
        config: Simulation configuration

    Returns:
        The run summary.
    """
    scene = create_scene(config)

    with OvitoWriter(config.ovito_path, config.min_radius, config.max_radius) as writer:

        def save_frame(current: BoardingScene) -> None:
            if current.tick % config.output_every == 0:
                writer.write(project(current))

        run_scene(scene, on_tick=save_frame)

    last_state = project(scene)
    write_octave(config.octave_path, last_state)
    summary = build_summary(last_state, scene.all_seated_at, config.strategy.value)
    write_summary(config.summary_path, summary)
    return summary


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boardingsim",
        description="boardingsim - Contractile particle simulation of airplane boarding",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Run a simulation and write its outputs")
    run.add_argument(
        "--strategy",
        choices=[s.value for s in BoardingStrategy],
        help="Boarding strategy (default: BOARDING_STRATEGY or back_to_front)",
    )
    run.add_argument("--seed", type=int, help="Random seed")
    run.add_argument("--rows", type=int, help="Seat rows")
    run.add_argument("--columns", type=int, help="Seats per side of the aisle")
    run.add_argument("--batch-size", type=int, help="Passengers called at once")
    run.add_argument("--duration", type=float, help="Max. simulated time (s)")
    run.add_argument("--time-step", type=float, help="Time step (s)")
    run.add_argument(
        "--luggage-probability",
        type=float,
        help="Probability that a passenger stops to stow luggage",
    )
    run.add_argument("--output-every", type=int, help="Ticks between saved frames")
    run.add_argument("--ovito", help="Ovito XYZ output path")
    run.add_argument("--octave", help="Octave output path")
    run.add_argument("--summary", help="JSON summary output path")

    serve = subparsers.add_parser("serve", help="Start the HTTP server")
    serve.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)",
    )
    serve.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    return parser


def _run_command(parsed: argparse.Namespace) -> int:
    overrides = {
        field: getattr(parsed, option)
        for option, field in _RUN_OVERRIDES.items()
        if getattr(parsed, option) is not None
    }
    try:
        config = BoardingConfig(**overrides)
    except ValidationError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    summary = run_simulation(config)
    boarding_time = summary["boarding_time"]
    if boarding_time is None:
        print(
            f"{summary['seated']}/{summary['passengers']} passengers seated "
            f"after {summary['simulated_time']:.2f}s"
        )
    else:
        print(f"All {summary['passengers']} passengers seated in {boarding_time:.2f}s")
    return 0


def _serve_command(parsed: argparse.Namespace) -> int:
    print(f"Starting boardingsim server at http://{parsed.host}:{parsed.port}")
    print("Press Ctrl+C to stop")

    uvicorn.run(
        "boardingsim.server.app:app",
        host=parsed.host,
        port=parsed.port,
        reload=parsed.reload,
    )
    return 0


def main(args: list[str] | None = None) -> int:
    """Run the boardingsim command line.

    Args:
        args: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success).
    """
    parsed = _build_parser().parse_args(args)
    configure_logging()

    if parsed.command == "run":
        return _run_command(parsed)
    return _serve_command(parsed)


if __name__ == "__main__":
    sys.exit(main())
