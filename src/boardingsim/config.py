"""Configuration loading for boarding simulations.

This module provides Pydantic-based configuration loading from environment
variables (prefixed with BOARDING_) and .env files. Defaults describe a
single-aisle airplane with 28 rows of 3 seats per side.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from boardingsim.engine.boarding import BoardingStrategy, ParticleParameters
from boardingsim.model.airplane import AirplaneLayout

logger = logging.getLogger(__name__)


class BoardingConfig(BaseSettings):
    """Configuration for a boarding simulation.

    Environment Variables (all prefixed with BOARDING_):
        ROWS, COLUMNS: Seat rows and seats per side of the aisle
        CENTRAL_HALL_WIDTH, FRONT_HALL_LENGTH: Aisle width and front hall depth (m)
        SEAT_WIDTH, SEAT_SEPARATION, DOOR_LENGTH: Seat and door dimensions (m)
        JET_BRIDGE_LENGTH, JET_BRIDGE_WIDTH: Jet bridge dimensions (m)
        MIN_RADIUS, MAX_RADIUS, TAO, BETA, MAX_SPEED: Particle model constants
        TIME_STEP, DURATION, SETTLE_TIME: Simulation clock (s)
        STRATEGY, BATCH_SIZE: Boarding order and call-up batch size
        LUGGAGE_PROBABILITY, LUGGAGE_MIN_TIME, LUGGAGE_MAX_TIME: Luggage stowing
        SEED: Random seed (unset for a random run)

    Example:
        >>> config = BoardingConfig()  # Loads from environment
        >>> config = BoardingConfig(rows=10, strategy="random")
    """

    model_config = SettingsConfigDict(
        env_prefix="BOARDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Airplane
    rows: int = Field(default=28, ge=1, le=100, description="Seat rows")
    columns: int = Field(default=3, ge=1, le=6, description="Seats per side of the aisle")
    central_hall_width: float = Field(default=0.85, gt=0, description="Aisle width (m)")
    front_hall_length: float = Field(default=2.0, gt=0, description="Front hall depth (m)")
    seat_width: float = Field(default=0.5, gt=0, description="Seat width (m)")
    seat_separation: float = Field(default=0.7, gt=0, description="Row pitch (m)")
    door_length: float = Field(default=1.0, gt=0, description="Door opening (m)")

    # Jet bridge
    jet_bridge_length: float = Field(default=20.0, gt=0, description="Jet bridge length (m)")
    jet_bridge_width: float = Field(default=1.0, gt=0, description="Jet bridge width (m)")

    # Particles
    min_radius: float = Field(default=0.25, gt=0, description="Min. particle radius (m)")
    max_radius: float = Field(default=0.4, gt=0, description="Max. particle radius (m)")
    tao: float = Field(default=0.5, gt=0, description="Radius relaxation time (s)")
    beta: float = Field(default=0.9, ge=0, description="Speed-radius coupling exponent")
    max_speed: float = Field(default=1.0, gt=0, description="Max. walking speed (m/s)")

    # Simulation
    time_step: float = Field(default=0.05, gt=0, description="Time step (s)")
    duration: float = Field(default=600.0, gt=0, description="Max. simulated time (s)")
    settle_time: float = Field(
        default=1.0,
        ge=0,
        description="Time to keep simulating after every passenger is seated (s)",
    )
    seed: int | None = Field(default=None, description="Random seed")

    # Boarding
    strategy: BoardingStrategy = Field(
        default=BoardingStrategy.BACK_TO_FRONT,
        description="Order in which seats are called",
    )
    batch_size: int = Field(default=6, ge=1, description="Passengers called at once")
    luggage_probability: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Probability that a passenger stops to stow luggage",
    )
    luggage_min_time: float = Field(default=30.0, ge=0, description="Min. stowing time (s)")
    luggage_max_time: float = Field(default=45.0, ge=0, description="Max. stowing time (s)")

    # Output
    ovito_path: str = Field(default="output/boarding.xyz", description="Ovito XYZ output")
    octave_path: str = Field(default="output/boarding.m", description="Octave output")
    summary_path: str = Field(default="output/summary.json", description="JSON summary")
    output_every: int = Field(default=10, ge=1, description="Ticks between saved frames")

    @field_validator("strategy", mode="before")
    @classmethod
    def normalize_strategy(cls, v: Any) -> BoardingStrategy:
        """Normalize strategy string to enum."""
        if isinstance(v, str):
            return BoardingStrategy(v.lower().replace("-", "_"))
        return v

    @model_validator(mode="after")
    def check_ranges(self) -> BoardingConfig:
        """Validate constraints spanning several fields."""
        if self.min_radius > self.max_radius:
            msg = "min_radius must not be greater than max_radius"
            raise ValueError(msg)
        if self.luggage_min_time > self.luggage_max_time:
            msg = "luggage_min_time must not be greater than luggage_max_time"
            raise ValueError(msg)
        margin = self.goal_margin
        if 2 * margin >= self.door_length or 2 * margin >= self.jet_bridge_width:
            msg = "door_length and jet_bridge_width must exceed twice min_radius"
            raise ValueError(msg)
        if 2 * margin >= self.central_hall_width:
            msg = "central_hall_width must exceed twice min_radius"
            raise ValueError(msg)
        return self

    @property
    def goal_margin(self) -> float:
        """Arrival tolerance of the passengers' waypoints."""
        return self.min_radius

    def build_layout(self) -> AirplaneLayout:
        return AirplaneLayout(
            rows=self.rows,
            seats_per_side=self.columns,
            central_hall_width=self.central_hall_width,
            front_hall_length=self.front_hall_length,
            seat_width=self.seat_width,
            seat_separation=self.seat_separation,
            door_length=self.door_length,
        )

    def particle_parameters(self) -> ParticleParameters:
        return ParticleParameters(
            min_radius=self.min_radius,
            max_radius=self.max_radius,
            tao=self.tao,
            beta=self.beta,
            max_speed=self.max_speed,
        )

    def __repr__(self) -> str:
        return (
            f"BoardingConfig("
            f"rows={self.rows}, columns={self.columns}, "
            f"strategy={self.strategy.value}, batch={self.batch_size}, "
            f"radius=[{self.min_radius}, {self.max_radius}], "
            f"tao={self.tao}, beta={self.beta}, max_speed={self.max_speed}, "
            f"dt={self.time_step}s, duration={self.duration}s, seed={self.seed}"
            f")"
        )


@lru_cache
def get_config() -> BoardingConfig:
    """Get cached boarding configuration singleton.

    Loads configuration once and caches it for subsequent calls.
    To reload configuration, call get_config.cache_clear() first.

    Returns:
        BoardingConfig instance with settings from environment.
    """
    config = BoardingConfig()
    logger.info("Loaded boarding configuration: %s", config)
    return config
