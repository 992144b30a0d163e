"""Configuration management."""

import math
from typing import Optional, Tuple

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Route generation settings, overridable through MESHROUTES_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="MESHROUTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Canvas
    canvas_width: int = Field(default=500, gt=0, description="Image width in pixels")
    canvas_height: int = Field(default=500, gt=0, description="Image height in pixels")

    # Sampling
    domain_scale: float = Field(
        default=0.9, gt=0, le=1, description="Sampling domain size relative to the canvas"
    )
    min_distance: float = Field(default=40, gt=0, description="Minimum point spacing (dMin)")
    max_distance: float = Field(default=80, gt=0, description="Maximum candidate distance (dMax)")
    tries: int = Field(default=20, ge=1, description="Candidates per active point (k)")
    radius_scale: float = Field(
        default=0.45, gt=0, description="Disk filter radius relative to canvas width"
    )

    # Routing
    start: Optional[Tuple[float, float]] = Field(
        default=None, description="Start coordinates, derived from the canvas when unset"
    )
    goal: Optional[Tuple[float, float]] = Field(
        default=None, description="Goal coordinates, derived from the canvas when unset"
    )
    iterations: Optional[int] = Field(
        default=None, ge=1, description="Route count bound, defaults to canvas_width / 50"
    )
    seed: Optional[str] = Field(default=None, description="PRNG seed, random when unset")

    # Output
    output_path: str = Field(default="image.png", description="PNG output path")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="plain", description="Logging format (plain or json)")

    @property
    def domain_width(self) -> float:
        return self.canvas_width * self.domain_scale

    @property
    def domain_height(self) -> float:
        return self.canvas_height * self.domain_scale

    @property
    def disk_center(self) -> Tuple[float, float]:
        """Centre of the sampling domain."""
        return self.domain_width / 2, self.domain_height / 2

    @property
    def disk_radius(self) -> float:
        return self.canvas_width * self.radius_scale

    @property
    def max_iterations(self) -> int:
        if self.iterations is not None:
            return self.iterations
        return math.ceil(self.canvas_width / 50)

    @model_validator(mode="after")
    def check_geometry(self) -> "Settings":
        if self.max_distance < self.min_distance:
            raise ValueError(
                f"max_distance ({self.max_distance}) must be >= min_distance ({self.min_distance})"
            )
        cx, cy = self.disk_center
        # Unset endpoints sit near the bottom and top of the largest disk
        # that fits the domain: (250, 445) and (225, 15) on a 500x500 canvas
        reach = min(self.disk_radius, self.domain_width / 2, self.domain_height / 2)
        if self.start is None:
            self.start = (cx + reach / 9, cy + reach * 44 / 45)
        if self.goal is None:
            self.goal = (cx, cy - reach * 14 / 15)
        for name, (x, y) in (("start", self.start), ("goal", self.goal)):
            if not (0 <= x < self.domain_width and 0 <= y < self.domain_height):
                raise ValueError(
                    f"{name} {(x, y)} lies outside the sampling domain "
                    f"{self.domain_width}x{self.domain_height}"
                )
            if math.hypot(x - cx, y - cy) > self.disk_radius:
                raise ValueError(
                    f"{name} {(x, y)} lies outside the disk of radius {self.disk_radius}"
                )
        if self.log_format not in ("plain", "json"):
            raise ValueError(f"log_format must be 'plain' or 'json', got {self.log_format!r}")
        return self
