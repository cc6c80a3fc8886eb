# config.py
"""Configuration for the path tracer: environment defaults and render settings."""
import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

# Logging settings
LOG_LEVEL = os.getenv("PATHTRACER_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("PATHTRACER_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

# Render defaults
DEFAULT_WORKERS = int(os.getenv("PATHTRACER_WORKERS", "1"))
_seed = os.getenv("PATHTRACER_SEED")
DEFAULT_SEED: Optional[int] = int(_seed) if _seed else None

class ConfigError(ValueError):
    """Raised for invalid render or camera configuration, before rendering starts."""

@dataclass
class RenderSettings:
    """
    Sampling parameters of a render.

    Attributes:
        samples_per_pixel: independent paths averaged per pixel
        max_depth: maximum number of path vertices
        russian_roulette: enable probabilistic path termination
        rr_min_depth: roulette is only played after this depth
        rr_floor: lower bound of the survival probability
        stratified: jitter samples on a sqrt(spp) x sqrt(spp) grid
        seed: root seed; None draws fresh entropy
        workers: number of processes rendering rows
    """
    samples_per_pixel: int = 10
    max_depth: int = 10
    russian_roulette: bool = False
    rr_min_depth: int = 3
    rr_floor: float = 0.1
    stratified: bool = False
    seed: Optional[int] = DEFAULT_SEED
    workers: int = DEFAULT_WORKERS

    def validate(self) -> "RenderSettings":
        if not isinstance(self.samples_per_pixel, int) or self.samples_per_pixel <= 0:
            raise ConfigError(f"samples_per_pixel must be a positive integer, got {self.samples_per_pixel!r}")
        if not isinstance(self.max_depth, int) or self.max_depth < 0:
            raise ConfigError(f"max_depth must be a non-negative integer, got {self.max_depth!r}")
        if self.rr_min_depth < 0:
            raise ConfigError(f"rr_min_depth must be non-negative, got {self.rr_min_depth!r}")
        if not 0.0 < self.rr_floor <= 1.0:
            raise ConfigError(f"rr_floor must lie in (0, 1], got {self.rr_floor!r}")
        if not isinstance(self.workers, int) or self.workers <= 0:
            raise ConfigError(f"workers must be a positive integer, got {self.workers!r}")
        if self.seed is not None and (not isinstance(self.seed, int) or self.seed < 0):
            raise ConfigError(f"seed must be a non-negative integer, got {self.seed!r}")
        return self

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "RenderSettings":
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigError(f"unknown render settings: {', '.join(sorted(unknown))}")
        return cls(**values).validate()

    def replace(self, **overrides) -> "RenderSettings":
        """Copy with the non-None overrides applied, validated."""
        values = asdict(self)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RenderSettings.from_mapping(values)

def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a JSON configuration file.

    Top-level keys are render settings; an optional ``camera`` object holds
    Camera keyword arguments.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{path}: invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object at the top level")
    return data

def load_settings(path: Union[str, Path]) -> RenderSettings:
    """Render settings from a JSON file; the ``camera`` section is ignored here."""
    data = dict(load_config(path))
    data.pop("camera", None)
    return RenderSettings.from_mapping(data)

__all__ = [
    "LOG_LEVEL",
    "LOG_FORMAT",
    "DEFAULT_WORKERS",
    "DEFAULT_SEED",
    "ConfigError",
    "RenderSettings",
    "load_config",
    "load_settings",
]
