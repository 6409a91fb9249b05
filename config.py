"""Configuration constants for the n-body simulation."""
from dataclasses import dataclass
from typing import Tuple

import numpy as np

# Simulation parameters
G = 1e-5  # Gravitational constant, tuned for a visually stable demo
SOFTENING2 = 1e-4  # Pairs closer than sqrt(SOFTENING2) exert no force
N_BODIES = 500
DT = 0.01  # Fixed per-frame timestep
PRECISION = 32  # Floating point precision of body state: 32 or 64 bits

# Initialization parameters
POSITION_RANGE = (-0.8, 0.8)  # Uniform per axis, normalized world units
LOG_MASS_RANGE = (0.0, 2.0)  # mass = 10**u, u uniform in this range
RADIUS_SCALE = 200.0  # radius = mass**(1/3) / RADIUS_SCALE

# Visualization parameters
WINDOW_SIZE = (800, 600)
BACKGROUND_COLOR = (0.2, 0.3, 0.3)
BODY_COLOR = (0.8, 0.7, 0.7)
MAX_FPS = 60


@dataclass(frozen=True)
class SimulationConfig:
    """Physical and seeding parameters handed to a World.

    G and softening2 are tuned together with the position and mass ranges;
    changing the body count or spatial extent without retuning them can
    destabilize the simulation.
    """
    g: float = G
    softening2: float = SOFTENING2
    n_bodies: int = N_BODIES
    position_range: Tuple[float, float] = POSITION_RANGE
    log_mass_range: Tuple[float, float] = LOG_MASS_RANGE
    radius_scale: float = RADIUS_SCALE
    dt: float = DT
    precision: int = PRECISION

    def __post_init__(self):
        if self.g <= 0:
            raise ValueError(f"Gravitational constant must be positive, got {self.g}")
        if self.softening2 < 0:
            raise ValueError(f"Softening threshold must be non-negative, got {self.softening2}")
        if self.n_bodies < 0:
            raise ValueError(f"Body count must be non-negative, got {self.n_bodies}")
        for name in ("position_range", "log_mass_range"):
            low, high = getattr(self, name)
            if not low < high:
                raise ValueError(f"{name} must satisfy low < high, got ({low}, {high})")
        if self.radius_scale <= 0:
            raise ValueError(f"Radius scale must be positive, got {self.radius_scale}")
        if self.dt <= 0:
            raise ValueError(f"Timestep must be positive, got {self.dt}")
        if self.precision not in (32, 64):
            raise ValueError(f"Precision must be 32 or 64, got {self.precision}")

    @property
    def dtype(self):
        return np.float32 if self.precision == 32 else np.float64
