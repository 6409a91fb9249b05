import logging
from typing import List, Optional

import numpy as np

from body import Body, radius_for_mass
from config import SimulationConfig

logger = logging.getLogger(__name__)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Random generator for initial conditions; pass a seed for repeatable runs."""
    return np.random.default_rng(seed)


def generate_bodies(rng: np.random.Generator, config: SimulationConfig) -> List[Body]:
    """Generate the initial bodies, at rest and uniformly scattered.

    Masses are log-uniform, so small bodies far outnumber large ones, and
    radii follow the cube root of mass.
    """
    n = config.n_bodies
    low, high = config.position_range
    positions = rng.uniform(low, high, size=(n, 2)).astype(config.dtype)

    mass_low, mass_high = config.log_mass_range
    masses = 10.0 ** rng.uniform(mass_low, mass_high, size=n)
    radii = radius_for_mass(masses, config.radius_scale)

    bodies = [Body(positions[i], (0.0, 0.0), masses[i], radii[i], dtype=config.dtype)
              for i in range(n)]
    if n:
        logger.debug(f"Generated {n} bodies, mass range {masses.min():.3g} to {masses.max():.3g}")
    return bodies
