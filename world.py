import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

import numpy as np

from body import Body
from config import SimulationConfig
from forces import accelerations
from seeding import generate_bodies

logger = logging.getLogger(__name__)


class World:
    """Owns the bodies and advances them with a semi-implicit Euler step.

    The renderer may read ``bodies`` between ticks but must not mutate them.
    ``tick`` is not safe to call concurrently from several threads.
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 bodies: Optional[Iterable[Body]] = None,
                 workers: Optional[int] = None):
        self.config = config or SimulationConfig()
        self.bodies: List[Body] = []
        self.frame = 0
        self._populated = False

        # Thread pool for the acceleration pass, only worth it for many bodies
        if workers is not None and workers < 1:
            raise ValueError(f"Worker count must be at least 1, got {workers}")
        self.workers = workers or 1
        self.executor = ThreadPoolExecutor(max_workers=self.workers) if self.workers > 1 else None
        if self.executor is not None:
            logger.debug(f"Using {self.workers} worker threads for force evaluation")

        if bodies is not None:
            self.populate(bodies)

    @classmethod
    def seeded(cls, config: Optional[SimulationConfig] = None, rng: Optional[np.random.Generator] = None,
               workers: Optional[int] = None) -> "World":
        """Create a world filled with randomly generated bodies."""
        config = config or SimulationConfig()
        rng = rng if rng is not None else np.random.default_rng()
        return cls(config, generate_bodies(rng, config), workers=workers)

    def populate(self, bodies: Iterable[Body]) -> None:
        """Fill the world once; the body set is fixed afterwards."""
        if self._populated:
            raise RuntimeError("World has already been populated")
        self.bodies.extend(bodies)
        self._populated = True
        logger.info(f"World populated with {len(self.bodies)} bodies")

    def _compute_accelerations_chunk(self, positions, masses, chunk_range):
        """Compute accelerations for a chunk of bodies."""
        start_idx, end_idx = chunk_range
        return accelerations(positions, masses, self.config.g, self.config.softening2,
                             start_idx, end_idx)

    def _compute_accelerations(self) -> np.ndarray:
        positions = self.get_body_positions()
        masses = self.get_body_masses()
        n_bodies = len(self.bodies)

        if self.executor is None or n_bodies < 2 * self.workers:
            return self._compute_accelerations_chunk(positions, masses, (0, n_bodies))

        chunk_size = max(1, -(-n_bodies // self.workers))
        chunks = [(start, min(start + chunk_size, n_bodies))
                  for start in range(0, n_bodies, chunk_size)]
        futures = [self.executor.submit(self._compute_accelerations_chunk, positions, masses, chunk)
                   for chunk in chunks]
        # Joining every future is the barrier before any state changes
        return np.concatenate([future.result() for future in futures])

    def tick(self, dt: Optional[float] = None) -> None:
        """Advance every body by one step, in place."""
        if dt is None:
            dt = self.config.dt
        if not self.bodies:
            self.frame += 1
            return

        # Pass 1: all velocities, from forces at the step's starting positions
        acc = self._compute_accelerations()
        for body, acceleration in zip(self.bodies, acc):
            body.kick(acceleration, dt)

        # Pass 2: all positions, using the freshly updated velocities.
        # Must stay a separate loop from pass 1.
        for body in self.bodies:
            body.drift(dt)

        self.frame += 1

    def get_body_positions(self) -> np.ndarray:
        """Return positions of all bodies for rendering."""
        if not self.bodies:
            return np.zeros((0, 2), dtype=self.config.dtype)
        return np.array([body.position for body in self.bodies])

    def get_body_velocities(self) -> np.ndarray:
        if not self.bodies:
            return np.zeros((0, 2), dtype=self.config.dtype)
        return np.array([body.velocity for body in self.bodies])

    def get_body_radii(self) -> np.ndarray:
        """Return radii of all bodies for rendering."""
        return np.array([body.radius for body in self.bodies], dtype=np.float64)

    def get_body_masses(self) -> np.ndarray:
        return np.array([body.mass for body in self.bodies], dtype=np.float64)

    def close(self) -> None:
        if self.executor is not None:
            self.executor.shutdown(wait=True)
            self.executor = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __len__(self) -> int:
        return len(self.bodies)
