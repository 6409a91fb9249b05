"""
Conserved quantities and health checks for a World.

None of these functions mutate state and the integrator never calls them; the
driver samples them to log how well momentum and energy hold up and whether
any body has gone non-finite. Potential energy skips pairs inside the
softening threshold, matching the force law.
"""
import itertools
from typing import Dict, Sequence

import numpy as np

from body import Body


def total_momentum(bodies: Sequence[Body]) -> np.ndarray:
    momentum = np.zeros(2, dtype=np.float64)
    for body in bodies:
        momentum += body.mass * body.velocity.astype(np.float64)
    return momentum


def center_of_mass(bodies: Sequence[Body]) -> np.ndarray:
    total_mass = sum(body.mass for body in bodies)
    if total_mass == 0:
        return np.zeros(2, dtype=np.float64)
    weighted = np.zeros(2, dtype=np.float64)
    for body in bodies:
        weighted += body.mass * body.position.astype(np.float64)
    return weighted / total_mass


def kinetic_energy(bodies: Sequence[Body]) -> float:
    s = 0.0
    for body in bodies:
        v = body.velocity.astype(np.float64)
        s += 0.5 * body.mass * float(np.dot(v, v))
    return s


def potential_energy(bodies: Sequence[Body], g: float, softening2: float) -> float:
    s = 0.0
    for a, b in itertools.combinations(bodies, 2):
        d = b.position.astype(np.float64) - a.position
        distance2 = float(np.dot(d, d))
        if distance2 < softening2 or distance2 == 0.0:
            continue
        s -= g * a.mass * b.mass / np.sqrt(distance2)
    return s


def nonfinite_count(bodies: Sequence[Body]) -> int:
    """Number of bodies whose position or velocity holds NaN or Inf."""
    return sum(1 for body in bodies
               if not (np.all(np.isfinite(body.position)) and np.all(np.isfinite(body.velocity))))


def summarize(world) -> Dict[str, float]:
    bodies = world.bodies
    kinetic = kinetic_energy(bodies)
    potential = potential_energy(bodies, world.config.g, world.config.softening2)
    momentum = total_momentum(bodies)
    return {
        "frame": world.frame,
        "kinetic": kinetic,
        "potential": potential,
        "energy": kinetic + potential,
        "momentum": float(np.linalg.norm(momentum)),
        "nonfinite": nonfinite_count(bodies),
    }
