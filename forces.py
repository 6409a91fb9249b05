"""Exact pairwise gravitational accelerations.

Both kernels sum the inverse-square pull of every other body and skip any
pair whose squared separation falls below the softening threshold. The self
pair always has zero separation, so it is skipped by the same test.
"""
from typing import Optional, Sequence

import numpy as np

from body import Body


def accelerations(positions: np.ndarray, masses: np.ndarray, g: float, softening2: float,
                  start: int = 0, end: Optional[int] = None) -> np.ndarray:
    """Accelerations of bodies ``start:end`` due to all bodies.

    Args:
        positions: ``(n, 2)`` array of positions.
        masses: ``(n,)`` array of masses.
        g: Gravitational constant.
        softening2: Squared distance below which a pair is ignored.
        start, end: Row range to evaluate, so the work can be split into chunks.

    Returns:
        ``(end - start, 2)`` float64 array.
    """
    positions = np.asarray(positions, dtype=np.float64)
    masses = np.asarray(masses, dtype=np.float64)
    targets = positions[start:end]

    # to_other[i, j] points from target i to body j
    to_other = positions[np.newaxis, :, :] - targets[:, np.newaxis, :]
    distance2 = np.einsum('ijk,ijk->ij', to_other, to_other)
    mask = (distance2 >= softening2) & (distance2 > 0.0)

    # g * m / r^2 along the unit vector is g * m / r^3 along the raw offset
    scale = np.zeros_like(distance2)
    np.divide(g * masses[np.newaxis, :], distance2 * np.sqrt(distance2), out=scale, where=mask)
    return np.einsum('ij,ijk->ik', scale, to_other)


def pairwise_accelerations(bodies: Sequence[Body], g: float, softening2: float) -> np.ndarray:
    """Reference nested-loop version of :func:`accelerations`."""
    result = np.zeros((len(bodies), 2), dtype=np.float64)
    for i, current in enumerate(bodies):
        acceleration = np.zeros(2, dtype=np.float64)
        for other in bodies:
            to_other = other.position.astype(np.float64) - current.position
            distance2 = float(np.dot(to_other, to_other))
            if distance2 < softening2 or distance2 == 0.0:
                continue
            acceleration += (g * other.mass / distance2) * (to_other / np.sqrt(distance2))
        result[i] = acceleration
    return result
