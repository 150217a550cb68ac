"""Great-circle angular distance between pole vectors."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike

from fracset.orientation.transform import PoleVector, _components


def angular_distance(u: PoleVector | ArrayLike, v: PoleVector | ArrayLike) -> float:
    """Angle between two unit vectors, in radians.

    ``arccos`` of the dot product, clamped to ``[-1, 1]`` so rounding
    never produces ``nan``.  The result lies in ``[0, π]``; poles of
    near-vertical planes on opposite sides of the net can be more than
    ``π/2`` apart.  Identical vectors are exactly zero apart.
    """
    ux, uy, uz = _components(u)
    vx, vy, vz = _components(v)
    if (ux, uy, uz) == (vx, vy, vz):
        return 0.0
    dot = ux * vx + uy * vy + uz * vz
    return math.acos(max(-1.0, min(1.0, dot)))


def pairwise_angular_distances(vectors: ArrayLike) -> np.ndarray:
    """Full ``(N, N)`` angular distance matrix (radians).

    Dot products are summed in the same order as :func:`angular_distance`,
    so the matrix is exactly symmetric and zero wherever two vectors
    coincide.  Row *i* is the neighbourhood query of
    sample *i* in both clustering engines.
    """
    arr = np.asarray(vectors, dtype=float).reshape(-1, 3)
    x, y, z = arr[:, 0], arr[:, 1], arr[:, 2]
    # Elementwise, not a matrix product: every entry sums x, y, z in order.
    dots = x[:, None] * x[None, :] + y[:, None] * y[None, :] + z[:, None] * z[None, :]
    dist = np.arccos(np.clip(dots, -1.0, 1.0))
    same = (arr[:, None, :] == arr[None, :, :]).all(axis=-1)
    dist[same] = 0.0
    return dist
