"""Conversion between plane orientations and lower-hemisphere pole vectors.

Planes are described by their dip angle (0–90°) and dip direction
(0–360°, clockwise from north).  Poles live in an East-North-Down
frame and are canonicalised to the lower hemisphere (``z >= 0``).

Functions
---------
to_pole_vector
    (dip, dip direction) → unit pole vector.
to_orientation
    Unit pole vector → (dip, dip direction).
spherical_mean
    Normalised vector sum of a set of poles.
pole_vectors
    Vectorised conversion of a whole population.
normal_to_orientation
    Arbitrary plane normal → (dip, dip direction).
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike


@dataclass(frozen=True)
class OrientationSample:
    """A single planar orientation measurement.

    Args:
        dip_angle: Dip of the plane from horizontal (degrees, 0–90).
        dip_direction: Azimuth of steepest descent, clockwise from
            north (degrees, 0–360).
    """

    dip_angle: float
    dip_direction: float

    def pole(self) -> PoleVector:
        """Lower-hemisphere pole of this plane."""
        return to_pole_vector(self.dip_angle, self.dip_direction)


@dataclass(frozen=True)
class PoleVector:
    """Unit pole vector in an East-North-Down frame (``z >= 0``)."""

    x: float
    y: float
    z: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def dot(self, other: PoleVector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z


def _norm360(angle: float) -> float:
    return (angle % 360.0 + 360.0) % 360.0


def to_pole_vector(dip: float, dip_direction: float) -> PoleVector:
    """Convert a plane orientation to its lower-hemisphere pole.

    The pole trends opposite the dip direction and plunges at
    ``90 - dip``.

    Args:
        dip: Dip angle in degrees.
        dip_direction: Dip direction in degrees.

    Returns:
        Unit :class:`PoleVector` with ``z >= 0``.
    """
    trend = math.radians(_norm360(dip_direction + 180.0))
    plunge = math.radians(90.0 - dip)
    x = math.cos(plunge) * math.sin(trend)
    y = math.cos(plunge) * math.cos(trend)
    z = math.sin(plunge)
    if z < 0:
        return PoleVector(-x, -y, -z)
    return PoleVector(x, y, z)


def to_orientation(vector: PoleVector | ArrayLike) -> OrientationSample:
    """Convert a lower-hemisphere unit pole back to (dip, dip direction).

    Inverse of :func:`to_pole_vector`.  *vector* may be a
    :class:`PoleVector` or any length-3 sequence.
    """
    x, y, z = _components(vector)
    plunge = math.degrees(math.asin(max(-1.0, min(1.0, z))))
    trend = _norm360(math.degrees(math.atan2(x, y)))
    return OrientationSample(
        dip_angle=90.0 - plunge,
        dip_direction=_norm360(trend - 180.0),
    )


def spherical_mean(vectors: Sequence[PoleVector] | ArrayLike) -> OrientationSample:
    """Approximate mean orientation of a set of poles.

    Components are summed and the resultant normalised.  A zero-length
    resultant (fully dispersed or perfectly anti-parallel poles) falls
    back to a unit denominator instead of raising; the resulting
    orientation is well defined but carries no physical meaning.

    Args:
        vectors: :class:`PoleVector` objects or an ``(N, 3)`` array.

    Returns:
        The mean orientation.

    Raises:
        ValueError: If *vectors* is empty.
    """
    arr = _as_array(vectors)
    if arr.shape[0] == 0:
        raise ValueError("Cannot compute the mean of an empty set of poles.")

    sx, sy, sz = (float(v) for v in arr.sum(axis=0))
    length = math.sqrt(sx * sx + sy * sy + sz * sz) or 1.0
    x, y, z = sx / length, sy / length, sz / length
    if z < 0:
        x, y, z = -x, -y, -z
    return to_orientation((x, y, z))


def resultant_length(vectors: Sequence[PoleVector] | ArrayLike) -> float:
    """Mean resultant length ``|Σ v| / n`` in ``[0, 1]``.

    Values near 1 indicate tightly grouped poles; values near 0 a
    dispersed set whose spherical mean is unreliable.  ``nan`` for an
    empty set.
    """
    arr = _as_array(vectors)
    if arr.shape[0] == 0:
        return float("nan")
    return float(np.linalg.norm(arr.sum(axis=0)) / arr.shape[0])


def pole_vectors(samples: Sequence[Any]) -> np.ndarray:
    """Poles of a whole population as an ``(N, 3)`` array.

    Each sample is coerced with :func:`as_orientation`.
    """
    out = np.empty((len(samples), 3), dtype=float)
    for i, sample in enumerate(samples):
        dip, dip_direction = as_orientation(sample, position=i)
        p = to_pole_vector(dip, dip_direction)
        out[i] = (p.x, p.y, p.z)
    return out


def normal_to_orientation(nx: float, ny: float, nz: float) -> OrientationSample | None:
    """Orientation of the plane with normal ``(nx, ny, nz)``.

    The normal need not be unit length nor point downward.  Returns
    ``None`` for components that are not plain numbers, non-finite
    components or a zero-length normal.
    """
    try:
        n = np.array([nx, ny, nz], dtype=float)
    except (TypeError, ValueError):
        return None
    if n.shape != (3,) or not np.all(np.isfinite(n)):
        return None
    length = float(np.linalg.norm(n))
    if length == 0.0:
        return None
    n /= length
    if n[2] < 0:
        n = -n
    return to_orientation(n)


def as_orientation(sample: Any, position: int | None = None) -> tuple[float, float]:
    """Extract ``(dip, dip_direction)`` from a sample-like object.

    Accepts :class:`OrientationSample`, any object exposing
    ``dip_angle`` / ``dip_direction`` attributes, a mapping with those
    keys (or ``dipAngle`` / ``dipDirection``), or a ``(dip, dip_direction)``
    pair.  Other fields are ignored.

    Raises:
        TypeError: If no orientation can be read from *sample*.
    """
    if hasattr(sample, "dip_angle") and hasattr(sample, "dip_direction"):
        return float(sample.dip_angle), float(sample.dip_direction)
    if isinstance(sample, Mapping):
        for dip_key, dd_key in (("dip_angle", "dip_direction"),
                                ("dipAngle", "dipDirection")):
            if dip_key in sample and dd_key in sample:
                return float(sample[dip_key]), float(sample[dd_key])
    elif isinstance(sample, (tuple, list, np.ndarray)) and len(sample) == 2:
        return float(sample[0]), float(sample[1])

    where = f" at position {position}" if position is not None else ""
    raise TypeError(
        f"Cannot read dip angle and dip direction from {type(sample).__name__}{where}."
    )


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _components(vector: PoleVector | ArrayLike) -> tuple[float, float, float]:
    if isinstance(vector, PoleVector):
        return vector.x, vector.y, vector.z
    arr = np.asarray(vector, dtype=float)
    if arr.shape != (3,):
        raise ValueError("A pole vector must have exactly 3 components.")
    return float(arr[0]), float(arr[1]), float(arr[2])


def _as_array(vectors: Sequence[PoleVector] | ArrayLike) -> np.ndarray:
    if isinstance(vectors, np.ndarray):
        arr = vectors.astype(float, copy=False)
    else:
        seq = list(vectors)
        if not seq:
            return np.empty((0, 3), dtype=float)
        arr = np.array([_components(v) for v in seq], dtype=float)
    if arr.ndim != 2 or arr.shape[1] != 3:
        if arr.size == 0:
            return np.empty((0, 3), dtype=float)
        raise ValueError("Pole vectors must have shape (N, 3).")
    return arr
