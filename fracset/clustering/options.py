"""Configuration for the clustering engines and pipeline.

Classes
-------
DBSCANOptions
    Neighbourhood radius, density threshold and labelling for DBSCAN.
OPTICSOptions
    Ordering and extraction parameters for OPTICS.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Integral
from typing import Sequence

DEFAULT_PALETTE: tuple[str, ...] = (
    "#e41a1c",
    "#377eb8",
    "#4daf4a",
    "#984ea3",
    "#ff7f00",
    "#a65628",
    "#f781bf",
    "#999999",
)


@dataclass(frozen=True)
class DBSCANOptions:
    """Parameters for :func:`~fracset.clustering.pipeline.cluster_by_density`.

    Args:
        eps_deg: Neighbourhood radius on the sphere (degrees).
        min_pts: Minimum neighbourhood size (self included) for a
            core point.
        palette: Colours assigned cyclically by cluster rank.
        name_prefix: Prefix of generated cluster names.
    """

    eps_deg: float = 10.0
    min_pts: int = 4
    palette: Sequence[str] = field(default=DEFAULT_PALETTE)
    name_prefix: str = "Cluster"

    def __post_init__(self) -> None:
        if not (math.isfinite(self.eps_deg) and self.eps_deg > 0):
            raise ValueError(f"eps_deg must be a positive finite angle, got {self.eps_deg!r}")
        _check_count("min_pts", self.min_pts)
        object.__setattr__(self, "palette", _check_palette(self.palette))

    @property
    def eps_rad(self) -> float:
        return math.radians(self.eps_deg)


@dataclass(frozen=True)
class OPTICSOptions:
    """Parameters for :func:`~fracset.clustering.pipeline.cluster_by_ordering`.

    Args:
        min_pts: Neighbourhood size defining the core distance.
        eps_max_deg: Cap on the neighbourhood search radius (degrees).
            ``None`` searches the whole population.
        quantile: Quantile of the finite reachabilities used as the
            extraction threshold.
        min_cluster_size: Smallest segment kept as a cluster.
        palette: Colours assigned cyclically by cluster rank.
        name_prefix: Prefix of generated cluster names.
    """

    min_pts: int = 10
    eps_max_deg: float | None = None
    quantile: float = 0.75
    min_cluster_size: int = 10
    palette: Sequence[str] = field(default=DEFAULT_PALETTE)
    name_prefix: str = "Cluster"

    def __post_init__(self) -> None:
        _check_count("min_pts", self.min_pts)
        _check_count("min_cluster_size", self.min_cluster_size)
        if self.eps_max_deg is not None and not self.eps_max_deg > 0:
            raise ValueError(f"eps_max_deg must be positive or None, got {self.eps_max_deg!r}")
        if not 0.0 <= self.quantile <= 1.0:
            raise ValueError(f"quantile must lie in [0, 1], got {self.quantile!r}")
        object.__setattr__(self, "palette", _check_palette(self.palette))

    @property
    def eps_max_rad(self) -> float:
        if self.eps_max_deg is None:
            return math.inf
        return math.radians(self.eps_max_deg)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _check_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")


def _check_palette(palette: Sequence[str]) -> tuple[str, ...]:
    if isinstance(palette, str):
        raise TypeError("palette must be a sequence of colour strings, not a single string")
    colours = tuple(palette)
    if not colours:
        raise ValueError("palette must contain at least one colour")
    if not all(isinstance(c, str) for c in colours):
        raise TypeError("palette entries must be strings")
    return colours
