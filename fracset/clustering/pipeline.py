"""Ready-to-use clustering of orientation samples into fracture sets.

Both entry points return :class:`ClusteringResult`: cluster groups
carrying their members, spherical-mean centroid, colour and name, plus
the samples left unassigned.  Members and outliers are the caller's
own objects, returned unmodified.

Example::

    from fracset.clustering import cluster_by_density, cluster_by_ordering

    result = cluster_by_density(samples, eps_deg=12, min_pts=3)
    for group in result.clusters:
        print(group.name, len(group), group.centroid)

    result = cluster_by_ordering(samples, min_pts=5, min_cluster_size=8)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np

from fracset.clustering.dbscan import dbscan
from fracset.clustering.groups import ClusterGroup
from fracset.clustering.optics import extract_clusters, optics_order
from fracset.clustering.options import DBSCANOptions, OPTICSOptions
from fracset.orientation.transform import spherical_mean


@dataclass
class ClusteringResult:
    """Output of the clustering pipeline.

    Attributes:
        clusters: Cluster groups ranked in discovery order.
        outliers: Unassigned samples, in input order.
    """

    clusters: list[ClusterGroup] = field(default_factory=list)
    outliers: list[Any] = field(default_factory=list)


def cluster_by_density(
    samples: Sequence[Any],
    options: DBSCANOptions | None = None,
    **kwargs: Any,
) -> ClusteringResult:
    """Group samples into fracture sets with DBSCAN.

    Args:
        samples: Orientation samples.  Any record exposing
            ``dip_angle`` / ``dip_direction`` is accepted.
        options: Clustering options; defaults to :class:`DBSCANOptions`.
        **kwargs: Overrides for individual option fields
            (``eps_deg``, ``min_pts``, ``palette``, ``name_prefix``).

    Returns:
        :class:`ClusteringResult`.

    Raises:
        ValueError: If an option is out of range.
    """
    opts = _resolve(DBSCANOptions, options, kwargs)
    samples = list(samples)
    if not samples:
        return ClusteringResult()

    found = dbscan(samples, eps_deg=opts.eps_deg, min_pts=opts.min_pts)
    return _build_result(
        samples, found.poles, found.clusters, found.outliers,
        opts.palette, opts.name_prefix,
    )


def cluster_by_ordering(
    samples: Sequence[Any],
    options: OPTICSOptions | None = None,
    **kwargs: Any,
) -> ClusteringResult:
    """Group samples into fracture sets with OPTICS and a reachability cut.

    Args:
        samples: Orientation samples.
        options: Clustering options; defaults to :class:`OPTICSOptions`.
        **kwargs: Overrides for individual option fields
            (``min_pts``, ``eps_max_deg``, ``quantile``,
            ``min_cluster_size``, ``palette``, ``name_prefix``).

    Returns:
        :class:`ClusteringResult`.  Outliers are listed in input order.

    Raises:
        ValueError: If an option is out of range.
    """
    opts = _resolve(OPTICSOptions, options, kwargs)
    samples = list(samples)
    if not samples:
        return ClusteringResult()

    ordering = optics_order(samples, min_pts=opts.min_pts, eps_max_deg=opts.eps_max_deg)
    extracted = extract_clusters(
        ordering, quantile=opts.quantile, min_cluster_size=opts.min_cluster_size,
    )
    return _build_result(
        samples, ordering.poles, extracted.clusters, sorted(extracted.outliers),
        opts.palette, opts.name_prefix,
    )


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _resolve(cls: type, options: Any, overrides: dict[str, Any]) -> Any:
    if options is None:
        return cls(**overrides)
    if not isinstance(options, cls):
        raise TypeError(f"options must be {cls.__name__}, got {type(options).__name__}")
    if overrides:
        return dataclasses.replace(options, **overrides)
    return options


def _build_result(
    samples: list[Any],
    poles: np.ndarray,
    clusters: list[list[int]],
    outliers: list[int],
    palette: Sequence[str],
    name_prefix: str,
) -> ClusteringResult:
    groups = []
    for rank, idxs in enumerate(clusters):
        color = palette[rank % len(palette)]
        groups.append(ClusterGroup(
            members=[samples[i] for i in idxs],
            centroid=spherical_mean(poles[idxs]),
            color=color,
            name=f"{name_prefix} {rank + 1}",
        ))
    return ClusteringResult(
        clusters=groups,
        outliers=[samples[i] for i in outliers],
    )
