"""Density-based clustering (DBSCAN) of orientations on the sphere.

The neighbourhood of a sample is every sample whose pole lies within
``eps`` radians of its own, itself included.  Samples with at least
``min_pts`` neighbours are core points; clusters grow by expanding
through core points in breadth-first order.

Cluster membership is recorded in absorption order.  For a fixed input
order and fixed parameters the result is deterministic; border samples
reachable from two clusters go to whichever cluster reaches them first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np

from fracset.clustering.options import DBSCANOptions
from fracset.orientation.metric import pairwise_angular_distances
from fracset.orientation.transform import pole_vectors

logger = logging.getLogger(__name__)

UNASSIGNED = -1
NOISE = -2


@dataclass
class DBSCANResult:
    """Index-level output of :func:`dbscan`.

    Attributes:
        clusters: One list of population indices per cluster, in
            absorption order.
        outliers: Indices never assigned to a cluster, in input order.
        labels: Cluster id per sample, ``-2`` for outliers.
        poles: ``(N, 3)`` pole vectors the neighbourhoods were built from.
    """

    clusters: list[list[int]] = field(default_factory=list)
    outliers: list[int] = field(default_factory=list)
    labels: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=int))
    poles: np.ndarray = field(default_factory=lambda: np.empty((0, 3)))


def dbscan(
    samples: Sequence[Any],
    eps_deg: float = 10.0,
    min_pts: int = 4,
) -> DBSCANResult:
    """Cluster orientation samples with DBSCAN under the angular metric.

    Args:
        samples: Orientation samples (see
            :func:`~fracset.orientation.transform.as_orientation`).
        eps_deg: Neighbourhood radius in degrees.
        min_pts: Minimum neighbourhood size for a core point.

    Returns:
        :class:`DBSCANResult`.

    Raises:
        ValueError: If *eps_deg* or *min_pts* is out of range.
    """
    opts = DBSCANOptions(eps_deg=eps_deg, min_pts=min_pts)
    n = len(samples)
    if n == 0:
        return DBSCANResult()

    poles = pole_vectors(samples)
    dist = pairwise_angular_distances(poles)
    eps = opts.eps_rad

    def neighbours(i: int) -> np.ndarray:
        return np.flatnonzero(dist[i] <= eps)

    visited = np.zeros(n, dtype=bool)
    labels = np.full(n, UNASSIGNED, dtype=int)
    clusters: list[list[int]] = []

    for i in range(n):
        if visited[i]:
            continue
        visited[i] = True
        neigh = neighbours(i)
        if len(neigh) < opts.min_pts:
            labels[i] = NOISE
            continue

        cid = len(clusters)
        members: list[int] = []
        clusters.append(members)

        queue = [int(j) for j in neigh]
        queued = np.zeros(n, dtype=bool)
        queued[neigh] = True

        qi = 0
        while qi < len(queue):
            q = queue[qi]
            qi += 1
            if not visited[q]:
                visited[q] = True
                neigh_q = neighbours(q)
                if len(neigh_q) >= opts.min_pts:
                    for k in neigh_q:
                        if not queued[k]:
                            queued[k] = True
                            queue.append(int(k))
            if labels[q] < 0:
                labels[q] = cid
                members.append(q)

    outliers = [int(i) for i in np.flatnonzero(labels < 0)]
    logger.debug(
        "DBSCAN: %d samples, eps=%.3g deg, min_pts=%d -> %d clusters, %d outliers",
        n, opts.eps_deg, opts.min_pts, len(clusters), len(outliers),
    )
    return DBSCANResult(clusters=clusters, outliers=outliers, labels=labels, poles=poles)
