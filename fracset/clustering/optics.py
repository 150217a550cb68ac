"""OPTICS ordering of orientations and threshold-based cluster extraction.

Ordering
~~~~~~~~
Samples are processed one at a time, always taking the unprocessed
sample with the smallest reachability distance (ties go to the lowest
input index).  When no unprocessed sample is reachable, processing
restarts from the next unprocessed sample in input order.  A min-heap
with lazy invalidation replaces a linear scan; the resulting order is
identical.

Extraction
~~~~~~~~~~
A single horizontal cut through the reachability plot: the threshold
is a quantile of the finite reachability values, and runs of samples
at or below it become clusters.  This is a simplification of the
steepness-based extraction of Ankerst et al. (1999).

A sample whose reachability exceeds the threshold closes the running
segment and is always recorded as an outlier, even when the samples
that follow it form a valid cluster.
"""

from __future__ import annotations

import heapq
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np

from fracset.clustering.options import OPTICSOptions
from fracset.orientation.metric import pairwise_angular_distances
from fracset.orientation.transform import pole_vectors

logger = logging.getLogger(__name__)


@dataclass
class OpticsOrdering:
    """Result of :func:`optics_order`.

    All distances are in radians; ``inf`` marks an undefined value.

    Attributes:
        order: Permutation of population indices in processing order.
        core_distance: Core distance per population index.
        reachability: Reachability distance per population index.
        poles: ``(N, 3)`` pole vectors, by population index.
    """

    order: list[int] = field(default_factory=list)
    core_distance: np.ndarray = field(default_factory=lambda: np.empty(0))
    reachability: np.ndarray = field(default_factory=lambda: np.empty(0))
    poles: np.ndarray = field(default_factory=lambda: np.empty((0, 3)))

    def __len__(self) -> int:
        return len(self.order)

    @property
    def ordered_reachability(self) -> np.ndarray:
        """Reachability values in processing order (the reachability plot)."""
        return self.reachability[np.asarray(self.order, dtype=int)]


@dataclass
class ExtractionResult:
    """Index-level output of :func:`extract_clusters`.

    Attributes:
        clusters: Population indices per cluster, in processing order.
        outliers: Rejected indices, in the order they were rejected.
        threshold: Reachability cut used (radians).
    """

    clusters: list[list[int]] = field(default_factory=list)
    outliers: list[int] = field(default_factory=list)
    threshold: float = math.inf


def optics_order(
    samples: Sequence[Any],
    min_pts: int = 10,
    eps_max_deg: float | None = None,
) -> OpticsOrdering:
    """Compute the OPTICS processing order of a population.

    Args:
        samples: Orientation samples.
        min_pts: Neighbourhood size defining the core distance (the
            sample itself counts as its own nearest neighbour).
        eps_max_deg: Neighbourhood search cap in degrees; ``None`` for
            no cap.

    Returns:
        :class:`OpticsOrdering`.
    """
    opts = OPTICSOptions(min_pts=min_pts, eps_max_deg=eps_max_deg)
    n = len(samples)
    if n == 0:
        return OpticsOrdering()

    poles = pole_vectors(samples)
    dist = pairwise_angular_distances(poles)
    eps_max = opts.eps_max_rad

    processed = np.zeros(n, dtype=bool)
    reach = np.full(n, np.inf)
    core = np.full(n, np.inf)
    order: list[int] = []
    heap: list[tuple[float, int]] = []

    def expand(p: int) -> None:
        processed[p] = True
        order.append(p)
        row = dist[p]
        neigh = np.flatnonzero(row <= eps_max)
        if len(neigh) < opts.min_pts:
            return
        cd = float(np.sort(row[neigh])[opts.min_pts - 1])
        core[p] = cd
        for o in neigh:
            if processed[o]:
                continue
            new_reach = max(cd, float(row[o]))
            if new_reach < reach[o]:
                reach[o] = new_reach
                heapq.heappush(heap, (new_reach, int(o)))

    for start in range(n):
        if processed[start]:
            continue
        expand(start)
        while heap:
            r, best = heapq.heappop(heap)
            if processed[best] or r != reach[best]:
                continue
            expand(best)

    logger.debug("OPTICS ordering: %d samples, min_pts=%d", n, opts.min_pts)
    return OpticsOrdering(
        order=order, core_distance=core, reachability=reach, poles=poles,
    )


def reachability_threshold(reachability: Sequence[float] | np.ndarray, quantile: float = 0.75) -> float:
    """Quantile of the finite reachability values.

    Picks index ``floor(n * quantile)`` of the sorted finite values,
    clamped to the last one.  Returns ``inf`` if none is finite.
    """
    values = np.asarray(reachability, dtype=float)
    finite = np.sort(values[np.isfinite(values)])
    if finite.size == 0:
        return math.inf
    k = min(int(math.floor(finite.size * quantile)), finite.size - 1)
    return float(finite[k])


def extract_clusters(
    ordering: OpticsOrdering,
    quantile: float = 0.75,
    min_cluster_size: int = 10,
) -> ExtractionResult:
    """Cut the reachability plot at a quantile threshold.

    Walks ``ordering.order``; consecutive samples with reachability at
    or below the threshold accumulate in a segment.  A sample above the
    threshold closes the segment (kept as a cluster when it holds at
    least *min_cluster_size* samples, otherwise rejected) and is itself
    rejected.  The trailing segment is evaluated the same way.

    Args:
        ordering: Output of :func:`optics_order`.
        quantile: Threshold quantile in ``[0, 1]``.
        min_cluster_size: Smallest segment kept as a cluster.

    Returns:
        :class:`ExtractionResult`.
    """
    opts = OPTICSOptions(quantile=quantile, min_cluster_size=min_cluster_size)
    reach = ordering.reachability
    t = reachability_threshold(reach, opts.quantile)

    clusters: list[list[int]] = []
    outliers: list[int] = []
    current: list[int] = []

    def close(segment: list[int]) -> None:
        if len(segment) >= opts.min_cluster_size:
            clusters.append(segment)
        else:
            outliers.extend(segment)

    for idx in ordering.order:
        if reach[idx] <= t:
            current.append(idx)
        else:
            close(current)
            current = []
            outliers.append(idx)
    close(current)

    logger.debug(
        "OPTICS extraction: threshold=%.4g rad (q=%.2f) -> %d clusters, %d outliers",
        t, opts.quantile, len(clusters), len(outliers),
    )
    return ExtractionResult(clusters=clusters, outliers=outliers, threshold=t)
