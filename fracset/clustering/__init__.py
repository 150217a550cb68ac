"""Directional clustering of orientation samples into fracture sets.

Two engines are provided:

DBSCAN
    :func:`dbscan` — density-based clustering with a caller-supplied
    angular radius and density threshold.
OPTICS
    :func:`optics_order` builds the reachability ordering and
    :func:`extract_clusters` cuts it at a reachability quantile.

The pipeline functions :func:`cluster_by_density` and
:func:`cluster_by_ordering` wrap the engines and return
:class:`ClusterGroup` objects with centroid, colour and name.
"""

from fracset.clustering.options import DEFAULT_PALETTE, DBSCANOptions, OPTICSOptions
from fracset.clustering.groups import ClusterGroup
from fracset.clustering.dbscan import DBSCANResult, dbscan
from fracset.clustering.optics import (
    ExtractionResult,
    OpticsOrdering,
    extract_clusters,
    optics_order,
    reachability_threshold,
)
from fracset.clustering.pipeline import (
    ClusteringResult,
    cluster_by_density,
    cluster_by_ordering,
)

__all__ = [
    "DEFAULT_PALETTE",
    "DBSCANOptions",
    "OPTICSOptions",
    "ClusterGroup",
    "DBSCANResult",
    "dbscan",
    "OpticsOrdering",
    "ExtractionResult",
    "optics_order",
    "extract_clusters",
    "reachability_threshold",
    "ClusteringResult",
    "cluster_by_density",
    "cluster_by_ordering",
]
