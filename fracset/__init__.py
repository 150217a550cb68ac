"""
fracset: directional clustering of structural-geology orientation data.

Groups (dip, dip direction) measurements into fracture sets and flags
measurements belonging to no coherent set as outliers.

Subpackages
-----------
orientation
    Plane ↔ pole conversion, spherical mean, angular distance.
clustering
    DBSCAN and OPTICS engines and the cluster-group pipeline.

Modules
-------
ingest
    Validation of raw measurements and reading of plane normals.
logging_config
    Optional logging setup for applications.
"""

from fracset import (
    orientation,
    clustering,
    ingest,
)
from fracset.orientation import OrientationSample
from fracset.clustering import (
    ClusterGroup,
    ClusteringResult,
    cluster_by_density,
    cluster_by_ordering,
)

__version__ = "0.1.0"

__all__ = [
    "orientation",
    "clustering",
    "ingest",
    "OrientationSample",
    "ClusterGroup",
    "ClusteringResult",
    "cluster_by_density",
    "cluster_by_ordering",
]
