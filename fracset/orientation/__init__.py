"""Orientation geometry: plane ↔ pole conversion and angular metric.

Example::

    from fracset.orientation import to_pole_vector, to_orientation

    pole = to_pole_vector(30.0, 110.0)
    to_orientation(pole)   # OrientationSample(dip_angle=30.0, dip_direction=110.0)
"""

from fracset.orientation.transform import (
    OrientationSample,
    PoleVector,
    as_orientation,
    normal_to_orientation,
    pole_vectors,
    resultant_length,
    spherical_mean,
    to_orientation,
    to_pole_vector,
)
from fracset.orientation.metric import (
    angular_distance,
    pairwise_angular_distances,
)

__all__ = [
    "OrientationSample",
    "PoleVector",
    "to_pole_vector",
    "to_orientation",
    "spherical_mean",
    "resultant_length",
    "pole_vectors",
    "normal_to_orientation",
    "as_orientation",
    "angular_distance",
    "pairwise_angular_distances",
]
