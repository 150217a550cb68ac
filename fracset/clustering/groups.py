"""Cluster groups: members, centroid and display colour."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fracset.orientation.transform import (
    OrientationSample,
    pole_vectors,
    resultant_length,
    spherical_mean,
)


@dataclass
class ClusterGroup:
    """A set of orientation samples forming one fracture set.

    If *centroid* is not given it is computed as the spherical mean of
    the members' poles.  A caller-supplied centroid is kept until the
    membership is edited through :meth:`add_member` or
    :meth:`remove_member`, which always recompute it.  An empty group
    has no centroid.

    Attributes:
        members: Samples in absorption order.  The objects are the
            caller's own records and are never modified.
        centroid: Mean orientation, or ``None`` for an empty group.
        color: Display colour, if any.
        name: Human-readable label.
    """

    members: list[Any] = field(default_factory=list)
    centroid: OrientationSample | None = None
    color: str | None = None
    name: str = ""

    def __post_init__(self) -> None:
        self.members = list(self.members)
        if self.centroid is None:
            self.recompute_centroid()

    def __len__(self) -> int:
        return len(self.members)

    def recompute_centroid(self) -> OrientationSample | None:
        """Reset the centroid to the spherical mean of the members."""
        if not self.members:
            self.centroid = None
        else:
            self.centroid = spherical_mean(pole_vectors(self.members))
        return self.centroid

    def add_member(self, sample: Any) -> None:
        """Append *sample* and recompute the centroid."""
        self.members.append(sample)
        self.recompute_centroid()

    def remove_member(self, index: int) -> Any:
        """Remove and return the member at *index*, recomputing the centroid.

        Raises:
            IndexError: If *index* is out of range.
        """
        sample = self.members.pop(index)
        self.recompute_centroid()
        return sample

    @property
    def mean_resultant_length(self) -> float:
        """``|Σ poles| / n``; low values flag a dispersed, low-confidence set."""
        return resultant_length(pole_vectors(self.members))
