"""Preparation of raw orientation measurements for clustering.

The clustering engines assume every sample is a valid orientation.
The functions here build :class:`~fracset.orientation.OrientationSample`
lists from raw records or plane normals and drop what cannot be used.

Workflow::

    import json

    with open("merged_blocks_with_fractures.json") as fh:
        samples = samples_from_dfn(json.load(fh))

    samples = validate_samples(samples)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Iterable

import numpy as np

from fracset.orientation.transform import (
    OrientationSample,
    as_orientation,
    normal_to_orientation,
)

logger = logging.getLogger(__name__)


def is_valid_orientation(dip: float, dip_direction: float) -> bool:
    """Whether *dip* lies in [0, 90] and *dip_direction* in [0, 360]."""
    if not (math.isfinite(dip) and math.isfinite(dip_direction)):
        return False
    return 0.0 <= dip <= 90.0 and 0.0 <= dip_direction <= 360.0


def validate_samples(records: Iterable[Any]) -> list[Any]:
    """Keep the records carrying a valid orientation.

    Each rejected record is logged as a warning.  Accepted records are
    returned as given, in input order.
    """
    valid: list[Any] = []
    for i, record in enumerate(records):
        try:
            dip, dip_direction = as_orientation(record, position=i)
        except (TypeError, ValueError) as exc:
            logger.warning("Record %d has no usable orientation (%s). Skipping.", i, exc)
            continue
        if is_valid_orientation(dip, dip_direction):
            valid.append(record)
        elif not 0.0 <= dip <= 90.0:
            logger.warning(
                "Dip angle must be between 0 and 90 degrees (%s provided). Skipping.", dip,
            )
        else:
            logger.warning(
                "Dip direction must be between 0 and 360 degrees (%s provided). Skipping.",
                dip_direction,
            )
    return valid


def samples_from_normals(normals: Iterable[Any]) -> list[OrientationSample]:
    """Convert plane normals ``[nx, ny, nz]`` to orientation samples.

    Rows that are not 3-vectors, contain non-finite values or have zero
    length are dropped.
    """
    samples: list[OrientationSample] = []
    for i, row in enumerate(normals):
        if not isinstance(row, (list, tuple, np.ndarray)) or len(row) < 3:
            logger.debug("Normal %d is not a 3-vector. Skipping.", i)
            continue
        sample = normal_to_orientation(row[0], row[1], row[2])
        if sample is None:
            logger.debug("Normal %d is degenerate. Skipping.", i)
            continue
        samples.append(sample)
    return samples


def samples_from_dfn(document: Mapping[str, Any] | None) -> list[OrientationSample]:
    """Read every fracture orientation from a decoded DFN document.

    Expects ``{"blocks": [{"fracture_data": {"orientations": [[nx, ny, nz], ...]}}]}``.
    Missing or malformed sections are treated as empty.  Other
    per-fracture arrays (lengths, apertures, ...) are ignored.
    """
    if not isinstance(document, Mapping):
        return []
    blocks = document.get("blocks")
    if not isinstance(blocks, list):
        return []

    samples: list[OrientationSample] = []
    for block in blocks:
        fracture_data = block.get("fracture_data") if isinstance(block, Mapping) else None
        if not isinstance(fracture_data, Mapping):
            continue
        orientations = fracture_data.get("orientations")
        if not isinstance(orientations, list):
            continue
        samples.extend(samples_from_normals(orientations))

    logger.info("Read %d fracture orientations from %d blocks", len(samples), len(blocks))
    return samples
