"""Console logging for scripts built on fracset.

The library only creates module loggers.  :func:`setup_logging` routes
the ``fracset`` namespace to a stream so the engines' run summaries::

    DEBUG fracset.clustering.dbscan: DBSCAN: 28 samples, eps=10 deg, min_pts=4 -> 3 clusters, 5 outliers

and the ingestion warnings become visible.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO


def setup_logging(level: int = logging.DEBUG, stream: TextIO | None = None) -> logging.Logger:
    """Send ``fracset`` log records to *stream* (``sys.stderr`` by default).

    Calling it again replaces the previous handler.

    Args:
        level: Lowest level shown; ``logging.INFO`` hides the engine
            summaries and keeps the ingestion messages.
        stream: Text stream to write to.

    Returns:
        The ``fracset`` logger.
    """
    logger = logging.getLogger("fracset")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
