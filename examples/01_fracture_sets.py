# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# # 01 — Fracture Set Identification (DBSCAN and OPTICS)
#
# This example groups planar orientation measurements into fracture
# sets:
#
# 1. **Build** a synthetic field dataset (three sets plus scattered planes)
# 2. **Validate** the raw measurements
# 3. **Cluster** with DBSCAN (fixed angular radius)
# 4. **Cluster** with OPTICS (reachability-quantile cut)
#
# **Module**: `fracset.clustering`

# %%
import math

from fracset.clustering import cluster_by_density, cluster_by_ordering, optics_order
from fracset.ingest import validate_samples
from fracset.logging_config import setup_logging
from fracset.orientation import OrientationSample

setup_logging()

# %% [markdown]
# ## 1. Synthetic Field Data
#
# Three joint sets measured as (dip, dip direction), a handful of
# scattered planes, and two bad readings.

# %%
SET_A = [(30, 110), (32, 115), (28, 105), (35, 120), (31, 112),
         (33, 118), (29, 108), (34, 123), (30, 114), (32, 109)]
SET_B = [(60, 250), (58, 245), (62, 255), (61, 248), (59, 252),
         (60, 258), (63, 246), (57, 249), (61, 254), (60, 243)]
SET_C = [(45, 20), (47, 18), (43, 24), (46, 15), (44, 22),
         (45, 26), (42, 19), (48, 17)]
SCATTERED = [(10, 300), (15, 40), (20, 200), (12, 130), (18, 320)]
BAD = [(95, 10), (40, 400)]

raw = [OrientationSample(d, dd) for d, dd in SET_A + SET_B + SET_C + SCATTERED + BAD]
samples = validate_samples(raw)
print(f"{len(samples)} of {len(raw)} measurements kept")

# %% [markdown]
# ## 2. DBSCAN
#
# A 10° neighbourhood with at least 4 neighbours defines a core plane.

# %%
result = cluster_by_density(samples, eps_deg=10, min_pts=4)
for group in result.clusters:
    c = group.centroid
    print(
        f"{group.name}: {len(group)} planes, mean {c.dip_angle:.1f}/{c.dip_direction:05.1f}, "
        f"R = {group.mean_resultant_length:.3f}, colour {group.color}"
    )
print(f"Outliers: {[(s.dip_angle, s.dip_direction) for s in result.outliers]}")

# %% [markdown]
# ## 3. OPTICS
#
# The reachability plot shows each set as a valley; the cut at the
# 75th percentile of reachability separates them.

# %%
ordering = optics_order(samples, min_pts=5)
print("Reachability plot (deg):")
for idx, r in zip(ordering.order, ordering.ordered_reachability):
    s = samples[idx]
    bar = "inf" if math.isinf(r) else "#" * min(int(math.degrees(r)), 60)
    print(f"  {s.dip_angle:5.1f}/{s.dip_direction:05.1f} {bar}")

result = cluster_by_ordering(samples, min_pts=5, quantile=0.75, min_cluster_size=6)
for group in result.clusters:
    c = group.centroid
    print(f"{group.name}: {len(group)} planes, mean {c.dip_angle:.1f}/{c.dip_direction:05.1f}")
print(f"{len(result.outliers)} outliers")
