"""Longitudinal energy-deposit profile of a shower."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np

NUM_LONGITUDINAL_BINS = 3000
"""Number of 1 mm bins of the longitudinal dE/dx profile."""


def total_dedx_longitudinal(
    bins: Iterable[tuple[Sequence[float], float]],
    vertex: Sequence[float],
    momentum: Sequence[float],
    tpc_size_z: float,
) -> np.ndarray:
    """Energy deposited per longitudinal bin along the shower direction.

    ``bins`` yields ``(centre, content)`` pairs of a 3D energy map. Bins with
    a centre beyond ``tpc_size_z`` are ignored. The distance to the vertex
    along ``momentum`` is truncated towards zero to pick the bin.
    """
    px, py, pz = momentum
    norm = math.sqrt(px * px + py * py + pz * pz)
    if norm == 0.0:
        raise ValueError("momentum must not be zero")
    vx, vy, vz = vertex

    profile = np.zeros(NUM_LONGITUDINAL_BINS)
    for (x, y, z), content in bins:
        if z > tpc_size_z:
            continue
        distance = ((x - vx) * px + (y - vy) * py + (z - vz) * pz) / norm
        index = int(distance)
        if 0 <= index < NUM_LONGITUDINAL_BINS:
            profile[index] += content
    return profile