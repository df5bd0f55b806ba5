"""Direction estimate of a prong from its two-dimensional event displays."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

Vector3 = tuple[float, float, float]


class Histogram2D:
    """A weighted two-dimensional histogram.

    Axis 1 is the horizontal (z) axis and axis 2 the vertical one. Fills
    outside the edges are ignored; the upper edge is exclusive.
    """

    def __init__(self, x_edges: Sequence[float], y_edges: Sequence[float]) -> None:
        self.x_edges = self._check_edges(x_edges)
        self.y_edges = self._check_edges(y_edges)
        self.contents = np.zeros((len(self.x_edges) - 1, len(self.y_edges) - 1))
        self._sumw = 0.0
        self._sumwx = 0.0
        self._sumwy = 0.0

    @staticmethod
    def _check_edges(edges: Sequence[float]) -> np.ndarray:
        array = np.asarray(edges, dtype=float)
        if array.ndim != 1 or array.size < 2 or np.any(np.diff(array) <= 0):
            raise ValueError("bin edges must be a strictly increasing sequence of two or more values")
        return array

    @classmethod
    def uniform(
        cls, nx: int, x_low: float, x_high: float, ny: int, y_low: float, y_high: float
    ) -> Histogram2D:
        """A histogram with equal-width bins."""
        return cls(np.linspace(x_low, x_high, nx + 1), np.linspace(y_low, y_high, ny + 1))

    @property
    def x_centers(self) -> np.ndarray:
        return (self.x_edges[:-1] + self.x_edges[1:]) / 2.0

    @property
    def y_centers(self) -> np.ndarray:
        return (self.y_edges[:-1] + self.y_edges[1:]) / 2.0

    def fill(self, x: float, y: float, weight: float = 1.0) -> None:
        """Add ``weight`` at ``(x, y)``."""
        ix = int(np.searchsorted(self.x_edges, x, side="right")) - 1
        iy = int(np.searchsorted(self.y_edges, y, side="right")) - 1
        if not (0 <= ix < self.contents.shape[0] and 0 <= iy < self.contents.shape[1]):
            return
        self.contents[ix, iy] += weight
        self._sumw += weight
        self._sumwx += weight * x
        self._sumwy += weight * y

    def integral(self) -> float:
        """Sum of all bin contents."""
        return float(self.contents.sum())

    def mean(self, axis: int) -> float:
        """Weighted mean of the filled values along axis 1 or 2."""
        if axis not in (1, 2):
            raise ValueError(f"axis must be 1 or 2, not {axis}")
        if self._sumw == 0.0:
            return 0.0
        return (self._sumwx if axis == 1 else self._sumwy) / self._sumw


def fit_fixed_line_slope(hist: Histogram2D, z0: float, x0: float) -> float | None:
    """Slope of the line through ``(z0, x0)`` that best fits the histogram.

    Bin centres are weighted by their contents. Returns None when the fit
    is undetermined.
    """
    zc, xc = np.meshgrid(hist.x_centers, hist.y_centers, indexing="ij")
    weights = hist.contents
    dz = zc - z0
    dx = xc - x0
    denominator = float(np.sum(weights * dz * dz))
    if denominator <= 0.0:
        return None
    return float(np.sum(weights * dz * dx)) / denominator


def _unit_direction(slope_x: float, slope_y: float, forward: bool) -> Vector3:
    dz = 1.0 / math.sqrt(1.0 + slope_x * slope_x + slope_y * slope_y)
    if not forward:
        dz = -dz
    return (slope_x * dz, slope_y * dz, dz)


class LinearFit:
    """Prong direction from the z-x and z-y views.

    The views around the vertex are used when they hold any charge, with
    ``b_vtx - a_vtx`` as origin; otherwise the full views are used with
    ``b_vtx`` as origin. ``direction`` comes from line fits through the
    origin and ``coc_direction`` from the centre of charge. Both stay zero
    when no view holds charge; ``coc_direction`` is NaN when the centre of
    charge lies in the vertex plane.
    """

    def __init__(
        self,
        evd_view_x: Histogram2D,
        evd_view_y: Histogram2D,
        vtx_evd_view_x: Histogram2D,
        vtx_evd_view_y: Histogram2D,
        a_vtx: Vector3,
        b_vtx: Vector3,
    ) -> None:
        self.direction: Vector3 = (0.0, 0.0, 0.0)
        self.coc_direction: Vector3 = (0.0, 0.0, 0.0)

        if vtx_evd_view_x.integral() > 0 and vtx_evd_view_y.integral() > 0:
            origin = tuple(b - a for a, b in zip(a_vtx, b_vtx))
            self._fit(vtx_evd_view_x, vtx_evd_view_y, origin)
        elif evd_view_x.integral() > 0 and evd_view_y.integral() > 0:
            self._fit(evd_view_x, evd_view_y, tuple(b_vtx))

    def _fit(self, view_x: Histogram2D, view_y: Histogram2D, origin: Sequence[float]) -> None:
        ox, oy, oz = origin
        center_xz_z = view_x.mean(1)
        center_xz_x = view_x.mean(2)
        center_yz_z = view_y.mean(1)
        center_yz_y = view_y.mean(2)
        forward = center_xz_z - oz > 0

        slope_x = fit_fixed_line_slope(view_x, oz, ox)
        slope_y = fit_fixed_line_slope(view_y, oz, oy)
        if slope_x is not None and slope_y is not None:
            self.direction = _unit_direction(slope_x, slope_y, forward)

        dz_x = center_xz_z - oz
        dz_y = center_yz_z - oz
        if dz_x == 0.0 or dz_y == 0.0:
            self.coc_direction = (math.nan, math.nan, math.nan)
            return
        self.coc_direction = _unit_direction(
            (center_xz_x - ox) / dz_x, (center_yz_y - oy) / dz_y, forward
        )