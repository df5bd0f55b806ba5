"""Analytical circle and line fits for momentum estimation in magnetic fields."""

from __future__ import annotations

import bisect
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from flarereco.geometry import GeometricalParameters


class FitError(ValueError):
    """Raised when a fit cannot be performed.

    ``status`` is 1 when the coordinate lists differ in length and 2 when the
    system of equations is singular.
    """

    def __init__(self, message: str, status: int = 2) -> None:
        super().__init__(message)
        self.status = status


@dataclass(frozen=True)
class Line:
    """A straight line ``x = q + m * z``."""

    m: float
    q: float


@dataclass(frozen=True)
class Hit:
    """A hit position."""

    x: float
    y: float
    z: float


class CircleFit:
    """Modified least-squares circle fit in the z-x plane."""

    def __init__(self, x: Sequence[float], z: Sequence[float]) -> None:
        if len(x) != len(z):
            raise FitError("x and z must have the same length", status=1)
        n = len(x)

        sumx = sumz = 0.0
        sumx2 = sumz2 = sumxz = 0.0
        sumxz2 = sumx2z = sumx3 = sumz3 = 0.0
        for xp, zp in zip(x, z):
            sumx += xp
            sumz += zp
            sumx2 += xp * xp
            sumz2 += zp * zp
            sumxz += xp * zp
            sumxz2 += xp * zp * zp
            sumx2z += xp * xp * zp
            sumx3 += xp * xp * xp
            sumz3 += zp * zp * zp

        a = n * sumx2 - sumx * sumx
        b = n * sumxz - sumx * sumz
        c = n * sumz2 - sumz * sumz
        d = 0.5 * (n * sumxz2 - sumx * sumz2 + n * sumx3 - sumx * sumx2)
        e = 0.5 * (n * sumx2z - sumz * sumx2 + n * sumz3 - sumz * sumz2)

        det = a * c - b * b
        if det == 0.0:
            raise FitError("points do not determine a circle", status=2)

        self.xc = (d * c - b * e) / det
        self.zc = (a * e - b * d) / det

        dists = [math.hypot(xp - self.xc, zp - self.zc) for xp, zp in zip(x, z)]
        self.r = sum(dists) / n
        self.chi2 = sum((dist - self.r) ** 2 for dist in dists) / n


class LineFit:
    """Least-squares straight-line fit ``y = p0 + p1 * z``."""

    def __init__(self, z: Sequence[float], y: Sequence[float]) -> None:
        if len(z) != len(y):
            raise FitError("z and y must have the same length", status=1)
        n = len(z)

        s1 = float(n)
        sz = sum(z)
        sy = sum(y)
        syz = sum(zi * yi for zi, yi in zip(z, y))
        szz = sum(zi * zi for zi in z)

        det = s1 * szz - sz * sz
        if det == 0.0:
            raise FitError("points do not determine a line", status=2)

        self.p0 = (sy * szz - sz * syz) / det
        self.p1 = (s1 * syz - sz * sy) / det
        self.cos_dip = 1.0 / math.sqrt(1.0 + self.p1 * self.p1)
        self.chi2 = sum((yi - self.p0 - self.p1 * zi) ** 2 for zi, yi in zip(z, y)) / n

    def line(self) -> Line:
        """The fitted line."""
        return Line(m=self.p1, q=self.p0)


def split_hits(
    magnet_zs: Sequence[float],
    x: Sequence[float],
    y: Sequence[float],
    z: Sequence[float],
) -> list[list[Hit]]:
    """Split hits into the regions before, between and after the magnets.

    Returns ``len(magnet_zs) + 1`` groups ordered by increasing z.
    """
    if not len(x) == len(y) == len(z):
        raise ValueError("x, y and z must have the same length")
    separators = sorted(magnet_zs)
    groups: list[list[Hit]] = [[] for _ in range(len(separators) + 1)]
    for xi, yi, zi in zip(x, y, z):
        groups[bisect.bisect_right(separators, zi)].append(Hit(xi, yi, zi))
    return groups


def extrapolate_line(z: float, line: Line) -> float:
    """Value of ``line`` at ``z``."""
    return line.q + z * line.m


def perpendicular_line_intersection(
    z_in: float, x_in: float, z_out: float, x_out: float, l1: Line, l2: Line
) -> tuple[float, float]:
    """Intersection ``(z, x)`` of the normals to ``l1`` at the entry point
    and to ``l2`` at the exit point."""
    m1, m2 = l1.m, l2.m
    if m1 == m2:
        raise FitError("entering and exiting lines are parallel")
    if m1 == 0.0 or m2 == 0.0:
        raise FitError("normal to a line of zero slope is vertical")
    z = m1 * m2 / (m1 - m2) * (x_out - x_in) + m1 * z_out / (m1 - m2) - m2 * z_in / (m1 - m2)
    x1 = x_in - 1.0 / m1 * (z - z_in)
    x2 = x_out - 1.0 / m2 * (z - z_out)
    return z, (x1 + x2) / 2.0


def distance(za: float, xa: float, zb: float, xb: float) -> float:
    """Euclidean distance between two points of the z-x plane."""
    return math.hypot(za - zb, xa - xb)


class CircleExtractor:
    """Track curvature in each spectrometer magnet from straight segments
    measured before and after it."""

    def __init__(
        self,
        x: Sequence[float],
        y: Sequence[float],
        z: Sequence[float],
        geometry: GeometricalParameters,
    ) -> None:
        windows = geometry.magnet_windows()
        self.magnet_zs = [center for center, _, _ in windows]
        self.xc: list[float] = []
        self.zc: list[float] = []
        self.pre_lines: list[Line] = []
        self.post_lines: list[Line] = []
        self._r1: list[float] = []
        self._r2: list[float] = []

        groups = split_hits(self.magnet_zs, x, y, z)
        for (_, z_in, z_out), pre, post in zip(windows, groups, groups[1:]):
            self.compute_circle(
                [h.z for h in pre],
                [h.x for h in pre],
                [h.z for h in post],
                [h.x for h in post],
                z_in,
                z_out,
            )

    def compute_circle(
        self,
        zpre: Sequence[float],
        xpre: Sequence[float],
        zpost: Sequence[float],
        xpost: Sequence[float],
        z_in: float,
        z_out: float,
    ) -> None:
        """Fit the segments around one magnet and record its circle."""
        pre = LineFit(zpre, xpre).line()
        post = LineFit(zpost, xpost).line()
        self.pre_lines.append(pre)
        self.post_lines.append(post)

        x_in = extrapolate_line(z_in, pre)
        x_out = extrapolate_line(z_out, post)
        zc, xc = perpendicular_line_intersection(z_in, x_in, z_out, x_out, pre, post)
        self.xc.append(xc)
        self.zc.append(zc)
        self._r1.append(distance(z_in, x_in, zc, xc))
        self._r2.append(distance(z_out, x_out, zc, xc))

    def radii(self) -> list[float]:
        """Radius per magnet, averaged over the entry and exit estimates."""
        return [(r1 + r2) / 2.0 for r1, r2 in zip(self._r1, self._r2)]


class ParabolicFit:
    """Least-squares parabola ``x = a + b*z + c*z**2`` with ``r = 1 / (2c)``."""

    def __init__(self, z: Sequence[float], x: Sequence[float], r0: float) -> None:
        if len(z) != len(x):
            raise FitError("z and x must have the same length", status=1)
        if len(z) < 3:
            raise FitError("a parabolic fit needs at least three points")
        self.r0 = r0
        c, b, a = np.polyfit(np.asarray(z, dtype=float), np.asarray(x, dtype=float), 2)
        self.a = float(a)
        self.b = float(b)
        self.r = math.inf if c == 0.0 else float(1.0 / (2.0 * c))