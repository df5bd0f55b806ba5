"""Principal component analysis of three-dimensional hit clusters."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

Vector3 = tuple[float, float, float]


def _zeros3() -> np.ndarray:
    return np.zeros(3)


def _zeros33() -> np.ndarray:
    return np.zeros((3, 3))


@dataclass(eq=False)
class PrincipalComponents:
    """Result of a PCA decomposition.

    Eigenvalues are in ascending order and ``eigen_vectors`` holds one
    eigenvector per row, so row 2 is the principal axis.
    """

    svd_ok: bool = False
    num_hits_used: int = 0
    eigen_values: np.ndarray = field(default_factory=_zeros3)
    eigen_vectors: np.ndarray = field(default_factory=_zeros33)
    ave_position: np.ndarray = field(default_factory=_zeros3)
    ave_hit_doca: float = 9999.0

    def __post_init__(self) -> None:
        self.eigen_values = np.asarray(self.eigen_values, dtype=float).reshape(3)
        self.eigen_vectors = np.asarray(self.eigen_vectors, dtype=float).reshape(3, 3)
        self.ave_position = np.asarray(self.ave_position, dtype=float).reshape(3)

    @property
    def principal_axis(self) -> Vector3:
        """The axis of largest spread."""
        return tuple(float(v) for v in self.eigen_vectors[2])

    def flip_axis(self, axis: int) -> None:
        """Reverse the direction of the eigenvector in row ``axis``."""
        self.eigen_vectors[axis] = -self.eigen_vectors[axis]

    def __str__(self) -> str:
        if not self.svd_ok:
            return " Principal Components Axis is not valid\n"
        pos = self.ave_position
        val = self.eigen_values
        vec = self.eigen_vectors
        lines = [
            f" PCAxis ID run with {self.num_hits_used} space points",
            f"   - center position: {pos[0]:6.2f}, {pos[1]:.2f}, {pos[2]:.2f}",
            f"   - eigen values: {val[0]:>8.2f}, {val[1]:.2f}, {val[1]:.2f}",
            f"   - average doca: {self.ave_hit_doca:.2f}",
        ]
        for label, row in (
            ("Principle axis: ", vec[0]),
            ("second axis:    ", vec[1]),
            ("third axis:     ", vec[2]),
        ):
            lines.append(f"   - {label}{row[0]:7.4f}, {row[1]:.4f}, {row[2]:.4f}")
        return "\n".join(lines) + "\n"

    def __lt__(self, other: PrincipalComponents) -> bool:
        if self.svd_ok and other.svd_ok:
            return bool(self.eigen_values[0] > other.eigen_values[0])
        return False


def _as_points(hits: Sequence[Sequence[float]], edeps: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    if len(hits) != len(edeps):
        raise ValueError("hits and edeps must have the same length")
    points = np.asarray(hits, dtype=float).reshape(len(hits), 3)
    weights = np.asarray(edeps, dtype=float).reshape(len(edeps))
    return points, weights


def pca_fit(
    hits: Sequence[Sequence[float]],
    edeps: Sequence[float],
    vertex: Sequence[float],
) -> PrincipalComponents:
    """Run a PCA on a hit cluster.

    The centre is the energy-weighted mean of the hits; the covariance uses
    unit weights. The principal axis is oriented away from ``vertex`` along z.
    An empty or degenerate cluster gives an invalid result.
    """
    points, weights = _as_points(hits, edeps)
    num_hits = len(points)
    weight_sum = float(weights.sum())
    if num_hits == 0 or weight_sum == 0.0:
        return PrincipalComponents()

    mean_pos = (points * weights[:, None]).sum(axis=0) / weight_sum
    deltas = points - mean_pos
    sig = deltas.T @ deltas / num_hits

    if not np.all(np.isfinite(sig)):
        return PrincipalComponents()
    try:
        eigen_values, eigen_columns = np.linalg.eigh(sig)
    except np.linalg.LinAlgError:
        return PrincipalComponents()

    eigen_vectors = eigen_columns.T.copy()
    if math.isnan(eigen_values[0]):
        eigen_values[0] = 0.0
        eigen_vectors[0] = np.cross(eigen_vectors[1], eigen_vectors[2])

    pca = PrincipalComponents(True, num_hits, eigen_values, eigen_vectors, mean_pos)
    if (mean_pos[2] - vertex[2]) * pca.eigen_vectors[2][2] < 0:
        pca.flip_axis(2)
    return pca


def center_of_charge_dir(
    hits: Sequence[Sequence[float]],
    edeps: Sequence[float],
    vertex: Sequence[float],
) -> Vector3:
    """Unit vector from ``vertex`` to the energy-weighted centre of the hits.

    Returns the zero vector when no energy was deposited.
    """
    points, weights = _as_points(hits, edeps)
    weight_sum = float(weights.sum())
    if weight_sum == 0.0:
        return (0.0, 0.0, 0.0)
    mean_pos = (points * weights[:, None]).sum(axis=0) / weight_sum
    delta = mean_pos - np.asarray(vertex, dtype=float)
    norm = math.sqrt(float(delta @ delta))
    if norm == 0.0:
        return (math.nan, math.nan, math.nan)
    return tuple(float(v) / norm for v in delta)


class PCAAnalysis3D:
    """PCA and centre-of-charge directions for each cluster of an event."""

    def __init__(
        self,
        hit_clusters: Sequence[Sequence[Sequence[float]]],
        hit_edeps: Sequence[Sequence[float]],
        vertices: Sequence[Sequence[float]],
    ) -> None:
        if not len(hit_clusters) == len(hit_edeps) == len(vertices):
            raise ValueError("clusters, energy deposits and vertices must have the same length")
        self.components: list[PrincipalComponents] = []
        self.pca3d_dirs: list[Vector3] = []
        self.coc_dirs: list[Vector3] = []
        for hits, edeps, vertex in zip(hit_clusters, hit_edeps, vertices):
            pca = pca_fit(hits, edeps, vertex)
            self.components.append(pca)
            self.pca3d_dirs.append(pca.principal_axis)
            self.coc_dirs.append(center_of_charge_dir(hits, edeps, vertex))