# flarereco

Reconstruction helpers for forward neutrino detectors: momentum estimation
from tracks bent in magnetic fields, prong direction finding and
longitudinal energy-deposit profiles of showers.

## Installation

```
pip install .
```

Install the test dependencies with `pip install .[test]` and run `pytest`.

## Modules

### `flarereco.records`

`FPFParticle` and `FPFNeutrino` are dataclasses holding the truth record of a
primary particle and of a neutrino interaction. `FPFParticle.p()` returns the
magnitude of the three-momentum. `prong_type` is 0 for the final-state
lepton, 1 for an original primary, 2 for decay products of a short-lived
final-state lepton, 3 for decay products of a primary pi0 and 4 for decay
products of a tau-decay pi0.

### `flarereco.geometry`

`GeometricalParameters` is a dataclass with the detector configuration:
hall offsets, TPC sizes, BabyMIND, FASER2, FASERnu2 and FORMOSA parameters,
and a set of registered sensitive detectors. Create one and pass it where it
is needed.

- `tpc_size()` returns `(tpc_size_x, tpc_size_y, tpc_size_z)`.
- `add_sensitive_detector(idx, name)` adds `(idx, name)` to
  `sensitive_detectors`.
- `magnet_windows()` returns `(center, z_in, z_out)` for each spectrometer
  magnet: one window of length `magnet_total_size_z` for
  `MagnetOption.SAMURAI`, and `n_faser2_magnets` windows of length
  `faser2_magnet_length_z`, centred on `magnet_z_position` and spaced by
  `faser2_magnet_spacing`, for `MagnetOption.CRYSTAL_PULLING`. It raises
  `ValueError` for `MagnetOption.UNKNOWN`.

The enums `TPCMaterialOption`, `TPCConfigOption` and `MagnetOption` each
have a `from_string()` class method. The first two raise `ValueError` for an
unknown name; `MagnetOption.from_string()` returns `MagnetOption.UNKNOWN`.

### `flarereco.circle_fit`

- `CircleFit(x, z)` – modified least-squares circle fit in the z-x plane;
  gives `xc`, `zc`, `r` and `chi2`.
- `LineFit(z, y)` – least-squares line `y = p0 + p1 * z`; gives `p0`, `p1`,
  `cos_dip`, `chi2`, and `line()` returns it as a `Line(m, q)`.
- `ParabolicFit(z, x, r0)` – least-squares parabola `x = a + b*z + c*z**2`;
  gives `a`, `b` and `r = 1 / (2c)` (infinite when `c` is zero). It needs
  at least three points.
- `CircleExtractor(x, y, z, geometry)` – splits the hits around each magnet
  of `geometry.magnet_windows()`, fits a line before and after each magnet,
  and intersects the normals at the magnet entry and exit. It gives
  `magnet_zs`, `xc`, `zc`, `pre_lines`, `post_lines`, and `radii()`, the
  mean of the entry and exit radius for each magnet.
- Helpers: `split_hits(magnet_zs, x, y, z)` returns one list of `Hit` per
  region in increasing z. A hit at exactly a magnet's z goes to the region
  after it. The other helpers are `extrapolate_line(z, line)`,
  `perpendicular_line_intersection(z_in, x_in, z_out, x_out, l1, l2)` and
  `distance(za, xa, zb, xb)`.

A fit that cannot be done raises `FitError`, a `ValueError`. Its `status` is
1 when the coordinate lists differ in length and 2 otherwise: a singular
system, parallel lines, or a line of zero slope.

### `flarereco.linear_fit`

- `Histogram2D(x_edges, y_edges)` or `Histogram2D.uniform(...)` is a
  weighted 2D histogram. It has `fill(x, y, weight)`, `integral()` and
  `mean(axis)`, where axis 1 is the horizontal axis and axis 2 the vertical
  one.
- `fit_fixed_line_slope(hist, z0, x0)` returns the content-weighted
  least-squares slope of a line through `(z0, x0)`. It returns `None` when
  the slope is undetermined.
- `LinearFit(evd_view_x, evd_view_y, vtx_evd_view_x, vtx_evd_view_y, a_vtx,
  b_vtx)` gives `direction` (from the line fits) and `coc_direction` (from
  the centre of charge) as unit vectors. It uses the vertex views, with
  origin `b_vtx - a_vtx`, when both hold charge; otherwise it uses the full
  views, with origin `b_vtx`. Both vectors stay zero when no pair of views
  holds charge. `coc_direction` is NaN when the centre of charge lies in the
  vertex plane.

### `flarereco.pca`

- `pca_fit(hits, edeps, vertex)` returns a `PrincipalComponents`. The
  centre is energy-weighted and the covariance uses unit weights.
  Eigenvalues are ascending and the eigenvectors are stored as rows, so row
  2 (`principal_axis`) is the axis of largest spread. That axis is oriented
  away from the vertex along z. An empty or zero-energy cluster gives an
  invalid result (`svd_ok` false).
- `PrincipalComponents` has `flip_axis(axis)` and a text summary through
  `str()`. Ordering with `<` puts the one with the larger first eigenvalue
  first, when both are valid.
- `center_of_charge_dir(hits, edeps, vertex)` is the unit vector from the
  vertex to the energy-weighted centre. It is the zero vector when no
  energy was deposited.
- `PCAAnalysis3D(hit_clusters, hit_edeps, vertices)` runs both for every
  cluster. It gives `components`, `pca3d_dirs` and `coc_dirs`.

### `flarereco.shower_lid`

`total_dedx_longitudinal(bins, vertex, momentum, tpc_size_z)` takes
`(centre, content)` pairs of a 3D energy map. It returns a numpy array of
`NUM_LONGITUDINAL_BINS` (3000) bins of energy, indexed by the distance from
the vertex along `momentum` truncated towards zero. Bins beyond
`tpc_size_z` are skipped. A zero momentum raises `ValueError`.

## Example

```python
from flarereco.circle_fit import CircleFit, LineFit

fit = CircleFit([1.0, 0.0, -1.0, 0.0], [0.0, 1.0, 0.0, -1.0])
print(fit.xc, fit.zc, fit.r)

line = LineFit([0.0, 1.0, 2.0], [1.0, 3.0, 5.0]).line()
print(line.m, line.q)
```

```python
import numpy as np
from flarereco.pca import PCAAnalysis3D

hits = [np.array([[0.0, 0.0, z] for z in range(10)], dtype=float)]
edeps = [np.ones(10)]
vertices = [np.zeros(3)]
analysis = PCAAnalysis3D(hits, edeps, vertices)
print(analysis.pca3d_dirs[0], analysis.coc_dirs[0])
```

## What it does not do

This is a library of reconstruction steps only. It does not simulate
particles or detectors, and it does not read or write event files. It has
no command-line program. You supply hits, energy deposits, histograms and
geometry as Python objects, and you get the results back as Python values
and numpy arrays.