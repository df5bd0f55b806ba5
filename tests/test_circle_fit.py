import math

import pytest

from flarereco.circle_fit import (
    CircleExtractor,
    CircleFit,
    FitError,
    Hit,
    Line,
    LineFit,
    ParabolicFit,
    distance,
    extrapolate_line,
    perpendicular_line_intersection,
    split_hits,
)
from flarereco.geometry import GeometricalParameters, MagnetOption


def _circle_points(xc, zc, r, angles):
    xs = [xc + r * math.cos(t) for t in angles]
    zs = [zc + r * math.sin(t) for t in angles]
    return xs, zs


def test_circle_fit_recovers_circle():
    xs, zs = _circle_points(1.0, 2.0, 3.0, [0.1 * k for k in range(12)])
    fit = CircleFit(xs, zs)
    assert fit.xc == pytest.approx(1.0)
    assert fit.zc == pytest.approx(2.0)
    assert fit.r == pytest.approx(3.0)
    assert fit.chi2 == pytest.approx(0.0, abs=1e-12)


def test_circle_fit_length_mismatch():
    with pytest.raises(FitError) as info:
        CircleFit([1.0, 2.0], [1.0])
    assert info.value.status == 1


def test_circle_fit_collinear_points_singular():
    with pytest.raises(FitError) as info:
        CircleFit([0.0, 1.0, 2.0], [0.0, 1.0, 2.0])
    assert info.value.status == 2


def test_line_fit_exact_line():
    fit = LineFit([0.0, 1.0, 2.0, 3.0], [1.0, 3.0, 5.0, 7.0])
    assert fit.p0 == pytest.approx(1.0)
    assert fit.p1 == pytest.approx(2.0)
    assert fit.cos_dip == pytest.approx(1.0 / math.sqrt(5.0))
    assert fit.chi2 == pytest.approx(0.0, abs=1e-12)
    assert fit.line() == Line(m=pytest.approx(2.0), q=pytest.approx(1.0))


def test_line_fit_errors():
    with pytest.raises(FitError) as info:
        LineFit([0.0], [1.0, 2.0])
    assert info.value.status == 1
    with pytest.raises(FitError) as info:
        LineFit([1.0, 1.0], [0.0, 2.0])
    assert info.value.status == 2


def test_split_hits_sorts_separators():
    groups = split_hits([10.0, 5.0], [1.0, 2.0, 3.0, 4.0], [0.0] * 4, [1.0, 7.0, 12.0, 10.0])
    assert [[h.z for h in g] for g in groups] == [[1.0], [7.0], [12.0, 10.0]]
    assert groups[0][0] == Hit(1.0, 0.0, 1.0)


def test_split_hits_without_magnets_and_mismatch():
    groups = split_hits([], [1.0], [2.0], [3.0])
    assert groups == [[Hit(1.0, 2.0, 3.0)]]
    with pytest.raises(ValueError):
        split_hits([0.0], [1.0], [2.0], [])


def test_extrapolate_line_matches_definition():
    line = Line(m=2.0, q=1.0)
    assert extrapolate_line(0.0, line) == 1.0
    assert extrapolate_line(3.0, line) - extrapolate_line(2.0, line) == pytest.approx(line.m)


def _tangent(center_z, center_x, r, theta):
    pz = center_z + r * math.sin(theta)
    px = center_x + r * math.cos(theta)
    m = -math.tan(theta)
    return pz, px, Line(m=m, q=px - m * pz)


def test_perpendicular_intersection_is_circle_center():
    cz, cx, r = 50.0, -100.0, 100.0
    z1, x1, l1 = _tangent(cz, cx, r, 0.3)
    z2, x2, l2 = _tangent(cz, cx, r, 0.6)
    z, x = perpendicular_line_intersection(z1, x1, z2, x2, l1, l2)
    assert z == pytest.approx(cz)
    assert x == pytest.approx(cx)
    assert distance(z1, x1, z, x) == pytest.approx(r)


def test_perpendicular_intersection_parallel_lines():
    with pytest.raises(FitError):
        perpendicular_line_intersection(0.0, 0.0, 1.0, 1.0, Line(1.0, 0.0), Line(1.0, 2.0))


def test_distance_is_symmetric():
    assert distance(0.0, 0.0, 3.0, 4.0) == distance(3.0, 4.0, 0.0, 0.0)
    assert distance(1.0, 1.0, 1.0, 1.0) == 0.0


def test_circle_extractor_samurai():
    radius = 50.0
    geometry = GeometricalParameters(
        faser2_magnet_option=MagnetOption.SAMURAI,
        magnet_z_position=0.0,
        magnet_total_size_z=2.0,
    )
    x_edge = -radius + math.sqrt(radius**2 - 1.0)
    slope = 1.0 / math.sqrt(radius**2 - 1.0)
    zs = [-5.0, -4.0, -3.0, -2.0, 2.0, 3.0, 4.0, 5.0]
    xs = [x_edge + slope * (z + 1.0) if z < 0 else x_edge - slope * (z - 1.0) for z in zs]
    extractor = CircleExtractor(xs, [0.0] * len(zs), zs, geometry)
    assert extractor.magnet_zs == [0.0]
    assert extractor.zc[0] == pytest.approx(0.0, abs=1e-9)
    assert extractor.xc[0] == pytest.approx(-radius)
    assert extractor.radii()[0] == pytest.approx(radius)
    assert extractor.pre_lines[0].m == pytest.approx(slope)
    assert extractor.post_lines[0].m == pytest.approx(-slope)


def test_circle_extractor_crystal_pulling_sizes():
    geometry = GeometricalParameters(
        faser2_magnet_option=MagnetOption.CRYSTAL_PULLING,
        magnet_z_position=0.0,
        faser2_magnet_length_z=2.0,
        faser2_magnet_spacing=1.0,
        n_faser2_magnets=2,
    )
    zs = [-10.0, -8.0, -6.0, -0.5, 0.0, 0.5, 6.0, 8.0, 10.0]
    slopes = [0.1, 0.2, 0.3]
    xs = [slopes[0] * z if z < -3 else slopes[1] * z if z < 3 else slopes[2] * z for z in zs]
    extractor = CircleExtractor(xs, [0.0] * len(zs), zs, geometry)
    assert extractor.magnet_zs == [c for c, _, _ in geometry.magnet_windows()]
    assert len(extractor.radii()) == 2
    assert len(extractor.xc) == len(extractor.zc) == 2
    assert [ln.m for ln in extractor.pre_lines] == pytest.approx(slopes[:2])
    assert [ln.m for ln in extractor.post_lines] == pytest.approx(slopes[1:])


def test_circle_extractor_unknown_magnet():
    geometry = GeometricalParameters(faser2_magnet_option=MagnetOption.UNKNOWN)
    with pytest.raises(ValueError):
        CircleExtractor([0.0], [0.0], [0.0], geometry)


def test_parabolic_fit_recovers_parameters():
    radius = 50.0
    zs = [float(k) for k in range(-5, 6)]
    xs = [1.0 + 2.0 * z + z * z / (2.0 * radius) for z in zs]
    fit = ParabolicFit(zs, xs, radius)
    assert fit.a == pytest.approx(1.0)
    assert fit.b == pytest.approx(2.0)
    assert fit.r == pytest.approx(radius)


def test_parabolic_fit_too_few_points():
    with pytest.raises(FitError):
        ParabolicFit([0.0, 1.0], [0.0, 1.0], 10.0)