import math

import pytest

from flarereco.geometry import (
    GeometricalParameters,
    MagnetOption,
    TPCConfigOption,
    TPCMaterialOption,
)


@pytest.mark.parametrize("option", list(TPCMaterialOption))
def test_material_option_round_trip(option):
    assert TPCMaterialOption.from_string(option.value) is option


@pytest.mark.parametrize("option", list(TPCConfigOption))
def test_config_option_round_trip(option):
    assert TPCConfigOption.from_string(option.value) is option


def test_known_strings_map_to_options():
    assert TPCMaterialOption.from_string("LiquidKrypton") is TPCMaterialOption.LIQUID_KRYPTON
    assert TPCConfigOption.from_string("ThreeBySeven") is TPCConfigOption.THREE_BY_SEVEN
    assert MagnetOption.from_string("CrystalPulling") is MagnetOption.CRYSTAL_PULLING


def test_unknown_tpc_strings_raise():
    with pytest.raises(ValueError):
        TPCMaterialOption.from_string("Water")
    with pytest.raises(ValueError):
        TPCConfigOption.from_string("TwoByTwo")


def test_unknown_magnet_string_gives_unknown():
    assert MagnetOption.from_string("Toroid") is MagnetOption.UNKNOWN
    assert MagnetOption.from_string("SAMURAI") is MagnetOption.SAMURAI


def test_tpc_size_returns_configured_dimensions():
    params = GeometricalParameters(tpc_size_x=180.0, tpc_size_y=180.0, tpc_size_z=830.0)
    assert params.tpc_size() == (180.0, 180.0, 830.0)


def test_add_sensitive_detector_deduplicates():
    params = GeometricalParameters()
    params.add_sensitive_detector(0, "lArBoxSD/lar_box")
    params.add_sensitive_detector(0, "lArBoxSD/lar_box")
    params.add_sensitive_detector(1, "HadCalXSD/lar_box")
    assert params.sensitive_detectors == {(0, "lArBoxSD/lar_box"), (1, "HadCalXSD/lar_box")}


def test_sensitive_detectors_are_per_instance():
    first = GeometricalParameters()
    second = GeometricalParameters()
    first.add_sensitive_detector(3, "a")
    assert second.sensitive_detectors == set()


def test_samurai_single_window():
    params = GeometricalParameters(
        faser2_magnet_option=MagnetOption.SAMURAI,
        magnet_z_position=250.0,
        magnet_total_size_z=40.0,
    )
    windows = params.magnet_windows()
    assert len(windows) == 1
    center, z_in, z_out = windows[0]
    assert center == 250.0
    assert math.isclose(z_out - z_in, 40.0)
    assert math.isclose((z_in + z_out) / 2, center)


def test_crystal_pulling_windows_are_symmetric():
    params = GeometricalParameters(
        faser2_magnet_option=MagnetOption.CRYSTAL_PULLING,
        magnet_z_position=500.0,
        faser2_magnet_length_z=30.0,
        faser2_magnet_spacing=12.0,
        n_faser2_magnets=3,
    )
    windows = params.magnet_windows()
    assert len(windows) == 3
    centers = [w[0] for w in windows]
    assert math.isclose(sum(centers) / 3, 500.0)
    for a, b in zip(centers, centers[1:]):
        assert math.isclose(b - a, 12.0 + 30.0)
    for center, z_in, z_out in windows:
        assert math.isclose(z_out - z_in, 30.0)
        assert math.isclose((z_in + z_out) / 2, center)


def test_crystal_pulling_without_magnets_is_empty():
    params = GeometricalParameters(faser2_magnet_option=MagnetOption.CRYSTAL_PULLING)
    assert params.magnet_windows() == []


def test_unknown_magnet_option_raises():
    params = GeometricalParameters(faser2_magnet_option=MagnetOption.UNKNOWN)
    with pytest.raises(ValueError):
        params.magnet_windows()