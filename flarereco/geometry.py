"""Geometrical parameters of the forward detectors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

Vector3 = tuple[float, float, float]


class TPCMaterialOption(Enum):
    """Filling of the TPC volume."""

    LIQUID_ARGON = "LiquidArgon"
    LIQUID_KRYPTON = "LiquidKrypton"

    @classmethod
    def from_string(cls, value: str) -> TPCMaterialOption:
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"unknown TPC material option: {value!r}") from None


class TPCConfigOption(Enum):
    """Module layout of the TPC."""

    SINGLE = "Single"
    THREE_BY_SEVEN = "ThreeBySeven"

    @classmethod
    def from_string(cls, value: str) -> TPCConfigOption:
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"unknown TPC configuration option: {value!r}") from None


class MagnetOption(Enum):
    """Design of the FASER2 spectrometer magnet."""

    SAMURAI = "SAMURAI"
    CRYSTAL_PULLING = "CrystalPulling"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str) -> MagnetOption:
        for option in (cls.SAMURAI, cls.CRYSTAL_PULLING):
            if option.value == value:
                return option
        return cls.UNKNOWN


@dataclass
class GeometricalParameters:
    """Configuration options and sizes shared by the reconstruction."""

    # experimental hall
    hall_head_distance: float = 0.0
    hall_offset_x: float = 0.0
    hall_offset_y: float = 0.0

    # FLArE TPC
    tpc_material_option: TPCMaterialOption = TPCMaterialOption.LIQUID_ARGON
    tpc_config_option: TPCConfigOption = TPCConfigOption.SINGLE
    tpc_size_x: float = 0.0
    tpc_size_y: float = 0.0
    tpc_size_z: float = 0.0
    tpc_fid_vol_size: Vector3 = (0.0, 0.0, 0.0)
    tpc_insulation_thickness: float = 0.0
    had_cal_length: float = 0.0
    muon_catcher_length: float = 0.0
    flare_position: Vector3 = (0.0, 0.0, 0.0)

    # BabyMIND
    use_baby_mind: bool = False
    baby_mind_magnet_plate_thickness: float = 0.0
    baby_mind_magnet_plate_size_x: float = 0.0
    baby_mind_magnet_plate_size_y: float = 0.0
    baby_mind_magnet_central_plate_y: float = 0.0
    baby_mind_slit_size_x: float = 0.0
    baby_mind_slit_size_y: float = 0.0
    baby_mind_field_strength: float = 0.0
    baby_mind_n_vertical_bars: int = 0
    baby_mind_n_horizontal_bars: int = 0
    baby_mind_bar_thickness: float = 0.0
    baby_mind_vertical_bar_size_x: float = 0.0
    baby_mind_vertical_bar_size_y: float = 0.0
    baby_mind_horizontal_bar_size_x: float = 0.0
    baby_mind_horizontal_bar_size_y: float = 0.0
    baby_mind_total_size_z: float = 0.0
    baby_mind_magnet_to_scin_spacing: float = 0.0
    baby_mind_magnet_to_magnet_spacing: float = 0.0
    baby_mind_block_to_block_spacing: float = 0.0
    baby_mind_block_padding: float = 0.0
    baby_mind_block_sequence: str = ""

    # FASER2 spectrometer
    faser2_magnet_option: MagnetOption = MagnetOption.SAMURAI
    faser2_magnet_field: float = 0.0
    magnet_total_size_z: float = 0.0
    tracking_station_total_size_z: float = 0.0
    magnet_z_position: float = 0.0
    faser2_total_size_z: float = 0.0
    # SAMURAI design
    faser2_magnet_window_x: float = 0.0
    faser2_magnet_window_y: float = 0.0
    faser2_magnet_window_z: float = 0.0
    faser2_magnet_yoke_thick_x: float = 0.0
    faser2_magnet_yoke_thick_y: float = 0.0
    # crystal-pulling design
    faser2_magnet_inner_r: float = 0.0
    faser2_magnet_outer_r: float = 0.0
    faser2_magnet_length_z: float = 0.0
    n_faser2_magnets: int = 0
    faser2_magnet_gap: float = 0.0
    faser2_magnet_spacing: float = 0.0
    # tracking stations
    n_tracking_stations: int = 0
    n_scintillator_bars_y: int = 0
    n_scintillator_bars_x: int = 0
    scintillator_thickness: float = 0.0
    tracking_station_gap: float = 0.0
    faser2_position: Vector3 = (0.0, 0.0, 0.0)

    # FASERnu2 emulsion detector
    fasernu2_total_size_z: float = 0.0
    n_emulsion_tungsten_layers: int = 0
    tungsten_thickness: float = 0.0
    emulsion_thickness: float = 0.0
    emulsion_tungsten_size_x: float = 0.0
    emulsion_tungsten_size_y: float = 0.0
    veto_interface_size_x: float = 0.0
    veto_interface_size_y: float = 0.0
    veto_interface_size_z: float = 0.0
    fasernu2_position: Vector3 = (0.0, 0.0, 0.0)

    # FORMOSA
    formosa_total_size_z: float = 0.0
    n_scin_bars_x: int = 0
    n_scin_bars_y: int = 0
    scintillator_bar_size_x: float = 0.0
    scintillator_bar_size_y: float = 0.0
    scintillator_bar_size_z: float = 0.0
    n_scintillator_modules: int = 0
    pmt_size_spacing: float = 0.0
    formosa_position: Vector3 = (0.0, 0.0, 0.0)

    # sensitive detectors
    sensitive_detectors: set[tuple[int, str]] = field(default_factory=set)

    def tpc_size(self) -> Vector3:
        """Size of the TPC along x, y and z."""
        return (self.tpc_size_x, self.tpc_size_y, self.tpc_size_z)

    def add_sensitive_detector(self, idx: int, name: str) -> None:
        """Register a sensitive detector by index and name."""
        self.sensitive_detectors.add((idx, name))

    def magnet_windows(self) -> list[tuple[float, float, float]]:
        """Return ``(center, z_in, z_out)`` for each spectrometer magnet.

        Raises ValueError when the magnet design is unknown.
        """
        option = self.faser2_magnet_option
        if option is MagnetOption.SAMURAI:
            center = self.magnet_z_position
            half = self.magnet_total_size_z / 2.0
            return [(center, center - half, center + half)]
        if option is MagnetOption.CRYSTAL_PULLING:
            length = self.faser2_magnet_length_z
            pitch = self.faser2_magnet_spacing + length
            n = self.n_faser2_magnets
            windows = []
            for i in range(n):
                center = self.magnet_z_position + (i - 0.5 * (n - 1)) * pitch
                windows.append((center, center - length / 2.0, center + length / 2.0))
            return windows
        raise ValueError("unknown FASER2 spectrometer magnet option")