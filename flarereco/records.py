"""Truth records for primary particles and neutrino interactions."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class FPFParticle:
    """A primary particle as stored in the event record.

    ``prong_type`` is 0 for the final-state lepton, 1 for an original primary,
    2 for decay products of a short-lived final-state lepton, 3 for decay
    products of a primary pi0 and 4 for decay products of a tau-decay pi0.
    """

    pdg: int = 0
    pid: int = 0
    tid: int = 0
    prong_idx: int = 0
    prong_type: int = 0
    mass: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    vz: float = 0.0
    t: float = 0.0
    px: float = 0.0
    py: float = 0.0
    pz: float = 0.0
    e: float = 0.0

    def p(self) -> float:
        """Magnitude of the three-momentum."""
        return math.sqrt(self.px * self.px + self.py * self.py + self.pz * self.pz)


@dataclass
class FPFNeutrino:
    """Truth information of a generated neutrino interaction."""

    pdg: int = 0
    vx: float = 0.0
    vy: float = 0.0
    vz: float = 0.0
    t: float = 0.0
    px: float = 0.0
    py: float = 0.0
    pz: float = 0.0
    e: float = 0.0
    idx: int = 0
    int_type: int = 0
    scattering_type: int = 0
    w: float = 0.0
    fsl_pdg: int = 0
    fsl_px: float = 0.0
    fsl_py: float = 0.0
    fsl_pz: float = 0.0
    fsl_e: float = 0.0