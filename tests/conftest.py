"""
Shared fixtures: a small water/steam phase system on a row of cells and
wall-boiling configuration blocks.
"""

import copy
from typing import Any, Dict, Sequence

import numpy as np
import pytest

import closure_sim.models  # noqa: F401  registers every model family
from closure_sim.mesh import Mesh
from closure_sim.phases import Phase, PhaseSystem

__all__ = ["make_fluid", "WALL_BOILING_CONFIG", "WATER", "STEAM"]

WATER = dict(rho=958.0, Cp=4216.0, kappa=0.68, mu=2.8e-4, d=1e-3)
STEAM = dict(rho=0.6, Cp=2080.0, kappa=0.025, mu=1.2e-5, d=1e-3)

WALL_BOILING_CONFIG: Dict[str, Any] = {
    "type": "wallBoiling",
    "vapourPhase": "gas",
    "relax": 0.5,
    "heatTransferModel": {"type": "Gunn"},
    "partitioningModel": {"type": "Lavieville", "alphaCrit": 0.2},
    "nucleationSiteModel": {"type": "LemmertChawla"},
    "departureDiameterModel": {"type": "TolubinskiKostanchuk"},
    "departureFrequencyModel": {"type": "KocamustafaogullariIshii", "Cf": 1.18},
}

WALL_BOILING_INTERFACE = "gas_dispersedIn_liquid_inThe_liquid"


def make_fluid(
    n_cells: int = 4,
    names: Sequence[str] = ("gas", "liquid"),
    alpha_dispersed: Any = 0.1,
    T_liquid: Any = 370.0,
    T_sat: Any = 373.15,
    T_wall: Any = 383.15,
) -> PhaseSystem:
    """Build a two-phase system: ``names[0]`` has steam properties, ``names[1]`` water."""
    mesh = Mesh.uniform(n_cells, spacing=0.01)
    alpha_d = np.broadcast_to(np.asarray(alpha_dispersed, dtype=float), (n_cells,))
    dispersed = Phase(names[0], mesh, alpha=alpha_d, T=T_sat, **STEAM)
    continuous = Phase(names[1], mesh, alpha=1.0 - alpha_d, T=T_liquid, **WATER)
    return PhaseSystem(
        mesh,
        [dispersed, continuous],
        T_sat=T_sat,
        L=2.257e6,
        sigma=0.059,
        T_wall=T_wall,
        wall_area_density=100.0,
    )


@pytest.fixture
def fluid() -> PhaseSystem:
    return make_fluid()


@pytest.fixture
def wall_boiling_config() -> Dict[str, Any]:
    return copy.deepcopy(WALL_BOILING_CONFIG)


@pytest.fixture
def wall_boiling_interface(fluid):
    return fluid.interface(WALL_BOILING_INTERFACE)
