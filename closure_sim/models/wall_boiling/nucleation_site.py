"""Nucleation site density models [1/m^2]."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from ...config.model_configs import (
    KocamustafaogullariIshiiNucleationConfig,
    LemmertChawlaConfig,
)
from ...core.model import Model
from ...core.registry import ModelRegistry
from .state import BoilingState

__all__ = [
    "NucleationSiteModel",
    "nucleation_site_models",
    "LemmertChawla",
    "KocamustafaogullariIshiiNucleation",
]


class NucleationSiteModel(Model, ABC):
    def __init__(self, config: Any):
        super().__init__()
        self.read_coeffs(config)

    @abstractmethod
    def n_sites(self, state: BoilingState) -> np.ndarray:
        """Active nucleation sites per unit heated area."""


nucleation_site_models: ModelRegistry[NucleationSiteModel] = ModelRegistry(
    "nucleationSiteModel", NucleationSiteModel
)


@nucleation_site_models.register("LemmertChawla")
class LemmertChawla(NucleationSiteModel):
    """Lemmert and Chawla (1977) power law in the wall superheat."""

    config_model = LemmertChawlaConfig

    def n_sites(self, state: BoilingState) -> np.ndarray:
        superheat = np.maximum(state.wall_superheat, 0.0)
        return self.coeffs.Cn * 9.922e5 * (superheat / 10.0) ** 1.805


@nucleation_site_models.register("KocamustafaogullariIshii")
class KocamustafaogullariIshiiNucleation(NucleationSiteModel):
    """Kocamustafaogullari and Ishii (1983) site density.

    Uses the critical cavity radius for the local superheat relative to the
    departure diameter; zero where the wall is not superheated.
    """

    config_model = KocamustafaogullariIshiiNucleationConfig

    def n_sites(self, state: BoilingState) -> np.ndarray:
        d_dep = state.require("d_departure")
        superheat = state.wall_superheat
        active = superheat > 0.0
        safe_superheat = np.where(active, superheat, 1.0)

        r_crit = 2.0 * state.sigma * state.T_sat / (state.rho_v * state.L * safe_superheat)
        rho_star = state.rho_star
        f_rho = 2.157e-7 * rho_star**-3.2 * (1.0 + 0.0049 * rho_star) ** 4.13
        n = self.coeffs.Cn * f_rho * (2.0 * r_crit / d_dep) ** -4.4 / d_dep**2
        return np.where(active, n, 0.0)
