"""Per-cell inputs shared by the wall-boiling sub-models."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from ...utils.exceptions import StateError

__all__ = ["BoilingState"]


@dataclass(frozen=True)
class BoilingState:
    """Liquid, vapour and wall state seen by the sub-models in one evaluation.

    Array entries have one value per cell. The three bubble quantities are
    filled in as the owning model computes them, in dependency order: departure
    diameter, departure frequency, nucleation site density.

    Attributes:
        alpha_l: Liquid volume fraction
        T_l: Liquid temperature [K]
        T_sat: Saturation temperature [K]
        T_w: Heated surface temperature [K]
        rho_l: Liquid density [kg/m^3]
        rho_v: Vapour density [kg/m^3]
        kappa_l: Liquid thermal conductivity [W/m/K]
        Cp_l: Liquid heat capacity [J/kg/K]
        L: Latent heat [J/kg]
        sigma: Surface tension [N/m]
        g: Gravitational acceleration [m/s^2]
    """

    alpha_l: np.ndarray
    T_l: np.ndarray
    T_sat: np.ndarray
    T_w: np.ndarray
    rho_l: np.ndarray
    rho_v: np.ndarray
    kappa_l: np.ndarray
    Cp_l: np.ndarray
    L: float
    sigma: float
    g: float
    d_departure: Optional[np.ndarray] = None
    f_departure: Optional[np.ndarray] = None
    n_sites: Optional[np.ndarray] = None

    def require(self, quantity: str) -> np.ndarray:
        """Return a bubble quantity, raising if it has not been computed yet."""
        value = getattr(self, quantity)
        if value is None:
            raise StateError(
                f"Wall-boiling quantity '{quantity}' is needed before it was computed",
                current_state=f"{quantity} missing",
                expected_state=f"{quantity} computed",
                component_name="BoilingState",
            )
        return value

    def with_values(self, **values: np.ndarray) -> "BoilingState":
        return replace(self, **values)

    @property
    def rho_star(self) -> np.ndarray:
        """Density ratio (rho_l - rho_v)/rho_v."""
        return (self.rho_l - self.rho_v) / self.rho_v

    @property
    def wall_superheat(self) -> np.ndarray:
        return self.T_w - self.T_sat
