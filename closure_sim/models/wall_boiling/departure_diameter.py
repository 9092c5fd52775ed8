"""Bubble departure diameter models [m]."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from ...config.model_configs import (
    KocamustafaogullariIshiiDiameterConfig,
    TolubinskiKostanchukConfig,
)
from ...core.model import Model
from ...core.registry import ModelRegistry
from .state import BoilingState

__all__ = [
    "DepartureDiameterModel",
    "departure_diameter_models",
    "TolubinskiKostanchuk",
    "KocamustafaogullariIshiiDiameter",
]


class DepartureDiameterModel(Model, ABC):
    def __init__(self, config: Any):
        super().__init__()
        self.read_coeffs(config)

    @abstractmethod
    def d_departure(self, state: BoilingState) -> np.ndarray: ...


departure_diameter_models: ModelRegistry[DepartureDiameterModel] = ModelRegistry(
    "departureDiameterModel", DepartureDiameterModel
)


@departure_diameter_models.register("TolubinskiKostanchuk")
class TolubinskiKostanchuk(DepartureDiameterModel):
    """Tolubinski and Kostanchuk (1970) subcooling correlation, clipped to [dMin, dMax]."""

    config_model = TolubinskiKostanchukConfig

    def d_departure(self, state: BoilingState) -> np.ndarray:
        c = self.coeffs
        subcooling = state.T_sat - state.T_l
        return np.clip(c.dRef * np.exp(-subcooling / 45.0), c.dMin, c.dMax)


@departure_diameter_models.register("KocamustafaogullariIshii")
class KocamustafaogullariIshiiDiameter(DepartureDiameterModel):
    """Kocamustafaogullari and Ishii (1983) force balance with contact angle phi."""

    config_model = KocamustafaogullariIshiiDiameterConfig

    def d_departure(self, state: BoilingState) -> np.ndarray:
        capillary_length = np.sqrt(state.sigma / (state.g * (state.rho_l - state.rho_v)))
        return (
            0.0012
            * state.rho_star**0.9
            * 0.0208
            * self.coeffs.phi
            * capillary_length
        )
