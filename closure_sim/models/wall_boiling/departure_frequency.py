"""Bubble departure frequency models [1/s]."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from ...config.model_configs import ColeConfig, KocamustafaogullariIshiiFrequencyConfig
from ...core.model import Model
from ...core.registry import ModelRegistry
from .state import BoilingState

__all__ = [
    "DepartureFrequencyModel",
    "departure_frequency_models",
    "Cole",
    "KocamustafaogullariIshiiFrequency",
]


class DepartureFrequencyModel(Model, ABC):
    def __init__(self, config: Any):
        super().__init__()
        self.read_coeffs(config)

    @abstractmethod
    def f_departure(self, state: BoilingState) -> np.ndarray:
        """Departure frequency for the already computed departure diameter."""


departure_frequency_models: ModelRegistry[DepartureFrequencyModel] = ModelRegistry(
    "departureFrequencyModel", DepartureFrequencyModel
)


@departure_frequency_models.register("Cole")
class Cole(DepartureFrequencyModel):
    """Cole (1960) buoyancy-driven frequency."""

    config_model = ColeConfig

    def f_departure(self, state: BoilingState) -> np.ndarray:
        d = state.require("d_departure")
        return np.sqrt(4.0 * state.g * (state.rho_l - state.rho_v) / (3.0 * d * state.rho_l))


@departure_frequency_models.register("KocamustafaogullariIshii")
class KocamustafaogullariIshiiFrequency(DepartureFrequencyModel):
    """Kocamustafaogullari and Ishii (1983) frequency, coefficient Cf."""

    config_model = KocamustafaogullariIshiiFrequencyConfig

    def f_departure(self, state: BoilingState) -> np.ndarray:
        d = state.require("d_departure")
        drho = state.rho_l - state.rho_v
        return self.coeffs.Cf / d * (state.sigma * state.g * drho / state.rho_l**2) ** 0.25
