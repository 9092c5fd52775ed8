"""Gunn (1978) correlation for particles in dense suspensions."""

from __future__ import annotations

from typing import Any

import numpy as np

from ...config.model_configs import GunnConfig
from ...constants import DEFAULT_RESIDUAL_ALPHA
from ...phases.interface import PhaseInterface
from .base import HeatTransferModel, heat_transfer_models, read_only

__all__ = ["Gunn"]


@heat_transfer_models.register("Gunn")
class Gunn(HeatTransferModel):
    """Nusselt number corrected for the continuous phase fraction."""

    config_model = GunnConfig

    def __init__(self, config: Any, interface: PhaseInterface, register_object: bool):
        super().__init__(config, interface, register_object)
        self.read_coeffs(config)

    def K(self, residual_alpha: float = DEFAULT_RESIDUAL_ALPHA) -> np.ndarray:
        interface = self.dispersed_interface
        alpha_c = np.clip(interface.continuous.alpha.values, 0.0, 1.0)
        re = self._reynolds()
        pr3 = np.cbrt(self._prandtl())

        nu = (7.0 - 10.0 * alpha_c + 5.0 * alpha_c**2) * (
            1.0 + 0.7 * re**0.2 * pr3
        ) + (1.33 - 2.4 * alpha_c + 1.2 * alpha_c**2) * re**0.7 * pr3

        d = interface.dispersed.d.values
        return read_only(
            6.0
            * self._dispersed_fraction(residual_alpha)
            * interface.continuous.kappa.values
            * nu
            / d**2
        )
