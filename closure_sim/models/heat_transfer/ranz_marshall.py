"""Ranz and Marshall (1952) correlation for a single sphere."""

from __future__ import annotations

from typing import Any

import numpy as np

from ...config.model_configs import RanzMarshallConfig
from ...constants import DEFAULT_RESIDUAL_ALPHA
from ...phases.interface import PhaseInterface
from .base import HeatTransferModel, heat_transfer_models, read_only

__all__ = ["RanzMarshall"]


@heat_transfer_models.register("RanzMarshall")
class RanzMarshall(HeatTransferModel):
    """Nu = 2 + 0.6 Re^1/2 Pr^1/3."""

    config_model = RanzMarshallConfig

    def __init__(self, config: Any, interface: PhaseInterface, register_object: bool):
        super().__init__(config, interface, register_object)
        self.read_coeffs(config)

    def K(self, residual_alpha: float = DEFAULT_RESIDUAL_ALPHA) -> np.ndarray:
        nu = 2.0 + 0.6 * np.sqrt(self._reynolds()) * np.cbrt(self._prandtl())
        interface = self.dispersed_interface
        d = interface.dispersed.d.values
        return read_only(
            6.0
            * self._dispersed_fraction(residual_alpha)
            * interface.continuous.kappa.values
            * nu
            / d**2
        )
