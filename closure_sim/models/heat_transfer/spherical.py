"""Conduction-limited heat transfer inside or around a sphere (Nu = 10)."""

from __future__ import annotations

from typing import Any

import numpy as np

from ...config.model_configs import SphericalConfig
from ...constants import DEFAULT_RESIDUAL_ALPHA
from ...phases.interface import PhaseInterface
from .base import HeatTransferModel, heat_transfer_models, read_only

__all__ = ["Spherical"]


@heat_transfer_models.register("spherical")
class Spherical(HeatTransferModel):
    """Spherical-particle model, K = 60 alpha kappa / d^2 on the side phase."""

    config_model = SphericalConfig

    def __init__(self, config: Any, interface: PhaseInterface, register_object: bool):
        super().__init__(config, interface, register_object)
        self.read_coeffs(config)

    def K(self, residual_alpha: float = DEFAULT_RESIDUAL_ALPHA) -> np.ndarray:
        d = self.dispersed_interface.dispersed.d.values
        return read_only(
            60.0 * self._dispersed_fraction(residual_alpha) * self.side.kappa.values / d**2
        )
