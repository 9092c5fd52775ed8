"""Heat transfer at a fixed Nusselt number."""

from __future__ import annotations

from typing import Any

import numpy as np

from ...config.model_configs import ConstantNusseltConfig
from ...constants import DEFAULT_RESIDUAL_ALPHA
from ...phases.interface import PhaseInterface
from .base import HeatTransferModel, heat_transfer_models, read_only

__all__ = ["ConstantNusselt"]


@heat_transfer_models.register("constantNu")
class ConstantNusselt(HeatTransferModel):
    """K = 6 alpha kappa Nu / d^2 on the side phase with a configured Nu."""

    config_model = ConstantNusseltConfig

    def __init__(self, config: Any, interface: PhaseInterface, register_object: bool):
        super().__init__(config, interface, register_object)
        self.read_coeffs(config)

    def K(self, residual_alpha: float = DEFAULT_RESIDUAL_ALPHA) -> np.ndarray:
        d = self.dispersed_interface.dispersed.d.values
        return read_only(
            6.0
            * self._dispersed_fraction(residual_alpha)
            * self.side.kappa.values
            * self.coeffs.Nu
            / d**2
        )
