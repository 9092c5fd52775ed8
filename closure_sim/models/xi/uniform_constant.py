"""Uniform constant flame-wrinkling model."""

from __future__ import annotations

from typing import Any

from ...config.model_configs import UniformConstantConfig
from ...mesh.fields import VolField
from .base import XiModel, xi_models

__all__ = ["UniformConstant"]


@xi_models.register("uniformConstant")
class UniformConstant(XiModel):
    """Xi fixed to a configured value everywhere."""

    config_model = UniformConstantConfig

    def __init__(self, config: Any, thermo: Any, turbulence: Any, Su: VolField):
        # reject a bad block before the Xi field is checked into the mesh
        self.validate_config(config)
        super().__init__(config, thermo, turbulence, Su)
        self.read_coeffs(config)

    def correct(self) -> None:
        pass

    def read_coeffs(self, config: Any) -> bool:
        changed = super().read_coeffs(config)
        # cells created by adaptation without a source cell take the constant too
        self._Xi.default_value = self.coeffs.Xi
        if changed:
            self._Xi.assign(self.coeffs.Xi)
        return changed
