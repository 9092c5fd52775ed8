"""
Interfacial heat transfer model family.

Variants are built from ``(config, interface, register_object)`` and return a
volumetric heat transfer coefficient K [W/m^3/K] per cell. ``register_object``
asks a model that caches mesh-sized state to check itself into the mesh so the
state follows adaptation; stateless variants ignore it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

import numpy as np

from ...config.loader import as_dict
from ...constants import DEFAULT_RESIDUAL_ALPHA
from ...core.model import Model
from ...core.registry import ModelRegistry
from ...logging import ComponentType, get_component_logger
from ...phases.interface import (
    DispersedPhaseInterface,
    PhaseInterface,
    SidedPhaseInterface,
)
from ...phases.phase import Phase
from ...utils.exceptions import ConfigurationError

__all__ = [
    "HeatTransferModel",
    "heat_transfer_models",
    "generate_heat_transfer_models",
    "read_only",
]

logger = get_component_logger("heat_transfer", ComponentType.MODEL)


def read_only(values: np.ndarray) -> np.ndarray:
    view = values.view()
    view.flags.writeable = False
    return view


class HeatTransferModel(Model, ABC):
    """Base of interfacial heat transfer coefficient models."""

    def __init__(self, config: Any, interface: PhaseInterface, register_object: bool):
        super().__init__()
        self.interface = interface
        self.register_object = register_object

    @property
    def name(self) -> str:
        return f"{self.type_name}.{self.interface.name}"

    @property
    def dispersed_interface(self) -> DispersedPhaseInterface:
        if not isinstance(self.interface, DispersedPhaseInterface):
            raise ConfigurationError(
                f"{self.describe()} needs a dispersed interface "
                f"('a_dispersedIn_b'), got '{self.interface.name}'",
                config_parameter="interface",
                parameter_value=self.interface.name,
            )
        return self.interface

    @property
    def side(self) -> Phase:
        """Phase whose properties set the coefficient: the side, else the continuous phase."""
        if isinstance(self.interface, SidedPhaseInterface):
            return self.interface.side
        return self.dispersed_interface.continuous

    def _dispersed_fraction(self, residual_alpha: float) -> np.ndarray:
        return np.maximum(self.dispersed_interface.dispersed.alpha.values, residual_alpha)

    def _reynolds(self) -> np.ndarray:
        """Slip Reynolds number of the dispersed phase in the continuous phase."""
        d, c = self.dispersed_interface.dispersed, self.dispersed_interface.continuous
        slip = np.linalg.norm(d.U.values - c.U.values, axis=1)
        return c.rho.values * slip * d.d.values / c.mu.values

    def _prandtl(self) -> np.ndarray:
        c = self.dispersed_interface.continuous
        return c.Cp.values * c.mu.values / c.kappa.values

    @abstractmethod
    def K(self, residual_alpha: float = DEFAULT_RESIDUAL_ALPHA) -> np.ndarray:
        """Heat transfer coefficient per cell (read-only)."""


heat_transfer_models: ModelRegistry[HeatTransferModel] = ModelRegistry(
    "heatTransferModel", HeatTransferModel
)


def generate_heat_transfer_models(
    fluid: Any, config: Any, register_objects: bool = True
) -> Dict[str, HeatTransferModel]:
    """Build one heat transfer model per interface-named block of ``config``.

    Example:
        >>> models = generate_heat_transfer_models(fluid, {
        ...     "gas_dispersedIn_liquid_inThe_liquid": {"type": "RanzMarshall"},
        ... })
    """
    models: Dict[str, HeatTransferModel] = {}
    for interface_name, block in as_dict(config).items():
        interface = fluid.interface(interface_name)
        models[interface.name] = heat_transfer_models.new(
            block, interface, register_objects
        )
    logger.info("Generated %d heat transfer model(s)", len(models))
    return models
