"""Flame-wrinkling (Xi) model family."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from ...core.model import Model
from ...core.registry import ModelRegistry
from ...mesh.fields import VolField

__all__ = ["XiModel", "xi_models"]


class XiModel(Model, ABC):
    """Base of flame-wrinkling models.

    Variants are built from ``(config, thermo, turbulence, Su)``. ``thermo`` and
    ``turbulence`` are opaque context handed through to variants that need them;
    ``Su`` is the laminar flame speed field and fixes the mesh the model lives on.
    The ``Xi`` field is registered on that mesh as ``Xi.<type>.<Su name>``, so it
    follows mesh adaptation until :meth:`close` is called.
    """

    def __init__(self, config: Any, thermo: Any, turbulence: Any, Su: VolField):
        super().__init__()
        self.thermo = thermo
        self.turbulence = turbulence
        self.Su = Su
        self.mesh = Su.mesh
        self._Xi = VolField(
            f"Xi.{self.type_name}.{Su.name}", self.mesh, 1.0, register=True, default_value=1.0
        )

    @property
    def field_name(self) -> str:
        """Name the Xi field is registered under on the mesh."""
        return self._Xi.name

    def close(self) -> None:
        """Check the Xi field out of the mesh; the model stops following adaptation."""
        if self.mesh.found(self._Xi.name):
            self.mesh.check_out(self._Xi.name)

    def Xi(self) -> np.ndarray:
        """Flame-wrinkling factor per cell (read-only)."""
        return self._Xi.read_only()

    @abstractmethod
    def correct(self) -> None:
        """Update Xi for the current time step."""


xi_models: ModelRegistry[XiModel] = ModelRegistry("XiModel", XiModel)
