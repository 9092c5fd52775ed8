"""The set of phases in a region and the wall and saturation state they share."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from ..constants import GRAVITY
from ..mesh.fields import VolField
from ..mesh.mesh import Mesh, Time
from ..utils.exceptions import ConfigurationError
from .interface import PhaseInterface, phase_interface_from_name
from .phase import Phase

__all__ = ["PhaseSystem"]


class PhaseSystem:
    """Phases on a mesh plus saturation properties and the heated surface.

    Args:
        mesh: Mesh of the region
        phases: Phases, all on ``mesh``
        T_sat: Saturation temperature [K], uniform or per cell
        L: Latent heat of vaporisation [J/kg]
        sigma: Surface tension [N/m]
        g: Gravitational acceleration magnitude [m/s^2]
        T_wall: Heated surface temperature [K], uniform or per cell
        wall_area_density: Heated surface area per unit cell volume [1/m]
    """

    def __init__(
        self,
        mesh: Mesh,
        phases: Iterable[Phase],
        *,
        T_sat: Any,
        L: float,
        sigma: float,
        g: float = GRAVITY,
        T_wall: Any,
        wall_area_density: Any = 1.0,
    ):
        self.mesh = mesh
        self._phases: Dict[str, Phase] = {}
        for phase in phases:
            if phase.name in self._phases:
                raise ConfigurationError(
                    f"Duplicate phase '{phase.name}'",
                    config_parameter="phases",
                    parameter_value=phase.name,
                )
            phase._system = self
            self._phases[phase.name] = phase
        self.T_sat = VolField("Tsat", mesh, T_sat, register=True)
        self.T_wall = VolField("Tw", mesh, T_wall, register=True)
        self.wall_area_density = VolField(
            "wallAreaDensity", mesh, wall_area_density, register=True
        )
        self.L = float(L)
        self.sigma = float(sigma)
        self.g = float(g)

    @property
    def time(self) -> Time:
        return self.mesh.time

    def phases(self) -> List[Phase]:
        return list(self._phases.values())

    def phase(self, name: str) -> Phase:
        try:
            return self._phases[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown phase '{name}'. Phases: {sorted(self._phases)}",
                config_parameter="phase",
                parameter_value=name,
                valid_options={key: "" for key in self._phases},
            ) from None

    def interface(self, name: str) -> PhaseInterface:
        return phase_interface_from_name(self, name)

    def __repr__(self) -> str:
        return f"PhaseSystem(phases={list(self._phases)})"
