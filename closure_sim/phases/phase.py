"""A named phase and its cell fields."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

import numpy as np

from ..mesh.fields import VolField
from ..utils.exceptions import StateError

if TYPE_CHECKING:
    from ..mesh.mesh import Mesh
    from .system import PhaseSystem

__all__ = ["Phase", "PHASE_QUANTITIES"]

PHASE_QUANTITIES = ("alpha", "T", "rho", "Cp", "kappa", "mu", "d")


class Phase:
    """Phase state on a mesh.

    Every quantity is a :class:`VolField` registered on the mesh as
    ``<quantity>.<phase>`` so it follows adaptation. ``U`` is a per-cell vector.
    """

    def __init__(
        self,
        name: str,
        mesh: "Mesh",
        *,
        alpha: Any,
        T: Any,
        rho: Any,
        Cp: Any,
        kappa: Any,
        mu: Any,
        d: Any,
        U: Any = None,
    ):
        self.name = name
        self.mesh = mesh
        self._system: Optional["PhaseSystem"] = None
        values = dict(alpha=alpha, T=T, rho=rho, Cp=Cp, kappa=kappa, mu=mu, d=d)
        for quantity in PHASE_QUANTITIES:
            field = VolField(
                f"{quantity}.{name}", mesh, values[quantity], register=True
            )
            setattr(self, quantity, field)
        self.U = VolField(
            f"U.{name}",
            mesh,
            np.zeros((mesh.n_cells, 3)) if U is None else U,
            register=True,
        )

    @property
    def system(self) -> "PhaseSystem":
        if self._system is None:
            raise StateError(
                f"Phase '{self.name}' does not belong to a phase system",
                current_state="detached",
                expected_state="added to a PhaseSystem",
                component_name=f"phase {self.name}",
            )
        return self._system

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Phase):
            return self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Phase({self.name!r})"
