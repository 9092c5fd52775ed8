"""
Mesh and time of a region.

The mesh only stores what the closure models need from a discretisation: cell
centres and volumes, the run time and the communicator. It is the root object
registry of the region and the dispatcher of the three adaptation messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from ..constants import DEFAULT_REGION_NAME
from ..core.object_registry import ObjectRegistry
from ..interfaces.adaptation import Communicator, MeshAdaptive
from ..logging import ComponentType, get_component_logger
from ..utils.exceptions import ValidationError
from .maps import DistributionMap, MeshMap, TopoChangeMap, _as_centres
from .parallel import SerialCommunicator

__all__ = ["Mesh", "Time"]

logger = get_component_logger("mesh", ComponentType.MESH)


@dataclass
class Time:
    value: float = 0.0
    delta_t: float = 1.0
    time_index: int = 0

    def increment(self) -> "Time":
        self.value += self.delta_t
        self.time_index += 1
        return self


class Mesh(ObjectRegistry):
    """Cell geometry of one region plus its registry of mesh-bound objects.

    Args:
        cell_centres: Array of shape (n_cells, 3)
        cell_volumes: Array of shape (n_cells,), unit volumes if omitted
        name: Region name
        time: Run time shared by everything on the mesh
        comm: Communicator, serial if omitted
    """

    def __init__(
        self,
        cell_centres: Any,
        cell_volumes: Any = None,
        *,
        name: str = DEFAULT_REGION_NAME,
        time: Optional[Time] = None,
        comm: Optional[Communicator] = None,
    ):
        super().__init__(name)
        self.time = time if time is not None else Time()
        self.comm = comm if comm is not None else SerialCommunicator()
        self._set_geometry(_as_centres(cell_centres, "cell_centres"), cell_volumes)

    @classmethod
    def uniform(cls, n_cells: int, spacing: float = 1.0, **kwargs: Any) -> "Mesh":
        """Row of ``n_cells`` cubic cells along x."""
        centres = np.zeros((n_cells, 3))
        centres[:, 0] = (np.arange(n_cells) + 0.5) * spacing
        return cls(centres, np.full(n_cells, spacing**3), **kwargs)

    def _set_geometry(self, centres: np.ndarray, volumes: Any) -> None:
        if volumes is None:
            volumes = np.ones(centres.shape[0])
        volumes = np.asarray(volumes, dtype=float)
        if volumes.shape != (centres.shape[0],):
            raise ValidationError(
                "cell_volumes must have one entry per cell",
                parameter_name="cell_volumes",
                parameter_value=volumes.shape,
                expected_format=f"({centres.shape[0]},)",
            )
        self.cell_centres = centres
        self.cell_volumes = volumes

    @property
    def n_cells(self) -> int:
        return int(self.cell_centres.shape[0])

    # Adaptation

    def _check_sources(self, cell_map: np.ndarray, event: str) -> None:
        """Source indices of ``cell_map`` must name cells of the current mesh."""
        if cell_map.size and cell_map.max() >= self.n_cells:
            raise ValidationError(
                f"{event} map of {self.name} refers to cell {int(cell_map.max())}, "
                f"but the mesh has {self.n_cells} cells",
                parameter_name="cell_map",
                parameter_value=int(cell_map.max()),
                expected_format=f"indices in [-1, {self.n_cells})",
            )

    def topo_change(self, map: TopoChangeMap) -> None:
        """Apply a local topology change and notify every registered object."""
        self._check_sources(map.cell_map, "Topology change")
        centres = map.new_cell_centres
        if centres is None:
            centres = map.map_field(self.cell_centres, np.nan)
        volumes = map.new_cell_volumes
        if volumes is None:
            volumes = map.map_field(self.cell_volumes, 0.0)
        self._set_geometry(centres, volumes)
        logger.info("Topology change on %s: %d cells", self.name, self.n_cells)
        self._notify(self, "topo_change", map)

    def map_mesh(self, map: MeshMap) -> None:
        """Replace the geometry by the target of ``map`` and notify."""
        self._check_sources(map.cell_map, "Mesh-to-mesh")
        self._set_geometry(map.target_centres, map.target_volumes)
        logger.info("Mapped %s onto a new mesh of %d cells", self.name, self.n_cells)
        self._notify(self, "map_mesh", map)

    def distribute(self, map: DistributionMap) -> None:
        """Redistribute cells between ranks and notify. Collective."""
        self._set_geometry(
            map.distribute_array(self.cell_centres),
            map.distribute_array(self.cell_volumes),
        )
        logger.info(
            "Redistributed %s on rank %d: %d cells", self.name, self.comm.rank, self.n_cells
        )
        self._notify(self, "distribute", map)

    @classmethod
    def _notify(cls, registry: ObjectRegistry, method: str, map: Any) -> None:
        for obj in registry.objects():
            if isinstance(obj, MeshAdaptive):
                getattr(obj, method)(map)
            if isinstance(obj, ObjectRegistry):
                cls._notify(obj, method, map)

    def __repr__(self) -> str:
        return f"Mesh(name={self.name!r}, n_cells={self.n_cells}, objects={self.names()})"
