"""Cloud of point particles stored as parallel arrays."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import numpy as np

from ..constants import DEFAULT_CLOUD_NAME
from ..logging import ComponentType, get_component_logger
from ..mesh.maps import nearest_cells
from ..utils.exceptions import ValidationError
from .cloud import Cloud

if TYPE_CHECKING:
    from ..mesh.maps import DistributionMap, MeshMap, TopoChangeMap
    from ..mesh.mesh import Mesh

__all__ = ["ParticleCloud"]

logger = get_component_logger("particle_cloud", ComponentType.LAGRANGIAN)

_CORE_ARRAYS = ("positions", "cells", "origin_proc", "origin_id")


class ParticleCloud(Cloud):
    """Particles with a position, a host cell and named per-particle properties.

    ``(origin_proc, origin_id)`` identifies a particle for its whole life,
    across redistribution. Host cells are valid only between adaptation
    events; every adaptation message rebuilds them from the event's map.

    Args:
        mesh: Mesh the cloud is bound to
        name: Cloud name
        properties: Names of the per-particle properties carried with each particle
    """

    def __init__(
        self,
        mesh: "Mesh",
        name: str = DEFAULT_CLOUD_NAME,
        properties: Optional[List[str]] = None,
    ):
        super().__init__(mesh, name)
        self.positions = np.empty((0, 3))
        self.cells = np.empty(0, dtype=np.int64)
        self.origin_proc = np.empty(0, dtype=np.int64)
        self.origin_id = np.empty(0, dtype=np.int64)
        self.properties: Dict[str, np.ndarray] = {
            key: np.empty(0) for key in (properties or [])
        }
        self._next_id = 0

    @property
    def n_particles(self) -> int:
        return int(self.cells.size)

    def add_particles(
        self, positions: Any, cells: Any = None, **properties: Any
    ) -> np.ndarray:
        """Inject particles; host cells default to the cell with the nearest centre.

        Returns:
            Origin ids given to the new particles
        """
        positions = np.asarray(positions, dtype=float).reshape(-1, 3)
        n = positions.shape[0]
        if cells is None:
            cells = nearest_cells(self.mesh.cell_centres, positions)
        cells = np.asarray(cells, dtype=np.int64)
        if cells.shape != (n,) or (n and (cells.min() < 0 or cells.max() >= self.mesh.n_cells)):
            raise ValidationError(
                "cells must give a valid mesh cell for every particle",
                parameter_name="cells",
                parameter_value=cells.shape,
                expected_format=f"({n},) indices in [0, {self.mesh.n_cells})",
            )
        if set(properties) != set(self.properties):
            raise ValidationError(
                f"Particles of cloud '{self.name}' carry properties "
                f"{sorted(self.properties)}, got {sorted(properties)}",
                parameter_name="properties",
                parameter_value=sorted(properties),
            )

        ids = np.arange(self._next_id, self._next_id + n, dtype=np.int64)
        self._next_id += n
        self._append(
            {
                "positions": positions,
                "cells": cells,
                "origin_proc": np.full(n, self.mesh.comm.rank, dtype=np.int64),
                "origin_id": ids,
                "properties": {
                    key: np.broadcast_to(np.asarray(value, dtype=float), (n,)).copy()
                    for key, value in properties.items()
                },
            }
        )
        return ids

    # Packing

    def pack(self, mask: np.ndarray) -> Dict[str, Any]:
        """Copy the selected particles into a picklable payload."""
        return {
            "positions": self.positions[mask].copy(),
            "cells": self.cells[mask].copy(),
            "origin_proc": self.origin_proc[mask].copy(),
            "origin_id": self.origin_id[mask].copy(),
            "properties": {key: values[mask].copy() for key, values in self.properties.items()},
        }

    def unpack(self, payloads: List[Dict[str, Any]]) -> None:
        """Replace the particles with the concatenation of ``payloads``."""
        self._clear()
        for payload in payloads:
            self._append(payload)

    def _clear(self) -> None:
        keep = np.zeros(self.n_particles, dtype=bool)
        self._keep(keep)

    def _append(self, payload: Dict[str, Any]) -> None:
        for key in _CORE_ARRAYS:
            setattr(self, key, np.concatenate([getattr(self, key), payload[key]]))
        for key in self.properties:
            self.properties[key] = np.concatenate(
                [self.properties[key], payload["properties"][key]]
            )

    def _keep(self, mask: np.ndarray) -> None:
        for key in _CORE_ARRAYS:
            setattr(self, key, getattr(self, key)[mask])
        for key in self.properties:
            self.properties[key] = self.properties[key][mask]

    def _drop_unmapped(self, new_cells: np.ndarray, event: str) -> None:
        kept = new_cells >= 0
        lost = int((~kept).sum())
        if lost:
            logger.warning(
                "%s: %d particle(s) could not be mapped during %s and were removed",
                self.path,
                lost,
                event,
            )
        self.cells = new_cells
        self._keep(kept)

    # Mesh adaptation

    def topo_change(self, map: "TopoChangeMap") -> None:
        """Move each particle to the nearest cell created from its old cell."""
        children: Dict[int, List[int]] = {}
        for new_cell, old_cell in enumerate(map.cell_map):
            if old_cell >= 0:
                children.setdefault(int(old_cell), []).append(new_cell)

        centres = self.mesh.cell_centres
        new_cells = np.full(self.n_particles, -1, dtype=np.int64)
        for old_cell in np.unique(self.cells):
            candidates = children.get(int(old_cell))
            if not candidates:
                continue
            on_cell = np.nonzero(self.cells == old_cell)[0]
            candidates = np.asarray(candidates)
            nearest = nearest_cells(centres[candidates], self.positions[on_cell])
            new_cells[on_cell] = candidates[nearest]
        self._drop_unmapped(new_cells, "topology change")

    def map_mesh(self, map: "MeshMap") -> None:
        """Relocate every particle by position on the new mesh."""
        self._drop_unmapped(map.find_cells(self.positions), "mesh mapping")

    def distribute(self, map: "DistributionMap") -> None:
        """Send particles with their cells and renumber. Collective.

        Every particle ends up on exactly one rank: the one its host cell moved to.
        """
        comm = map.comm
        destinations = map.destinations[self.cells]
        send_position = map.send_index[self.cells]

        outgoing: Dict[int, Dict[str, Any]] = {}
        for rank in range(comm.size):
            if rank == comm.rank:
                continue
            mask = destinations == rank
            payload = self.pack(mask)
            payload["send_position"] = send_position[mask]
            outgoing[rank] = payload
        received = comm.exchange(outgoing)

        kept = self.pack(destinations == comm.rank)
        kept["cells"] = map.old_to_new[kept["cells"]]

        blocks: List[Dict[str, Any]] = []
        for rank in range(comm.size):
            if rank == comm.rank:
                blocks.append(kept)
            elif rank in received:
                payload = received[rank]
                payload["cells"] = map.construct_map[rank][payload.pop("send_position")]
                blocks.append(payload)

        n_before = self.n_particles
        self.unpack(blocks)
        logger.debug(
            "%s on rank %d: %d particle(s) before redistribution, %d after",
            self.path,
            comm.rank,
            n_before,
            self.n_particles,
        )

    def __repr__(self) -> str:
        return f"ParticleCloud(path={self.path!r}, n_particles={self.n_particles})"
