"""Cell maps describing the three kinds of mesh adaptation.

``TopoChangeMap`` and ``MeshMap`` both carry a ``cell_map`` giving, for every new
cell, the old cell it takes its values from (``-1`` where there is none), so cell
fields are mapped the same way for both. ``DistributionMap`` records which rank
each local cell moves to and how arrivals are numbered on the receiving rank.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from ..interfaces.adaptation import Communicator
from ..utils.exceptions import ValidationError

__all__ = [
    "TopoChangeMap",
    "MeshMap",
    "DistributionMap",
    "map_field",
    "nearest_cells",
]

_NEAREST_CHUNK = 4096


def _as_index_array(values: Any, name: str) -> np.ndarray:
    array = np.asarray(values)
    if array.ndim != 1 or (array.size and not np.issubdtype(array.dtype, np.integer)):
        raise ValidationError(
            f"{name} must be a one-dimensional integer array",
            parameter_name=name,
            parameter_value=getattr(array, "shape", None),
            expected_format="1-D array of cell indices",
        )
    array = array.astype(np.int64, copy=False)
    if array.size and array.min() < -1:
        raise ValidationError(
            f"{name} entries must be cell indices or -1",
            parameter_name=name,
            parameter_value=int(array.min()),
            expected_format="indices >= -1",
        )
    return array


def _as_centres(values: Any, name: str) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValidationError(
            f"{name} must have shape (n, 3), got {array.shape}",
            parameter_name=name,
            parameter_value=array.shape,
            expected_format="(n, 3) float array",
        )
    return array


def map_field(cell_map: np.ndarray, values: np.ndarray, default: Any) -> np.ndarray:
    """Gather ``values`` through ``cell_map``; cells without a source get ``default``."""
    values = np.asarray(values)
    mapped = np.empty((cell_map.size,) + values.shape[1:], dtype=values.dtype)
    has_source = cell_map >= 0
    mapped[has_source] = values[cell_map[has_source]]
    mapped[~has_source] = default
    return mapped


def nearest_cells(
    source_centres: np.ndarray,
    positions: np.ndarray,
    tolerance: Optional[float] = None,
) -> np.ndarray:
    """Index of the nearest source centre for each position, ``-1`` beyond ``tolerance``."""
    if positions.shape[0] == 0:
        return np.empty(0, dtype=np.int64)
    if source_centres.shape[0] == 0:
        return np.full(positions.shape[0], -1, dtype=np.int64)
    result = np.empty(positions.shape[0], dtype=np.int64)
    for start in range(0, positions.shape[0], _NEAREST_CHUNK):
        chunk = positions[start : start + _NEAREST_CHUNK]
        dist2 = ((chunk[:, None, :] - source_centres[None, :, :]) ** 2).sum(axis=2)
        idx = dist2.argmin(axis=1)
        if tolerance is not None:
            best = dist2[np.arange(chunk.shape[0]), idx]
            idx = np.where(best <= tolerance * tolerance, idx, -1)
        result[start : start + chunk.shape[0]] = idx
    return result


@dataclass
class TopoChangeMap:
    """Local connectivity change.

    Attributes:
        cell_map: For each new cell, the old cell it was created from, or -1
        reverse_cell_map: For each old cell, a surviving new cell, or -1 if the
            cell was removed. Derived from ``cell_map`` when omitted.
        new_cell_centres: Geometry after the change, shape (n_new, 3)
        new_cell_volumes: Volumes after the change, shape (n_new,)
    """

    cell_map: np.ndarray
    reverse_cell_map: Optional[np.ndarray] = None
    new_cell_centres: Optional[np.ndarray] = None
    new_cell_volumes: Optional[np.ndarray] = None
    n_old_cells: Optional[int] = None

    def __post_init__(self) -> None:
        self.cell_map = _as_index_array(self.cell_map, "cell_map")
        if self.n_old_cells is None:
            self.n_old_cells = int(self.cell_map.max()) + 1 if self.cell_map.size else 0
        if self.reverse_cell_map is None:
            reverse = np.full(self.n_old_cells, -1, dtype=np.int64)
            new_ids = np.nonzero(self.cell_map >= 0)[0]
            # first new cell created from each old cell
            old_ids, first = np.unique(self.cell_map[new_ids], return_index=True)
            reverse[old_ids] = new_ids[first]
            self.reverse_cell_map = reverse
        else:
            self.reverse_cell_map = _as_index_array(
                self.reverse_cell_map, "reverse_cell_map"
            )
        if self.new_cell_centres is not None:
            self.new_cell_centres = _as_centres(self.new_cell_centres, "new_cell_centres")
            if self.new_cell_centres.shape[0] != self.n_new_cells:
                raise ValidationError(
                    "new_cell_centres must have one row per new cell",
                    parameter_name="new_cell_centres",
                    parameter_value=self.new_cell_centres.shape,
                    expected_format=f"({self.n_new_cells}, 3)",
                )
        if self.new_cell_volumes is not None:
            self.new_cell_volumes = np.asarray(self.new_cell_volumes, dtype=float)

    @property
    def n_new_cells(self) -> int:
        return int(self.cell_map.size)

    def map_field(self, values: np.ndarray, default: Any = 0.0) -> np.ndarray:
        return map_field(self.cell_map, values, default)

    def removed_cells(self) -> np.ndarray:
        return np.nonzero(self.reverse_cell_map < 0)[0]


@dataclass
class MeshMap:
    """Replacement of the mesh by a related but distinct one.

    Attributes:
        cell_map: For each target cell, the source cell it samples, or -1
        source_centres: Cell centres of the mesh being replaced
        target_centres: Cell centres of the replacement mesh
        target_volumes: Cell volumes of the replacement mesh
        tolerance: Largest distance at which a position still maps to a cell
    """

    cell_map: np.ndarray
    source_centres: np.ndarray
    target_centres: np.ndarray
    target_volumes: Optional[np.ndarray] = None
    tolerance: Optional[float] = None

    def __post_init__(self) -> None:
        self.cell_map = _as_index_array(self.cell_map, "cell_map")
        self.source_centres = _as_centres(self.source_centres, "source_centres")
        self.target_centres = _as_centres(self.target_centres, "target_centres")
        if self.cell_map.size != self.target_centres.shape[0]:
            raise ValidationError(
                "cell_map must have one entry per target cell",
                parameter_name="cell_map",
                parameter_value=self.cell_map.size,
                expected_format=f"{self.target_centres.shape[0]} entries",
            )

    @classmethod
    def from_nearest(
        cls,
        source_centres: Any,
        target_centres: Any,
        tolerance: Optional[float] = None,
        target_volumes: Any = None,
    ) -> "MeshMap":
        """Map each target cell to the source cell with the nearest centre."""
        source = _as_centres(source_centres, "source_centres")
        target = _as_centres(target_centres, "target_centres")
        return cls(
            cell_map=nearest_cells(source, target, tolerance),
            source_centres=source,
            target_centres=target,
            target_volumes=target_volumes,
            tolerance=tolerance,
        )

    @property
    def n_new_cells(self) -> int:
        return int(self.cell_map.size)

    def map_field(self, values: np.ndarray, default: Any = 0.0) -> np.ndarray:
        return map_field(self.cell_map, values, default)

    def find_cells(self, positions: Any) -> np.ndarray:
        """Target cell containing each position (nearest centre), -1 if unmapped."""
        return nearest_cells(
            self.target_centres, _as_centres(positions, "positions"), self.tolerance
        )


@dataclass
class DistributionMap:
    """Reassignment of cell ownership between ranks.

    New local numbering on every rank is: cells received from rank 0, then from
    rank 1, and so on, each block in the sender's original order. A rank's own
    kept cells appear in the block of its own rank.

    Attributes:
        comm: Communicator of the run
        send_map: Destination rank -> old local cell indices sent there
        construct_map: Source rank -> new local indices of the cells received
        old_to_new: New local index of each kept old cell, -1 for departing ones
        send_index: Position of each old cell within its destination's send list
        n_new_cells: Number of local cells after redistribution
    """

    comm: Communicator
    destinations: np.ndarray
    send_map: Dict[int, np.ndarray] = field(default_factory=dict)
    construct_map: Dict[int, np.ndarray] = field(default_factory=dict)
    old_to_new: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.int64))
    send_index: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.int64))
    n_new_cells: int = 0

    @classmethod
    def from_destinations(cls, comm: Communicator, cell_destinations: Any) -> "DistributionMap":
        """Build the maps from the destination rank of every local cell.

        Collective: every rank of ``comm`` must call it.
        """
        destinations = _as_index_array(cell_destinations, "cell_destinations")
        if destinations.size and (destinations.min() < 0 or destinations.max() >= comm.size):
            raise ValidationError(
                f"cell_destinations must name ranks in [0, {comm.size})",
                parameter_name="cell_destinations",
                expected_format=f"ranks 0..{comm.size - 1}",
            )

        send_map = {
            rank: np.nonzero(destinations == rank)[0] for rank in range(comm.size)
        }
        send_index = np.empty(destinations.size, dtype=np.int64)
        for indices in send_map.values():
            send_index[indices] = np.arange(indices.size)

        received_counts = comm.exchange(
            {rank: int(indices.size) for rank, indices in send_map.items()}
        )

        construct_map: Dict[int, np.ndarray] = {}
        offset = 0
        for rank in range(comm.size):
            count = int(received_counts.get(rank, 0))
            construct_map[rank] = np.arange(offset, offset + count, dtype=np.int64)
            offset += count

        old_to_new = np.full(destinations.size, -1, dtype=np.int64)
        kept = send_map[comm.rank]
        old_to_new[kept] = construct_map[comm.rank]

        return cls(
            comm=comm,
            destinations=destinations,
            send_map=send_map,
            construct_map=construct_map,
            old_to_new=old_to_new,
            send_index=send_index,
            n_new_cells=offset,
        )

    @property
    def n_old_cells(self) -> int:
        return int(self.destinations.size)

    def distribute_array(self, values: Any) -> np.ndarray:
        """Send per-cell ``values`` to their new owners and assemble them locally.

        Collective: every rank of the communicator must call it.
        """
        values = np.asarray(values)
        if values.shape[:1] != (self.n_old_cells,):
            raise ValidationError(
                "distribute_array needs one value per old local cell",
                parameter_name="values",
                parameter_value=values.shape,
                expected_format=f"leading dimension {self.n_old_cells}",
            )
        received = self.comm.exchange(
            {rank: values[indices] for rank, indices in self.send_map.items()}
        )
        result = np.empty((self.n_new_cells,) + values.shape[1:], dtype=values.dtype)
        for rank, slots in self.construct_map.items():
            if slots.size:
                result[slots] = received[rank]
        return result

    def ranks(self) -> List[int]:
        return list(range(self.comm.size))
