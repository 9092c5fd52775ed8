"""Cell-centred fields."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Union

import numpy as np

from ..utils.exceptions import ValidationError

if TYPE_CHECKING:
    from .maps import DistributionMap, MeshMap, TopoChangeMap
    from .mesh import Mesh

__all__ = ["VolField"]


class VolField:
    """Named array with one value (or row) per mesh cell.

    Args:
        name: Field name; the registry key when ``register`` is set
        mesh: Mesh the field is defined on
        value: Uniform initial value or an array with one entry per cell
        register: Check the field into ``mesh`` so it follows adaptation
        default_value: Value given to cells without a source during adaptation
    """

    def __init__(
        self,
        name: str,
        mesh: "Mesh",
        value: Union[float, np.ndarray] = 0.0,
        *,
        register: bool = False,
        default_value: float = 0.0,
    ):
        self.name = name
        self.mesh = mesh
        self.default_value = default_value
        self._values = self._coerce(value)
        if register:
            mesh.check_in(self, name)

    def _coerce(self, value: Union[float, np.ndarray]) -> np.ndarray:
        n_cells = self.mesh.n_cells
        array = np.asarray(value, dtype=float)
        if array.ndim == 0:
            return np.full(n_cells, float(array))
        if array.shape[0] != n_cells:
            raise ValidationError(
                f"Field '{self.name}' needs {n_cells} values, got {array.shape[0]}",
                parameter_name=self.name,
                parameter_value=array.shape,
                expected_format=f"leading dimension {n_cells}",
            )
        return array.copy()

    @property
    def values(self) -> np.ndarray:
        """Writable storage; owners only."""
        return self._values

    def assign(self, value: Union[float, np.ndarray]) -> None:
        array = np.asarray(value, dtype=float)
        if array.ndim == 0:
            self._values[...] = float(array)
        else:
            self._values = self._coerce(array)

    def read_only(self) -> np.ndarray:
        view = self._values.view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return int(self._values.shape[0])

    def __array__(self, dtype: Any = None, copy: Any = None) -> np.ndarray:
        return np.asarray(self.read_only(), dtype=dtype)

    # Mesh adaptation

    def topo_change(self, map: "TopoChangeMap") -> None:
        self._values = map.map_field(self._values, self.default_value)

    def map_mesh(self, map: "MeshMap") -> None:
        self._values = map.map_field(self._values, self.default_value)

    def distribute(self, map: "DistributionMap") -> None:
        self._values = map.distribute_array(self._values)

    def __repr__(self) -> str:
        return f"VolField(name={self.name!r}, size={len(self)})"
