"""Mesh geometry, cell fields, adaptation maps and rank communicators."""

from .fields import VolField
from .maps import DistributionMap, MeshMap, TopoChangeMap, map_field, nearest_cells
from .mesh import Mesh, Time
from .parallel import InProcessCommunicator, InProcessWorld, SerialCommunicator

__all__ = [
    "DistributionMap",
    "InProcessCommunicator",
    "InProcessWorld",
    "Mesh",
    "MeshMap",
    "SerialCommunicator",
    "Time",
    "TopoChangeMap",
    "VolField",
    "map_field",
    "nearest_cells",
]
