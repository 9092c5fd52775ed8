"""Interfacial heat transfer models; importing this package registers every variant."""

from .base import (
    HeatTransferModel,
    generate_heat_transfer_models,
    heat_transfer_models,
    read_only,
)
from .constant_nusselt import ConstantNusselt
from .gunn import Gunn
from .ranz_marshall import RanzMarshall
from .spherical import Spherical
from .wall_boiling import CACHED_FIELDS, WallBoilingHeatTransfer

__all__ = [
    "CACHED_FIELDS",
    "ConstantNusselt",
    "Gunn",
    "HeatTransferModel",
    "RanzMarshall",
    "Spherical",
    "WallBoilingHeatTransfer",
    "generate_heat_transfer_models",
    "heat_transfer_models",
    "read_only",
]
