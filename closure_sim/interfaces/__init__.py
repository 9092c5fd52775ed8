"""
Protocol interfaces for runtime-selectable models and mesh-bound objects.

This module defines the contracts that let callers hold a model through its
capability only, without knowing which registered variant was configured.
"""

from .adaptation import ADAPTATION_METHODS, Communicator, MeshAdaptive
from .models import (
    FlameWrinklingModel,
    HeatTransferCoefficient,
    PhaseChangeSource,
    ReconfigurableModel,
)

__all__ = [
    "ADAPTATION_METHODS",
    "Communicator",
    "MeshAdaptive",
    "FlameWrinklingModel",
    "HeatTransferCoefficient",
    "PhaseChangeSource",
    "ReconfigurableModel",
]
