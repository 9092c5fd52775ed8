"""Runtime-selectable closure models for multiphase and reacting flow simulations.

Importing the package defines every model family and registers every variant.
Models are selected by the ``type`` entry of their configuration block::

    from closure_sim import heat_transfer_models
    model = heat_transfer_models.new(block, interface, True)
"""

from __future__ import annotations

from typing import Dict, List

from typing_extensions import TypedDict

from .config import load_config
from .constants import PACKAGE_NAME, PACKAGE_VERSION
from .core import Model, ModelRegistry, ObjectRegistry, create, families, get_family
from .lagrangian import Cloud, ParticleCloud, partial_adaptation_overrides
from .mesh import (
    DistributionMap,
    InProcessWorld,
    Mesh,
    MeshMap,
    SerialCommunicator,
    Time,
    TopoChangeMap,
    VolField,
)
from .models import (
    BoilingState,
    HeatTransferModel,
    UniformConstant,
    WallBoilingHeatTransfer,
    XiModel,
    departure_diameter_models,
    departure_frequency_models,
    generate_heat_transfer_models,
    heat_transfer_models,
    nucleation_site_models,
    partitioning_models,
    xi_models,
)
from .phases import (
    DispersedPhaseInterface,
    Phase,
    PhaseInterface,
    PhaseInterfaceKey,
    PhaseSystem,
    SidedPhaseInterface,
)
from .utils.exceptions import (
    ClosureSimError,
    CommunicationError,
    ComponentError,
    ConfigurationError,
    RegistrationError,
    StateError,
    ValidationError,
)

__version__ = "0.3.0"


class PackageInfo(TypedDict):
    name: str
    version: str
    families: Dict[str, List[str]]


def get_package_info() -> PackageInfo:
    """Return name, version and the registered model families with their types."""
    return {
        "name": PACKAGE_NAME,
        "version": PACKAGE_VERSION,
        "families": {name: reg.tags() for name, reg in families().items()},
    }


__all__ = [
    "__version__",
    "PackageInfo",
    "get_package_info",
    "load_config",
    # Registry
    "Model",
    "ModelRegistry",
    "ObjectRegistry",
    "create",
    "families",
    "get_family",
    # Mesh
    "DistributionMap",
    "InProcessWorld",
    "Mesh",
    "MeshMap",
    "SerialCommunicator",
    "Time",
    "TopoChangeMap",
    "VolField",
    # Phases
    "DispersedPhaseInterface",
    "Phase",
    "PhaseInterface",
    "PhaseInterfaceKey",
    "PhaseSystem",
    "SidedPhaseInterface",
    # Models
    "BoilingState",
    "HeatTransferModel",
    "UniformConstant",
    "WallBoilingHeatTransfer",
    "XiModel",
    "departure_diameter_models",
    "departure_frequency_models",
    "generate_heat_transfer_models",
    "heat_transfer_models",
    "nucleation_site_models",
    "partitioning_models",
    "xi_models",
    # Lagrangian
    "Cloud",
    "ParticleCloud",
    "partial_adaptation_overrides",
    # Errors
    "ClosureSimError",
    "CommunicationError",
    "ComponentError",
    "ConfigurationError",
    "RegistrationError",
    "StateError",
    "ValidationError",
]
