"""
Runtime-selectable closure models.

Importing this package defines every model family and registers every
variant, after which the family tables are only read.

Families:
- ``XiModel``: flame wrinkling (:mod:`closure_sim.models.xi`)
- ``heatTransferModel``: interfacial heat transfer, including the wall-boiling
  composite (:mod:`closure_sim.models.heat_transfer`)
- ``partitioningModel``, ``nucleationSiteModel``, ``departureDiameterModel``,
  ``departureFrequencyModel``: wall-boiling sub-models
  (:mod:`closure_sim.models.wall_boiling`)
"""

from .heat_transfer import (
    HeatTransferModel,
    WallBoilingHeatTransfer,
    generate_heat_transfer_models,
    heat_transfer_models,
)
from .wall_boiling import (
    BoilingState,
    departure_diameter_models,
    departure_frequency_models,
    nucleation_site_models,
    partitioning_models,
)
from .xi import UniformConstant, XiModel, xi_models

__all__ = [
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
]
