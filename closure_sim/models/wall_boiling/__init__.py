"""
Wall-boiling sub-model families.

Four independently selectable families feed the wall-boiling heat transfer
model: departure diameter, departure frequency, nucleation site density and
heat flux partitioning. Each variant is built from its own ``(config)`` block
and evaluated on a :class:`BoilingState`.
"""

from .departure_diameter import (
    DepartureDiameterModel,
    KocamustafaogullariIshiiDiameter,
    TolubinskiKostanchuk,
    departure_diameter_models,
)
from .departure_frequency import (
    Cole,
    DepartureFrequencyModel,
    KocamustafaogullariIshiiFrequency,
    departure_frequency_models,
)
from .nucleation_site import (
    KocamustafaogullariIshiiNucleation,
    LemmertChawla,
    NucleationSiteModel,
    nucleation_site_models,
)
from .partitioning import (
    BubbleCoverage,
    CosinePartitioning,
    Lavieville,
    LinearPartitioning,
    PartitioningModel,
    PhaseFraction,
    partitioning_models,
)
from .state import BoilingState

__all__ = [
    "BoilingState",
    "BubbleCoverage",
    "Cole",
    "CosinePartitioning",
    "DepartureDiameterModel",
    "DepartureFrequencyModel",
    "KocamustafaogullariIshiiDiameter",
    "KocamustafaogullariIshiiFrequency",
    "KocamustafaogullariIshiiNucleation",
    "Lavieville",
    "LemmertChawla",
    "LinearPartitioning",
    "NucleationSiteModel",
    "PartitioningModel",
    "PhaseFraction",
    "TolubinskiKostanchuk",
    "departure_diameter_models",
    "departure_frequency_models",
    "nucleation_site_models",
    "partitioning_models",
]
