"""Phases, phase interfaces and the phase system of a region."""

from .interface import (
    DispersedPhaseInterface,
    PhaseInterface,
    PhaseInterfaceKey,
    SidedPhaseInterface,
    phase_interface_from_name,
)
from .phase import PHASE_QUANTITIES, Phase
from .system import PhaseSystem

__all__ = [
    "DispersedPhaseInterface",
    "PHASE_QUANTITIES",
    "Phase",
    "PhaseInterface",
    "PhaseInterfaceKey",
    "PhaseSystem",
    "SidedPhaseInterface",
    "phase_interface_from_name",
]
