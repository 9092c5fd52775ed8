"""
Phase interfaces and their naming.

Interfaces are named the way case files refer to them:

* ``air_water``: an unordered pair
* ``air_dispersedIn_water``: ``air`` dispersed in continuous ``water``
* ``air_dispersedIn_water_inThe_water``: the same pair, seen from the side of
  ``water``, i.e. the model feeds the ``water`` energy equation
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple, Union

from ..utils.exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..mesh.mesh import Mesh
    from .phase import Phase
    from .system import PhaseSystem

__all__ = [
    "PhaseInterface",
    "DispersedPhaseInterface",
    "SidedPhaseInterface",
    "PhaseInterfaceKey",
    "phase_interface_from_name",
]

DISPERSED_SEPARATOR = "_dispersedIn_"
SIDE_SEPARATOR = "_inThe_"


def _name_of(phase: Union["Phase", str]) -> str:
    return phase if isinstance(phase, str) else phase.name


@dataclass(frozen=True)
class PhaseInterfaceKey:
    """Orientation-free identity of a phase pair, ordered by phase name."""

    phase1: str
    phase2: str

    def __init__(self, a: Union["Phase", str], b: Union["Phase", str]):
        first, second = sorted((_name_of(a), _name_of(b)))
        object.__setattr__(self, "phase1", first)
        object.__setattr__(self, "phase2", second)

    def __str__(self) -> str:
        return f"{self.phase1}_{self.phase2}"


class PhaseInterface:
    """Unordered pair of distinct phases."""

    def __init__(self, phase1: "Phase", phase2: "Phase"):
        if phase1 == phase2:
            raise ConfigurationError(
                f"An interface needs two distinct phases, got '{phase1.name}' twice",
                config_parameter="interface",
                parameter_value=phase1.name,
            )
        self.phase1 = phase1
        self.phase2 = phase2

    @property
    def name(self) -> str:
        return f"{self.phase1.name}_{self.phase2.name}"

    @property
    def key(self) -> PhaseInterfaceKey:
        return PhaseInterfaceKey(self.phase1, self.phase2)

    @property
    def fluid(self) -> "PhaseSystem":
        return self.phase1.system

    @property
    def mesh(self) -> "Mesh":
        return self.phase1.mesh

    def phases(self) -> Tuple["Phase", "Phase"]:
        return (self.phase1, self.phase2)

    def contains(self, phase: Union["Phase", str]) -> bool:
        return _name_of(phase) in (self.phase1.name, self.phase2.name)

    def other_phase(self, phase: Union["Phase", str]) -> "Phase":
        name = _name_of(phase)
        if name == self.phase1.name:
            return self.phase2
        if name == self.phase2.name:
            return self.phase1
        raise ConfigurationError(
            f"Phase '{name}' is not part of interface {self.name}",
            config_parameter="phase",
            parameter_value=name,
            valid_options={self.phase1.name: "", self.phase2.name: ""},
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PhaseInterface):
            return type(self) is type(other) and self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class DispersedPhaseInterface(PhaseInterface):
    """Pair with one phase dispersed in the other (continuous) phase."""

    def __init__(self, dispersed: "Phase", continuous: "Phase"):
        super().__init__(dispersed, continuous)
        self.dispersed = dispersed
        self.continuous = continuous

    @property
    def name(self) -> str:
        return f"{self.dispersed.name}{DISPERSED_SEPARATOR}{self.continuous.name}"


class SidedPhaseInterface(DispersedPhaseInterface):
    """Dispersed pair seen from one of its two phases (``side``)."""

    def __init__(self, dispersed: "Phase", continuous: "Phase", side: "Phase"):
        super().__init__(dispersed, continuous)
        if not self.contains(side):
            raise ConfigurationError(
                f"Side phase '{side.name}' is not part of interface "
                f"{dispersed.name}{DISPERSED_SEPARATOR}{continuous.name}",
                config_parameter="side",
                parameter_value=side.name,
                valid_options={dispersed.name: "", continuous.name: ""},
            )
        self.side = side

    @property
    def name(self) -> str:
        return f"{super().name}{SIDE_SEPARATOR}{self.side.name}"

    @property
    def other(self) -> "Phase":
        return self.other_phase(self.side)

    def other_side(self) -> "SidedPhaseInterface":
        return SidedPhaseInterface(self.dispersed, self.continuous, self.other)


def phase_interface_from_name(fluid: "PhaseSystem", name: str) -> PhaseInterface:
    """Build the interface a case file refers to by ``name``.

    Raises:
        ConfigurationError: If the name does not parse or names unknown phases
    """
    side_name = None
    pair = name
    if SIDE_SEPARATOR in pair:
        pair, side_name = pair.split(SIDE_SEPARATOR, 1)
    if DISPERSED_SEPARATOR in pair:
        dispersed, continuous = pair.split(DISPERSED_SEPARATOR, 1)
        d, c = fluid.phase(dispersed), fluid.phase(continuous)
        if side_name is None:
            return DispersedPhaseInterface(d, c)
        return SidedPhaseInterface(d, c, fluid.phase(side_name))
    if side_name is not None:
        raise ConfigurationError(
            f"Interface '{name}' names a side but no dispersed phase",
            config_parameter="interface",
            parameter_value=name,
        )
    parts = pair.split("_")
    if len(parts) != 2 or not all(parts):
        raise ConfigurationError(
            f"Cannot parse phase interface name '{name}'; expected 'a_b', "
            f"'a{DISPERSED_SEPARATOR}b' or 'a{DISPERSED_SEPARATOR}b{SIDE_SEPARATOR}c'",
            config_parameter="interface",
            parameter_value=name,
        )
    return PhaseInterface(fluid.phase(parts[0]), fluid.phase(parts[1]))
