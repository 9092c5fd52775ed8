"""Capability protocols of the runtime-selectable model families.

These describe what callers rely on; concrete families implement them through
their abstract base classes in :mod:`closure_sim.models`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from ..phases.interface import PhaseInterfaceKey


@runtime_checkable
class ReconfigurableModel(Protocol):
    """A model whose tunable coefficients can be re-read without reconstruction."""

    def read_coeffs(self, config: Any) -> bool:
        """Re-read coefficients; return True if any value changed."""
        ...


@runtime_checkable
class FlameWrinklingModel(ReconfigurableModel, Protocol):
    """Provider of the flame-wrinkling factor Xi."""

    def correct(self) -> None:
        """Advance Xi for the current step. A no-op is a valid implementation."""
        ...

    def Xi(self) -> np.ndarray:
        """Current flame-wrinkling field (read-only)."""
        ...


@runtime_checkable
class HeatTransferCoefficient(Protocol):
    """Provider of the interfacial heat transfer coefficient K."""

    def K(self, residual_alpha: float) -> np.ndarray:
        """Heat transfer coefficient per cell (read-only)."""
        ...


@runtime_checkable
class PhaseChangeSource(Protocol):
    """Provider of a phase-change mass transfer rate on an interface."""

    def dmdtf(self) -> np.ndarray: ...

    def active_phase_interface(self, key: "PhaseInterfaceKey") -> bool: ...

    def flip_sign(self) -> bool: ...
