"""
Wall heat flux partitioning models.

A partitioning model returns the fraction of the heated surface wetted by
liquid, which is the share of the wall flux that goes into boiling and
quenching rather than into the vapour.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from ...config.model_configs import (
    BubbleCoverageConfig,
    CosinePartitioningConfig,
    LavievilleConfig,
    LinearPartitioningConfig,
    PhaseFractionConfig,
)
from ...core.model import Model
from ...core.registry import ModelRegistry
from .state import BoilingState

__all__ = [
    "PartitioningModel",
    "partitioning_models",
    "PhaseFraction",
    "Lavieville",
    "LinearPartitioning",
    "CosinePartitioning",
    "BubbleCoverage",
]


class PartitioningModel(Model, ABC):
    def __init__(self, config: Any):
        super().__init__()
        self.read_coeffs(config)

    @abstractmethod
    def f_liquid(self, state: BoilingState) -> np.ndarray:
        """Wetted fraction of the heated surface, in [0, 1]."""


partitioning_models: ModelRegistry[PartitioningModel] = ModelRegistry(
    "partitioningModel", PartitioningModel
)


@partitioning_models.register("phaseFraction")
class PhaseFraction(PartitioningModel):
    """Wetted fraction equal to the liquid volume fraction."""

    config_model = PhaseFractionConfig

    def f_liquid(self, state: BoilingState) -> np.ndarray:
        return np.clip(state.alpha_l, 0.0, 1.0)


@partitioning_models.register("Lavieville")
class Lavieville(PartitioningModel):
    """Lavieville et al. (2005) exponential partitioning around alphaCrit."""

    config_model = LavievilleConfig

    def f_liquid(self, state: BoilingState) -> np.ndarray:
        alpha = np.clip(state.alpha_l, 0.0, 1.0)
        alpha_crit = self.coeffs.alphaCrit
        return np.where(
            alpha >= alpha_crit,
            1.0 - 0.5 * np.exp(-20.0 * (alpha - alpha_crit)),
            0.5 * (alpha / alpha_crit) ** (20.0 * alpha_crit),
        )


class _TransitionPartitioning(PartitioningModel):
    def _blend(self, state: BoilingState) -> np.ndarray:
        lo, hi = self.coeffs.alphaLiquid0, self.coeffs.alphaLiquid1
        return np.clip((state.alpha_l - lo) / (hi - lo), 0.0, 1.0)


@partitioning_models.register("linear")
class LinearPartitioning(_TransitionPartitioning):
    """Linear ramp from alphaLiquid0 to alphaLiquid1."""

    config_model = LinearPartitioningConfig

    def f_liquid(self, state: BoilingState) -> np.ndarray:
        return self._blend(state)


@partitioning_models.register("cosine")
class CosinePartitioning(_TransitionPartitioning):
    """Smooth cosine ramp from alphaLiquid0 to alphaLiquid1."""

    config_model = CosinePartitioningConfig

    def f_liquid(self, state: BoilingState) -> np.ndarray:
        return 0.5 * (1.0 - np.cos(np.pi * self._blend(state)))


@partitioning_models.register("bubbleCoverage")
class BubbleCoverage(PartitioningModel):
    """Liquid fraction reduced by the surface covered by departing bubbles.

    Consumes the departure diameter and the nucleation site density, so the
    owning model must compute both first.
    """

    config_model = BubbleCoverageConfig

    def f_liquid(self, state: BoilingState) -> np.ndarray:
        d = state.require("d_departure")
        n = state.require("n_sites")
        coverage = np.minimum(0.25 * np.pi * d**2 * n, self.coeffs.maxCoverage)
        return np.clip(state.alpha_l, 0.0, 1.0) * (1.0 - coverage)
