"""
Pydantic coefficient models for every registered model variant.

Each runtime-selectable variant declares the coefficient block it reads from its
configuration. Blocks are validated with ``extra="forbid"`` so a misspelt key is
reported against the variant that rejected it, and they are frozen so that
``read_coeffs`` can detect changes with a plain equality test.

Example:
    >>> from closure_sim.config import UniformConstantConfig
    >>> UniformConstantConfig(type="uniformConstant", Xi=2.5).Xi
    2.5
"""

from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..constants import DEFAULT_WALL_BOILING_RELAX

__all__ = [
    "ModelConfig",
    "UniformConstantConfig",
    "SphericalConfig",
    "RanzMarshallConfig",
    "GunnConfig",
    "ConstantNusseltConfig",
    "WallBoilingConfig",
    "PhaseFractionConfig",
    "LavievilleConfig",
    "LinearPartitioningConfig",
    "CosinePartitioningConfig",
    "BubbleCoverageConfig",
    "LemmertChawlaConfig",
    "KocamustafaogullariIshiiNucleationConfig",
    "TolubinskiKostanchukConfig",
    "KocamustafaogullariIshiiDiameterConfig",
    "ColeConfig",
    "KocamustafaogullariIshiiFrequencyConfig",
]


class ModelConfig(BaseModel):
    """Common base: every block names its registry tag under ``type``."""

    type: str = Field(description="Registry tag of the variant")

    model_config = ConfigDict(extra="forbid", frozen=True)


# Flame wrinkling


class UniformConstantConfig(ModelConfig):
    """Coefficients of the uniform constant flame-wrinkling model.

    Attributes:
        Xi: Flame-wrinkling factor applied everywhere, at least 1
    """

    type: Literal["uniformConstant"] = "uniformConstant"
    Xi: float = Field(ge=1.0, description="Uniform flame-wrinkling factor")


# Interfacial heat transfer


class SphericalConfig(ModelConfig):
    type: Literal["spherical"] = "spherical"


class RanzMarshallConfig(ModelConfig):
    type: Literal["RanzMarshall"] = "RanzMarshall"


class GunnConfig(ModelConfig):
    type: Literal["Gunn"] = "Gunn"


class ConstantNusseltConfig(ModelConfig):
    type: Literal["constantNu"] = "constantNu"
    Nu: float = Field(gt=0.0, description="Nusselt number")


class WallBoilingConfig(ModelConfig):
    """Coefficients of the wall-boiling composite.

    The five nested blocks are themselves dispatched through their own
    registries; only their presence and shape are checked here.

    Attributes:
        vapourPhase: Name of the vapour phase, one of the interface's phases
        relax: Under-relaxation factor of the lagged coefficient, in [0, 1]
        heatTransferModel: Underlying model used on the other side of the interface
        partitioningModel: Heat flux partitioning sub-model block
        nucleationSiteModel: Nucleation site density sub-model block
        departureDiameterModel: Bubble departure diameter sub-model block
        departureFrequencyModel: Bubble departure frequency sub-model block
    """

    type: Literal["wallBoiling"] = "wallBoiling"
    vapourPhase: str = Field(min_length=1)
    relax: float = Field(default=DEFAULT_WALL_BOILING_RELAX, ge=0.0, le=1.0)
    heatTransferModel: Dict[str, Any]
    partitioningModel: Dict[str, Any]
    nucleationSiteModel: Dict[str, Any]
    departureDiameterModel: Dict[str, Any]
    departureFrequencyModel: Dict[str, Any]


# Wall boiling: heat flux partitioning


class PhaseFractionConfig(ModelConfig):
    type: Literal["phaseFraction"] = "phaseFraction"


class LavievilleConfig(ModelConfig):
    type: Literal["Lavieville"] = "Lavieville"
    alphaCrit: float = Field(default=0.2, gt=0.0, lt=1.0)


class _TransitionConfig(ModelConfig):
    alphaLiquid1: float = Field(default=0.1, ge=0.0, le=1.0)
    alphaLiquid0: float = Field(default=0.05, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_ordering(self):
        if self.alphaLiquid1 <= self.alphaLiquid0:
            raise ValueError(
                f"alphaLiquid1 ({self.alphaLiquid1}) must exceed "
                f"alphaLiquid0 ({self.alphaLiquid0})"
            )
        return self


class LinearPartitioningConfig(_TransitionConfig):
    type: Literal["linear"] = "linear"


class CosinePartitioningConfig(_TransitionConfig):
    type: Literal["cosine"] = "cosine"


class BubbleCoverageConfig(ModelConfig):
    type: Literal["bubbleCoverage"] = "bubbleCoverage"
    maxCoverage: float = Field(default=0.95, gt=0.0, le=1.0)


# Wall boiling: nucleation site density


class LemmertChawlaConfig(ModelConfig):
    type: Literal["LemmertChawla"] = "LemmertChawla"
    Cn: float = Field(default=1.0, gt=0.0)


class KocamustafaogullariIshiiNucleationConfig(ModelConfig):
    type: Literal["KocamustafaogullariIshii"] = "KocamustafaogullariIshii"
    Cn: float = Field(default=1.0, gt=0.0)


# Wall boiling: bubble departure diameter


class TolubinskiKostanchukConfig(ModelConfig):
    type: Literal["TolubinskiKostanchuk"] = "TolubinskiKostanchuk"
    dRef: float = Field(default=6e-4, gt=0.0)
    dMax: float = Field(default=0.0014, gt=0.0)
    dMin: float = Field(default=1e-6, gt=0.0)

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.dMin > self.dMax:
            raise ValueError(f"dMin ({self.dMin}) must not exceed dMax ({self.dMax})")
        return self


class KocamustafaogullariIshiiDiameterConfig(ModelConfig):
    type: Literal["KocamustafaogullariIshii"] = "KocamustafaogullariIshii"
    phi: float = Field(default=45.0, gt=0.0, lt=180.0, description="Contact angle [deg]")


# Wall boiling: bubble departure frequency


class ColeConfig(ModelConfig):
    type: Literal["Cole"] = "Cole"


class KocamustafaogullariIshiiFrequencyConfig(ModelConfig):
    type: Literal["KocamustafaogullariIshii"] = "KocamustafaogullariIshii"
    Cf: float = Field(default=1.18, gt=0.0)
