"""Configuration package.

This package provides:
- YAML case loading with OmegaConf and plain-dict block access helpers
- Pydantic coefficient models for every registered model variant
"""

from .loader import (
    as_dict,
    load_config,
    lookup,
    lookup_or_default,
    model_type,
    parse_coeffs,
    sub_dict,
)
from .model_configs import (
    BubbleCoverageConfig,
    ColeConfig,
    ConstantNusseltConfig,
    CosinePartitioningConfig,
    GunnConfig,
    KocamustafaogullariIshiiDiameterConfig,
    KocamustafaogullariIshiiFrequencyConfig,
    KocamustafaogullariIshiiNucleationConfig,
    LavievilleConfig,
    LemmertChawlaConfig,
    LinearPartitioningConfig,
    ModelConfig,
    PhaseFractionConfig,
    RanzMarshallConfig,
    SphericalConfig,
    TolubinskiKostanchukConfig,
    UniformConstantConfig,
    WallBoilingConfig,
)

__all__ = [
    # Loading and access
    "load_config",
    "as_dict",
    "sub_dict",
    "lookup",
    "lookup_or_default",
    "model_type",
    "parse_coeffs",
    # Coefficient models
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
