"""Flame-wrinkling models; importing this package registers every variant."""

from .base import XiModel, xi_models
from .uniform_constant import UniformConstant

__all__ = ["UniformConstant", "XiModel", "xi_models"]
