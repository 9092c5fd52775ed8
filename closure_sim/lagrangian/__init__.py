"""Lagrangian clouds bound to a mesh."""

from .cloud import Cloud, partial_adaptation_overrides
from .particle_cloud import ParticleCloud

__all__ = ["Cloud", "ParticleCloud", "partial_adaptation_overrides"]
