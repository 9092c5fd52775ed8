"""Registry and model base machinery shared by every model family."""

from .model import Model
from .object_registry import ObjectRegistry
from .registry import ModelRegistry, RegistryEntry, create, families, get_family

__all__ = [
    "Model",
    "ModelRegistry",
    "ObjectRegistry",
    "RegistryEntry",
    "create",
    "families",
    "get_family",
]
