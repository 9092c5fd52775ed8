"""
Base class of lagrangian clouds.

A cloud is a named object registry under ``<region>/lagrangian/<name>`` bound
to one mesh. The mesh delivers the three adaptation messages to every cloud
checked into it; the base implementations do nothing. A cloud that holds
per-particle state must override all three, and defining a subclass that
overrides only some of them logs a warning.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..constants import CLOUD_PREFIX, DEFAULT_CLOUD_NAME
from ..core.object_registry import ObjectRegistry
from ..interfaces.adaptation import ADAPTATION_METHODS
from ..logging import ComponentType, get_component_logger

if TYPE_CHECKING:
    from ..mesh.maps import DistributionMap, MeshMap, TopoChangeMap
    from ..mesh.mesh import Mesh

__all__ = ["Cloud", "partial_adaptation_overrides"]

logger = get_component_logger("cloud", ComponentType.LAGRANGIAN)


def partial_adaptation_overrides(cls: type) -> List[str]:
    """Adaptation methods ``cls`` inherits unchanged while overriding others.

    Returns an empty list when ``cls`` overrides none or all of them.
    """
    overridden = [
        name for name in ADAPTATION_METHODS if getattr(cls, name) is not getattr(Cloud, name)
    ]
    if not overridden or len(overridden) == len(ADAPTATION_METHODS):
        return []
    return [name for name in ADAPTATION_METHODS if name not in overridden]


class Cloud(ObjectRegistry):
    """Named collection of lagrangian elements on a mesh.

    Args:
        mesh: Mesh the cloud is bound to; the cloud checks itself into it
        name: Cloud name, ``defaultCloud`` if omitted
    """

    prefix = CLOUD_PREFIX
    default_name = DEFAULT_CLOUD_NAME

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        missing = partial_adaptation_overrides(cls)
        if missing:
            logger.warning(
                "Cloud subclass %s overrides only some adaptation methods; "
                "inherited no-op %s will leave per-element state inconsistent",
                cls.__qualname__,
                ", ".join(missing),
            )

    def __init__(self, mesh: "Mesh", name: str = DEFAULT_CLOUD_NAME):
        self.mesh = mesh
        super().__init__(name, parent=mesh)

    @property
    def path(self) -> str:
        return f"{self.mesh.path}/{self.prefix}/{self.name}"

    def topo_change(self, map: "TopoChangeMap") -> None:
        pass

    def map_mesh(self, map: "MeshMap") -> None:
        pass

    def distribute(self, map: "DistributionMap") -> None:
        pass
