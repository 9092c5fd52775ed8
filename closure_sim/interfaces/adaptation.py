"""Mesh adaptation and communication protocols.

Every object whose state is indexed by mesh cells implements :class:`MeshAdaptive`.
The owning mesh calls the three messages, in the same order on every rank, after it
has updated its own geometry. Implementations with per-element state must override
all three together.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..mesh.maps import DistributionMap, MeshMap, TopoChangeMap

ADAPTATION_METHODS = ("topo_change", "map_mesh", "distribute")


@runtime_checkable
class MeshAdaptive(Protocol):
    """Receiver of the three mesh adaptation messages."""

    def topo_change(self, map: "TopoChangeMap") -> None:
        """Local connectivity changed; relocate using the old to new cell map."""
        ...

    def map_mesh(self, map: "MeshMap") -> None:
        """The mesh was replaced; resample state or drop what cannot be mapped."""
        ...

    def distribute(self, map: "DistributionMap") -> None:
        """Cell ownership moved between ranks; send, receive and renumber."""
        ...


@runtime_checkable
class Communicator(Protocol):
    """Bulk message passing between the ranks of one run.

    ``exchange`` is collective: every rank must call it, in the same order, and
    receives the payloads addressed to it keyed by source rank.
    """

    rank: int
    size: int

    def exchange(self, outgoing: Mapping[int, Any]) -> Dict[int, Any]: ...
