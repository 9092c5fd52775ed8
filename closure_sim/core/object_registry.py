"""Named, hierarchical registries of simulation objects.

A mesh is the root registry of a region; fields, registered models and clouds
check themselves into it by name. Clouds are registries themselves, so objects
attached to a cloud are scoped by its path (``lagrangian/defaultCloud/...``).
Iteration follows check-in order, which is the order adaptation messages are
delivered in.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

from ..logging import ComponentType, get_component_logger
from ..utils.exceptions import ConfigurationError, RegistrationError

__all__ = ["ObjectRegistry"]

_logger = get_component_logger("object_registry", ComponentType.MESH)


class ObjectRegistry:
    """Ordered name -> object table with optional parent scope.

    Args:
        name: Name of this registry within its parent
        parent: Enclosing registry; this registry checks itself into it
    """

    def __init__(self, name: str, parent: Optional["ObjectRegistry"] = None):
        self.name = name
        self.parent = parent
        self._objects: Dict[str, Any] = {}
        if parent is not None:
            parent.check_in(self, name)

    @property
    def path(self) -> str:
        if self.parent is None:
            return self.name
        return f"{self.parent.path}/{self.name}"

    def check_in(self, obj: Any, name: Optional[str] = None) -> Any:
        """Register ``obj`` under ``name`` (default: ``obj.name``).

        Raises:
            RegistrationError: If the name is already taken in this registry
        """
        key = name if name is not None else getattr(obj, "name", None)
        if not key:
            raise RegistrationError(
                f"Object {obj!r} has no name to register under in '{self.path}'"
            )
        if key in self._objects:
            raise RegistrationError(
                f"An object named '{key}' is already registered in '{self.path}'",
                family=self.path,
                tag=key,
            )
        self._objects[key] = obj
        _logger.debug("Checked %s into %s", key, self.path)
        return obj

    def check_out(self, name: str) -> Any:
        """Remove and return the object registered under ``name``."""
        obj = self.lookup(name)
        del self._objects[name]
        _logger.debug("Checked %s out of %s", name, self.path)
        return obj

    def lookup(self, name: str) -> Any:
        try:
            return self._objects[name]
        except KeyError:
            raise ConfigurationError(
                f"No object named '{name}' in '{self.path}'. "
                f"Registered objects: {self.names()}",
                config_parameter="name",
                parameter_value=name,
            ) from None

    def found(self, name: str) -> bool:
        return name in self._objects

    def names(self) -> List[str]:
        return list(self._objects)

    def objects(self) -> List[Any]:
        return list(self._objects.values())

    def __iter__(self) -> Iterator[Any]:
        return iter(self.objects())

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, name: object) -> bool:
        return name in self._objects

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r}, objects={self.names()})"
