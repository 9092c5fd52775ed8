"""
Runtime selection tables for model families.

A family (``"XiModel"``, ``"heatTransferModel"``, ``"partitioningModel"``...) owns one
:class:`ModelRegistry` mapping variant tags to factories. Variants register at
import time with the :meth:`ModelRegistry.register` class decorator, or with
:meth:`ModelRegistry.add` for plain factory functions. Case configuration then
selects a variant by tag and the registry builds it with the family's fixed
positional context:

    >>> from closure_sim.models.xi import xi_models
    >>> model = xi_models.new({"type": "uniformConstant", "Xi": 2.5}, thermo, turbulence, Su)

The process-wide table of families is written while :mod:`closure_sim.models` is
imported and only read afterwards, so lookups need no locking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterator,
    List,
    Optional,
    Type,
    TypeVar,
)

from ..config.loader import model_type, sub_dict
from ..logging import ComponentType, get_component_logger
from ..utils.exceptions import (
    ClosureSimError,
    ComponentError,
    ConfigurationError,
    RegistrationError,
)
from .model import Model

__all__ = [
    "ModelRegistry",
    "RegistryEntry",
    "create",
    "families",
    "get_family",
]

M = TypeVar("M", bound=Model)

_FAMILIES: Dict[str, "ModelRegistry[Any]"] = {}

_logger = get_component_logger("registry", ComponentType.REGISTRY)


@dataclass(frozen=True)
class RegistryEntry:
    tag: str
    factory: Callable[..., Any]
    description: str
    model_class: Optional[type] = None


class ModelRegistry(Generic[M]):
    """Table of interchangeable variants of one model family.

    Args:
        family: Family name, unique in the process
        base: Abstract base every variant of the family derives from

    Raises:
        RegistrationError: If a family with the same name already exists
    """

    def __init__(self, family: str, base: Type[M]):
        if family in _FAMILIES:
            raise RegistrationError(
                f"Model family '{family}' is already defined", family=family
            )
        self.family = family
        self.base = base
        self._entries: Dict[str, RegistryEntry] = {}
        base.family = family
        _FAMILIES[family] = self
        _logger.debug("Defined model family %s (base %s)", family, base.__name__)

    # Registration

    def register(
        self, tag: str, *, description: str = ""
    ) -> Callable[[Type[M]], Type[M]]:
        """Class decorator registering a variant under ``tag``.

        The class itself is the factory, so its constructor must accept
        ``(config, *context)`` as the family defines.
        """

        def decorator(cls: Type[M]) -> Type[M]:
            if not (isinstance(cls, type) and issubclass(cls, self.base)):
                raise RegistrationError(
                    f"{cls!r} cannot be registered as {self.family} '{tag}': "
                    f"it does not derive from {self.base.__name__}",
                    family=self.family,
                    tag=tag,
                )
            doc = (cls.__doc__ or "").strip().splitlines()
            self._add(tag, cls, description or (doc[0] if doc else ""), cls)
            cls.type_name = tag
            return cls

        return decorator

    def add(
        self, tag: str, factory: Callable[..., M], description: str = ""
    ) -> None:
        """Register a plain factory function under ``tag``."""
        self._add(tag, factory, description, None)

    def _add(
        self,
        tag: str,
        factory: Callable[..., Any],
        description: str,
        model_class: Optional[type],
    ) -> None:
        if not tag or not isinstance(tag, str):
            raise RegistrationError(
                f"{self.family} tags must be non-empty strings, got {tag!r}",
                family=self.family,
            )
        if tag in self._entries:
            raise RegistrationError(
                f"Duplicate {self.family} type '{tag}': already registered by "
                f"{self._entries[tag].factory!r}",
                family=self.family,
                tag=tag,
            )
        self._entries[tag] = RegistryEntry(tag, factory, description, model_class)
        _logger.debug("Registered %s type %s", self.family, tag)

    # Selection

    def create(self, tag: str, config: Any, *context: Any) -> M:
        """Build the variant ``tag`` from ``config`` and the family context.

        Returns:
            A new instance owned by the caller

        Raises:
            ConfigurationError: Naming ``tag`` and the known tags if it is unknown,
                or raised by the variant while reading its configuration
            ComponentError: If the factory fails with a non-package exception or
                returns something that is not a family member
        """
        entry = self._lookup(tag)
        try:
            instance = entry.factory(config, *context)
        except ClosureSimError:
            raise
        except Exception as exc:
            raise ComponentError(
                f"Construction of {self.family} '{tag}' failed: {exc}",
                component_name=f"{self.family}.{tag}",
                operation_name="create",
                underlying_error=exc,
            ) from exc
        if not isinstance(instance, self.base):
            raise ComponentError(
                f"Factory for {self.family} '{tag}' returned {type(instance).__name__}, "
                f"not a {self.base.__name__}",
                component_name=f"{self.family}.{tag}",
                operation_name="create",
            )
        _logger.info("Selecting %s %s", self.family, tag)
        return instance

    def new(self, config: Any, *context: Any) -> M:
        """Build the variant named by the block's ``type`` entry."""
        return self.create(model_type(config, self.family), config, *context)

    def validate(self, config: Any) -> str:
        """Check the tag and coefficients of ``config`` without building anything.

        Returns:
            The validated tag
        """
        tag = model_type(config, self.family)
        entry = self._lookup(tag)
        if entry.model_class is not None:
            entry.model_class.validate_config(config)
            for key, family in entry.model_class.nested_families.items():
                get_family(family).validate(sub_dict(config, key, f"{self.family} '{tag}'"))
        return tag

    def _lookup(self, tag: str) -> RegistryEntry:
        try:
            return self._entries[tag]
        except KeyError:
            raise ConfigurationError(
                f"Unknown {self.family} type '{tag}'. "
                f"Valid {self.family} types: {self.tags()}",
                config_parameter="type",
                parameter_value=tag,
                valid_options=self.describe(),
            ) from None

    # Introspection

    def tags(self) -> List[str]:
        return sorted(self._entries)

    def describe(self) -> Dict[str, str]:
        return {tag: self._entries[tag].description for tag in self.tags()}

    def __contains__(self, tag: object) -> bool:
        return tag in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.tags())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ModelRegistry(family={self.family!r}, tags={self.tags()})"


def get_family(family: str) -> ModelRegistry[Any]:
    """Return the registry of ``family``.

    Raises:
        ConfigurationError: If no such family is defined
    """
    try:
        return _FAMILIES[family]
    except KeyError:
        raise ConfigurationError(
            f"Unknown model family '{family}'. Known families: {sorted(_FAMILIES)}",
            config_parameter="family",
            parameter_value=family,
            valid_options={name: reg.base.__name__ for name, reg in _FAMILIES.items()},
        ) from None


def families() -> Dict[str, ModelRegistry[Any]]:
    return dict(sorted(_FAMILIES.items()))


def create(family: str, tag: str, config: Any, *context: Any) -> Model:
    """Build variant ``tag`` of ``family``; see :meth:`ModelRegistry.create`."""
    return get_family(family).create(tag, config, *context)
