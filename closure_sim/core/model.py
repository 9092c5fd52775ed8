"""Base class shared by every runtime-selectable model."""

from __future__ import annotations

from typing import Any, ClassVar, Dict, NoReturn, Optional, Type

from ..config.loader import parse_coeffs
from ..config.model_configs import ModelConfig
from ..utils.exceptions import StateError

__all__ = ["Model"]


class Model:
    """Identity-bound model object with validated, re-readable coefficients.

    Subclasses declare the pydantic block they read in ``config_model`` and call
    :meth:`read_coeffs` from their constructor once their own state exists.
    ``family`` is filled in by the family's :class:`ModelRegistry` and
    ``type_name`` by the registration decorator.

    Models belong to exactly one owner and one location in the simulation, so
    copying and pickling are refused.
    """

    family: ClassVar[str] = ""
    type_name: ClassVar[str] = ""
    config_model: ClassVar[Optional[Type[ModelConfig]]] = None
    # configuration key -> family of a nested model block
    nested_families: ClassVar[Dict[str, str]] = {}

    def __init__(self) -> None:
        self._coeffs: Optional[ModelConfig] = None

    @property
    def coeffs(self) -> ModelConfig:
        if self._coeffs is None:
            raise StateError(
                f"{self.describe()} has not read its coefficients",
                current_state="unconfigured",
                expected_state="configured",
                component_name=self.describe(),
            )
        return self._coeffs

    def read_coeffs(self, config: Any) -> bool:
        """Re-read tunable coefficients from ``config``.

        Returns:
            True if any coefficient differs from the previously read values,
            which tells owners that caches depending on them are stale.

        Raises:
            ConfigurationError: If the block does not validate
        """
        if self.config_model is None:
            return False
        coeffs = parse_coeffs(self.config_model, config, owner=self.describe())
        changed = coeffs != self._coeffs
        self._coeffs = coeffs
        return changed

    @classmethod
    def validate_config(cls, config: Any) -> None:
        """Check a configuration block without constructing the model."""
        if cls.config_model is not None:
            parse_coeffs(cls.config_model, config, owner=f"{cls.family} '{cls.type_name}'")

    def describe(self) -> str:
        return f"{self.family} '{self.type_name or type(self).__name__}'"

    def _refuse_copy(self, *args: Any) -> NoReturn:
        raise TypeError(
            f"{type(self).__name__} instances are bound to their owner and cannot be copied"
        )

    __copy__ = _refuse_copy
    __deepcopy__ = _refuse_copy
    __reduce_ex__ = _refuse_copy

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self.type_name!r})"
