"""
Case configuration loading and block access.

Case files are YAML documents loaded with OmegaConf so that interpolations and
dot-list overrides (``heatTransfer.gas_dispersedIn_liquid_inThe_liquid.relax=0.3``)
work the same way as on the command line. Everything handed to models is a plain
``dict``; DictConfig objects are converted at the boundary.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..constants import TYPE_KEY
from ..utils.exceptions import ConfigurationError

__all__ = [
    "load_config",
    "as_dict",
    "sub_dict",
    "lookup",
    "lookup_or_default",
    "model_type",
    "parse_coeffs",
]


def load_config(
    path: str | Path, overrides: Optional[Sequence[str]] = None
) -> Dict[str, Any]:
    """Load a YAML case file and apply dot-list overrides.

    Args:
        path: YAML file to load
        overrides: Optional ``key.sub=value`` strings merged on top

    Returns:
        Fully resolved configuration as nested plain dicts

    Raises:
        ConfigurationError: If the file is missing or its root is not a mapping
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(
            f"Case configuration file not found: {path}",
            config_parameter="path",
            parameter_value=str(path),
        )
    cfg = OmegaConf.load(path)
    if not isinstance(cfg, DictConfig):
        raise ConfigurationError(
            f"Case configuration root must be a mapping: {path}",
            config_parameter="path",
            parameter_value=str(path),
        )
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
    return OmegaConf.to_container(cfg, resolve=True)  # type: ignore[return-value]


def as_dict(config: Any) -> Dict[str, Any]:
    """Return a plain dict copy of a mapping or DictConfig block."""
    if isinstance(config, DictConfig):
        return OmegaConf.to_container(config, resolve=True)  # type: ignore[return-value]
    if isinstance(config, Mapping):
        return dict(config)
    raise ConfigurationError(
        f"Configuration block must be a mapping, got {type(config).__name__}",
        parameter_value=config,
    )


def sub_dict(config: Any, key: str, owner: str) -> Dict[str, Any]:
    """Return the mandatory sub-block ``key`` of ``config``.

    Raises:
        ConfigurationError: Naming ``key`` and ``owner`` if the block is absent
            or is not a mapping
    """
    block = as_dict(config)
    if key not in block:
        raise ConfigurationError(
            f"Missing required block '{key}' in {owner} configuration",
            config_parameter=key,
        )
    value = block[key]
    if not isinstance(value, (Mapping, DictConfig)):
        raise ConfigurationError(
            f"Entry '{key}' in {owner} configuration must be a block, "
            f"got {type(value).__name__}",
            config_parameter=key,
            parameter_value=value,
        )
    return as_dict(value)


def lookup(config: Any, key: str, owner: str) -> Any:
    block = as_dict(config)
    if key not in block:
        raise ConfigurationError(
            f"Missing required entry '{key}' in {owner} configuration",
            config_parameter=key,
        )
    return block[key]


def lookup_or_default(config: Any, key: str, default: Any) -> Any:
    return as_dict(config).get(key, default)


def model_type(config: Any, family: str) -> str:
    """Return the registry tag named by the block's ``type`` entry."""
    tag = lookup(config, TYPE_KEY, family)
    if not isinstance(tag, str) or not tag:
        raise ConfigurationError(
            f"'{TYPE_KEY}' of {family} configuration must be a non-empty string",
            config_parameter=TYPE_KEY,
            parameter_value=tag,
        )
    return tag


def parse_coeffs(model: type[BaseModel], config: Any, owner: str) -> BaseModel:
    """Validate a coefficient block against its pydantic model.

    Raises:
        ConfigurationError: Naming the first offending key of the block
    """
    try:
        return model.model_validate(as_dict(config))
    except PydanticValidationError as exc:
        problems = exc.errors()
        first = problems[0]
        key = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
        error = ConfigurationError(
            f"Invalid entry '{key}' in {owner} configuration: {first.get('msg')}",
            config_parameter=key,
            parameter_value=first.get("input"),
        )
        error.validation_errors = [
            f"{'.'.join(str(p) for p in item.get('loc', ()))}: {item.get('msg')}"
            for item in problems
        ]
        raise error from exc
