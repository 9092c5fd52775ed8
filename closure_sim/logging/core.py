"""Logger naming and process-level handler setup for closure_sim.

Library modules only ever call :func:`get_component_logger`; installing
handlers is left to applications (the CLI, a solver driver, a test session).
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger as _loguru_logger

LOGGER_NAME_PREFIX = "closure_sim"

RECORD_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class ComponentType(Enum):
    """Subsystem a logger belongs to; becomes the second part of its name."""

    REGISTRY = "registry"
    MODEL = "model"
    MESH = "mesh"
    LAGRANGIAN = "lagrangian"
    CONFIG = "config"
    UTILS = "utils"


def resolve_level(level: Any) -> int:
    """Numeric level for an int or a level name; unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def get_component_logger(
    name: str,
    component_type: ComponentType = ComponentType.UTILS,
    logger_config: Optional[Dict[str, Any]] = None,
) -> logging.Logger:
    """Return the stdlib logger ``closure_sim.<component>.<name>``.

    Names already under the package prefix are used as given; an empty name
    gives the component logger itself.
    """
    if name.startswith(LOGGER_NAME_PREFIX):
        full_name = name
    else:
        parts = [LOGGER_NAME_PREFIX, component_type.value] + ([name] if name else [])
        full_name = ".".join(parts)
    logger = logging.getLogger(full_name)
    if logger_config and "level" in logger_config:
        logger.setLevel(resolve_level(logger_config["level"]))
    return logger


def configure_logging(
    level: Any = "INFO",
    *,
    console: bool = True,
    log_file: Optional[str | Path] = None,
) -> Dict[str, Any]:
    """Replace the root handlers with plain stdlib console and file handlers.

    Returns:
        Summary of the installed configuration
    """
    numeric = resolve_level(level)
    formatter = logging.Formatter(RECORD_FORMAT)
    handlers: List[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    if not handlers:
        handlers.append(logging.NullHandler())
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(numeric)
    logging.basicConfig(level=numeric, handlers=handlers, force=True)
    return {
        "level": logging.getLevelName(numeric),
        "console": console,
        "log_file": None if log_file is None else str(log_file),
    }


class InterceptHandler(logging.Handler):
    """Forward stdlib records to loguru, keeping the caller's frame."""

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - thin wrapper
        try:
            level: str | int = _loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        _loguru_logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    *,
    level: str = "INFO",
    console: bool = True,
    file_path: Optional[str | Path] = None,
    rotation: Optional[str | int] = None,
    retention: Optional[str | int] = None,
    serialize: bool = False,
) -> None:
    """Send every stdlib record, the package's included, to loguru sinks.

    Existing loguru sinks are removed; a stderr sink and an optional file sink
    are added at ``level``.
    """
    level = level.upper()
    _loguru_logger.remove()
    sink_options = dict(level=level, backtrace=False, diagnose=False, serialize=serialize)
    if console:
        _loguru_logger.add(sys.stderr, **sink_options)
    if file_path:
        _loguru_logger.add(
            str(file_path), rotation=rotation, retention=retention, **sink_options
        )
    root = logging.getLogger()
    root.handlers = [InterceptHandler()]
    root.setLevel(resolve_level(level))
    # loggers created before the bridge must not keep handlers of their own
    for name in list(logging.Logger.manager.loggerDict):
        existing = logging.getLogger(name)
        existing.handlers = []
        existing.propagate = True


def get_loguru_logger():
    return _loguru_logger
