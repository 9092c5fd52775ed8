"""Logging entry points for closure_sim.

Modules obtain stdlib loggers with :func:`get_component_logger`. Applications pick
either plain stdlib handlers (:func:`configure_logging`) or loguru sinks
(:func:`setup_logging`), which intercept the stdlib records.
"""

from .core import (
    LOGGER_NAME_PREFIX,
    ComponentType,
    InterceptHandler,
    configure_logging,
    get_component_logger,
    get_loguru_logger,
    resolve_level,
    setup_logging,
)

__all__ = [
    "LOGGER_NAME_PREFIX",
    "ComponentType",
    "InterceptHandler",
    "configure_logging",
    "get_component_logger",
    "get_loguru_logger",
    "resolve_level",
    "setup_logging",
]
