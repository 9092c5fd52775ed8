"""
``closure-sim-models``: inspect the model registry and validate case files.

Usage:
    closure-sim-models list
    closure-sim-models validate CASE.yaml [key.sub=value ...]

A case file maps model family names to either one model block (with a
``type`` key) or to named blocks, for example one block per phase interface::

    XiModel:
      type: uniformConstant
      Xi: 2.5
    heatTransferModel:
      gas_dispersedIn_liquid_inThe_liquid:
        type: wallBoiling
        ...
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, List, Optional, Tuple

from ..config.loader import as_dict, load_config
from ..constants import TYPE_KEY
from ..core.registry import families, get_family
from ..logging import setup_logging
from ..utils.exceptions import ConfigurationError, format_error_details

__all__ = ["main", "validate_case"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="closure-sim-models",
        description="List registered closure models and validate case configuration",
    )
    p.add_argument(
        "--log-level", type=str, default="WARNING", help="Log level for diagnostics"
    )
    sub = p.add_subparsers(dest="command", required=True)

    list_p = sub.add_parser("list", help="List model families and their types")
    list_p.add_argument("family", nargs="?", default=None, help="Only this family")

    validate_p = sub.add_parser("validate", help="Validate the model blocks of a case file")
    validate_p.add_argument("case", type=str, help="YAML case file")
    validate_p.add_argument(
        "overrides", nargs="*", help="Dot-list overrides, e.g. XiModel.Xi=3.0"
    )
    return p.parse_args(argv)


def validate_case(config: Any) -> List[Tuple[str, str]]:
    """Validate every model block of a loaded case.

    Returns:
        ``(location, type)`` for each validated block, in file order

    Raises:
        ConfigurationError: For the first invalid block
    """
    validated: List[Tuple[str, str]] = []
    for family_name, block in as_dict(config).items():
        registry = get_family(family_name)
        block = as_dict(block)
        if TYPE_KEY in block:
            validated.append((family_name, registry.validate(block)))
            continue
        for name, named_block in block.items():
            location = f"{family_name}.{name}"
            try:
                validated.append((location, registry.validate(named_block)))
            except ConfigurationError as exc:
                exc.add_context("location", location)
                raise
    return validated


def _list(family: Optional[str]) -> int:
    registries = [get_family(family)] if family else list(families().values())
    for registry in registries:
        print(f"{registry.family} ({registry.base.__name__})")
        for tag, description in registry.describe().items():
            print(f"  {tag:<28} {description}")
    return 0


def _validate(case: str, overrides: List[str]) -> int:
    config = load_config(case, overrides)
    for location, tag in validate_case(config):
        print(f"{location}: {tag} OK")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point of ``closure-sim-models``; returns the process exit code."""
    args = _parse_args(argv)
    setup_logging(level=args.log_level)

    # Registers every family and variant
    from .. import models  # noqa: F401

    try:
        if args.command == "list":
            return _list(args.family)
        return _validate(args.case, list(args.overrides))
    except ConfigurationError as exc:
        print(format_error_details(exc), file=sys.stderr)
        location = exc.context.get("location")
        if location:
            print(f"  in {location}", file=sys.stderr)
        for problem in exc.validation_errors:
            print(f"  - {problem}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
