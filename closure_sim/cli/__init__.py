"""Command-line entry points."""

from .models import main, validate_case

__all__ = ["main", "validate_case"]
