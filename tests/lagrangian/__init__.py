"""Lagrangian cloud tests."""
