"""Test suite for closure_sim."""
