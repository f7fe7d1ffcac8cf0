"""Shipwright: change-aware build, deploy and release pipeline."""

__version__ = "0.1.0"
