"""Hex-grid delivery zone resolution."""

__version__ = "0.1.0"
