"""Fuel consumption projection and billing calculation engine."""

__version__ = "0.1.0"
