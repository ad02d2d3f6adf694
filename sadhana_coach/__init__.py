"""Sadhana Coach: dosha classification and yoga pose scoring engines."""

__version__ = "1.0.0"
