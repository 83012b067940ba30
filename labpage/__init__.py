"""Render a lab homepage from its JSON content document."""

__version__ = "1.0.0"
