"""Tabletop baseball player card reader."""

__version__ = "0.1.0"
