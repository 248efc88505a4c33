"""Songcatalog - song catalog backend with REST interface."""

__version__ = "1.0.0"
