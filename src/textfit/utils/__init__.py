"""Utility modules for unit conversion and preview rendering."""

from .units import mm2pt, pt2mm, pt2px

__all__ = ["mm2pt", "pt2mm", "pt2px"]
