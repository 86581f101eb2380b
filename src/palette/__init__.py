"""Palette domain types.

This module re-exports the color and palette records so that the remap
engine and host adapters can import from ``palette`` instead of
individual submodules.
"""

from .color_types import RGBA, Color, ColorValue, GradientStop
from .ids import is_color_id, new_color_id
from .palette import Palette

__all__ = [
    "RGBA",
    "Color",
    "ColorValue",
    "GradientStop",
    "Palette",
    "is_color_id",
    "new_color_id",
]
