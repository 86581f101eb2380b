from __future__ import annotations

"""Core color record types.

This module defines the value types stored in palettes: a solid or
gradient :class:`ColorValue` and the :class:`Color` record that binds a
value to an opaque, project-unique identifier and a display name.

Values are frozen dataclasses so two values compare equal exactly when
every field is equal. Copying a color to a new identity never touches
its value.
"""

from dataclasses import dataclass, replace
from typing import Literal, Sequence, Tuple

RGBA = Tuple[int, int, int, int]
ValueKind = Literal["solid", "linear_gradient", "radial_gradient"]


@dataclass(frozen=True)
class GradientStop:
    """One stop of a gradient.

    Attributes
    ----------
    position:
        Stop position along the gradient in [0, 1].
    rgba:
        Stop color as 8-bit (r, g, b, a).
    """

    position: float
    rgba: RGBA


@dataclass(frozen=True)
class ColorValue:
    """Visual value of a palette color.

    Attributes
    ----------
    kind:
        ``"solid"`` or one of the gradient kinds.
    rgba:
        8-bit (r, g, b, a) for solid colors. For gradients this is the
        first stop's color, kept so swatch previews stay cheap.
    stops:
        Ordered gradient stops. Empty for solid colors.
    """

    kind: ValueKind
    rgba: RGBA
    stops: Tuple[GradientStop, ...] = ()

    @classmethod
    def solid(cls, r: int, g: int, b: int, a: int = 255) -> "ColorValue":
        """Create a solid color value from 8-bit channels."""
        rgba = (r, g, b, a)
        for v in rgba:
            if not (0 <= v <= 255):
                raise ValueError("channels must be in [0, 255].")
        return cls(kind="solid", rgba=rgba)

    @classmethod
    def gradient(
        cls,
        stops: Sequence[GradientStop],
        *,
        radial: bool = False,
    ) -> "ColorValue":
        """Create a gradient value from at least two ordered stops."""
        if len(stops) < 2:
            raise ValueError("a gradient needs at least two stops.")
        positions = [s.position for s in stops]
        if any(not (0.0 <= p <= 1.0) for p in positions):
            raise ValueError("gradient stop positions must be in [0, 1].")
        if positions != sorted(positions):
            raise ValueError("gradient stops must be ordered by position.")
        kind: ValueKind = "radial_gradient" if radial else "linear_gradient"
        return cls(kind=kind, rgba=stops[0].rgba, stops=tuple(stops))

    @property
    def is_gradient(self) -> bool:
        return self.kind != "solid"


@dataclass(frozen=True)
class Color:
    """A palette color.

    Attributes
    ----------
    id:
        Opaque identifier, unique across every palette of a project.
        Drawings and Colour Selectors reference colors by this value.
    name:
        Display name shown in the palette view.
    value:
        Visual value. Two colors may share a value but never an id.
    """

    id: str
    name: str
    value: ColorValue

    def with_id(self, color_id: str) -> "Color":
        """Return the same color (name and value) under another identity."""
        return replace(self, id=color_id)
