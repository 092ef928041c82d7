"""Layer colour palette and marker hue lookup."""

from __future__ import annotations

from typing import Iterable

from ..core import Color, Layer

RED = Color("red", "#F44336")
BLUE = Color("blue", "#2196F3")
GREEN = Color("green", "#4CAF50")
YELLOW = Color("yellow", "#FFEB3B")
PURPLE = Color("purple", "#9C27B0")
ORANGE = Color("orange", "#FF9800")
TEAL = Color("teal", "#009688")
PINK = Color("pink", "#E91E63")
AMBER = Color("amber", "#FFC107")
INDIGO = Color("indigo", "#3F51B5")
CYAN = Color("cyan", "#00BCD4")
GREY = Color("grey", "#9E9E9E")

PALETTE: tuple[Color, ...] = (
    RED,
    BLUE,
    GREEN,
    YELLOW,
    PURPLE,
    ORANGE,
    TEAL,
    PINK,
    AMBER,
    INDIGO,
)
FALLBACK_COLOR = GREY

# Marker hues in degrees, as understood by the map SDK.
HUE_RED = 0.0
HUE_ORANGE = 30.0
HUE_YELLOW = 60.0
HUE_GREEN = 120.0
HUE_CYAN = 180.0
HUE_AZURE = 210.0
HUE_BLUE = 240.0
HUE_VIOLET = 270.0
HUE_ROSE = 330.0

# Teal, amber and indigo are in the palette but have no entry here, so their
# markers use the azure fallback. Cyan has a hue but is never allocated.
_HUES: tuple[tuple[Color, float], ...] = (
    (RED, HUE_RED),
    (GREEN, HUE_GREEN),
    (BLUE, HUE_BLUE),
    (ORANGE, HUE_ORANGE),
    (YELLOW, HUE_YELLOW),
    (CYAN, HUE_CYAN),
    (PINK, HUE_ROSE),
    (PURPLE, HUE_VIOLET),
)
FALLBACK_HUE = HUE_AZURE


class ColorAllocator:
    """Hand out palette colours so each layer is visually distinct."""

    def __init__(
        self,
        palette: Iterable[Color] = PALETTE,
        fallback: Color = FALLBACK_COLOR,
    ):
        self.palette = tuple(palette)
        self.fallback = fallback

    @staticmethod
    def is_color_used(color: Color, layers: Iterable[Layer]) -> bool:
        return any(layer.color.same_hue(color) for layer in layers)

    def get_unused_color(self, layers: Iterable[Layer]) -> Color:
        """Return the first palette colour no layer holds, else the fallback."""

        layers = list(layers)
        for color in self.palette:
            if not self.is_color_used(color, layers):
                return color
        return self.fallback

    @staticmethod
    def color_to_marker_hue(color: Color) -> float:
        for known, hue in _HUES:
            if known.same_hue(color):
                return hue
        return FALLBACK_HUE
