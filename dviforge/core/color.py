# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Color values and dvips color specifications.

A Color is an opaque RGB value. Specials describe colors the way dvips'
color.pro does:

    Red                 named color (dvips color table, case-insensitive)
    rgb 1 0 0           red, green, blue
    cmyk 0 1 1 0        cyan, magenta, yellow, black
    gray 0.5            gray level
    hsb 0 1 1           hue, saturation, brightness

Device conversions follow the PLRM Section 6.2 formulas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


class ColorError(ValueError):
    """Malformed color specification."""
    pass


# ==========================================================================
# Device Color Conversion Algorithms (PLRM Section 6.2)
# ==========================================================================

def clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def gray_to_rgb(gray: float) -> Tuple[float, float, float]:
    return (gray, gray, gray)


def cmyk_to_rgb(cyan: float, magenta: float, yellow: float, black: float) -> Tuple[float, float, float]:
    """
    Convert CMYK to RGB.

    Reference: PLRM Section 6.2.4
    Formula: red = 1.0 - min(1.0, cyan + black), etc.
    """
    red = 1.0 - min(1.0, cyan + black)
    green = 1.0 - min(1.0, magenta + black)
    blue = 1.0 - min(1.0, yellow + black)
    return (red, green, blue)


def hsb_to_rgb(hue: float, saturation: float, brightness: float) -> Tuple[float, float, float]:
    """
    Convert HSB to RGB using the hexcone model.

    Args:
        hue: Hue (0.0-1.0) - 0=red, 1/3=green, 2/3=blue, 1=red again
        saturation: Saturation (0.0-1.0) - 0=gray, 1=pure color
        brightness: Brightness (0.0-1.0) - 0=black, 1=maximum brightness
    """
    if saturation == 0.0:
        return (brightness, brightness, brightness)
    if brightness == 0.0:
        return (0.0, 0.0, 0.0)

    h = hue * 6.0
    if h >= 6.0:
        h = 0.0
    sector = int(h)
    fractional = h - sector

    p = brightness * (1.0 - saturation)
    q = brightness * (1.0 - saturation * fractional)
    t = brightness * (1.0 - saturation * (1.0 - fractional))

    if sector == 0:
        return (brightness, t, p)
    elif sector == 1:
        return (q, brightness, p)
    elif sector == 2:
        return (p, brightness, t)
    elif sector == 3:
        return (p, q, brightness)
    elif sector == 4:
        return (t, p, brightness)
    else:
        return (brightness, p, q)


# dvips color.pro named colors, CMYK components
_DVIPS_COLORS = {
    'greenyellow':    (0.15, 0, 0.69, 0),
    'yellow':         (0, 0, 1, 0),
    'goldenrod':      (0, 0.10, 0.84, 0),
    'dandelion':      (0, 0.29, 0.84, 0),
    'apricot':        (0, 0.32, 0.52, 0),
    'peach':          (0, 0.50, 0.70, 0),
    'melon':          (0, 0.46, 0.50, 0),
    'yelloworange':   (0, 0.42, 1, 0),
    'orange':         (0, 0.61, 0.87, 0),
    'burntorange':    (0, 0.51, 1, 0),
    'bittersweet':    (0, 0.75, 1, 0.24),
    'redorange':      (0, 0.77, 0.87, 0),
    'mahogany':       (0, 0.85, 0.87, 0.35),
    'maroon':         (0, 0.87, 0.68, 0.32),
    'brickred':       (0, 0.89, 0.94, 0.28),
    'red':            (0, 1, 1, 0),
    'orangered':      (0, 1, 0.50, 0),
    'rubinered':      (0, 1, 0.13, 0),
    'wildstrawberry': (0, 0.96, 0.39, 0),
    'salmon':         (0, 0.53, 0.38, 0),
    'carnationpink':  (0, 0.63, 0, 0),
    'magenta':        (0, 1, 0, 0),
    'violetred':      (0, 0.81, 0, 0),
    'rhodamine':      (0, 0.82, 0, 0),
    'mulberry':       (0.34, 0.90, 0, 0.02),
    'redviolet':      (0.07, 0.90, 0, 0.34),
    'fuchsia':        (0.47, 0.91, 0, 0.08),
    'lavender':       (0, 0.48, 0, 0),
    'thistle':        (0.12, 0.59, 0, 0),
    'orchid':         (0.32, 0.64, 0, 0),
    'darkorchid':     (0.40, 0.80, 0.20, 0),
    'purple':         (0.45, 0.86, 0, 0),
    'plum':           (0.50, 1, 0, 0),
    'violet':         (0.79, 0.88, 0, 0),
    'royalpurple':    (0.75, 0.90, 0, 0),
    'blueviolet':     (0.86, 0.91, 0, 0.04),
    'periwinkle':     (0.57, 0.55, 0, 0),
    'cadetblue':      (0.62, 0.57, 0.23, 0),
    'cornflowerblue': (0.65, 0.13, 0, 0),
    'midnightblue':   (0.98, 0.13, 0, 0.43),
    'navyblue':       (0.94, 0.54, 0, 0),
    'royalblue':      (1, 0.50, 0, 0),
    'blue':           (1, 1, 0, 0),
    'cerulean':       (0.94, 0.11, 0, 0),
    'cyan':           (1, 0, 0, 0),
    'processblue':    (0.96, 0, 0, 0),
    'skyblue':        (0.62, 0, 0.12, 0),
    'turquoise':      (0.85, 0, 0.20, 0),
    'tealblue':       (0.86, 0, 0.34, 0.02),
    'aquamarine':     (0.82, 0, 0.30, 0),
    'bluegreen':      (0.85, 0, 0.33, 0),
    'emerald':        (1, 0, 0.50, 0),
    'junglegreen':    (0.99, 0, 0.52, 0),
    'seagreen':       (0.69, 0, 0.50, 0),
    'green':          (1, 0, 1, 0),
    'forestgreen':    (0.91, 0, 0.88, 0.12),
    'pinegreen':      (0.92, 0, 0.59, 0.25),
    'limegreen':      (0.50, 0, 1, 0),
    'yellowgreen':    (0.44, 0, 0.74, 0),
    'springgreen':    (0.26, 0, 0.76, 0),
    'olivegreen':     (0.64, 0, 0.95, 0.40),
    'rawsienna':      (0, 0.72, 1, 0.45),
    'sepia':          (0, 0.83, 1, 0.70),
    'brown':          (0, 0.81, 1, 0.60),
    'tan':            (0.14, 0.42, 0.56, 0),
    'gray':           (0, 0, 0, 0.50),
    'black':          (0, 0, 0, 1),
    'white':          (0, 0, 0, 0),
}

# color model keyword -> (component count, conversion to RGB)
_COLOR_MODELS = {
    'rgb': (3, lambda r, g, b: (r, g, b)),
    'cmyk': (4, cmyk_to_rgb),
    'gray': (1, gray_to_rgb),
    'hsb': (3, hsb_to_rgb),
}


@dataclass(frozen=True)
class Color:
    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    BLACK = None  # set below
    WHITE = None

    @classmethod
    def from_rgb(cls, red: float, green: float, blue: float) -> Color:
        return cls(clamp(red), clamp(green), clamp(blue))

    @classmethod
    def from_cmyk(cls, cyan: float, magenta: float, yellow: float, black: float) -> Color:
        return cls.from_rgb(*cmyk_to_rgb(cyan, magenta, yellow, black))

    @classmethod
    def from_name(cls, name: str) -> Color:
        cmyk = _DVIPS_COLORS.get(name.lower())
        if cmyk is None:
            raise ColorError(f"unknown color name '{name}'")
        return cls.from_cmyk(*cmyk)

    @classmethod
    def parse(cls, spec: str) -> Color:
        """Parse a dvips color specification.

        Raises:
            ColorError: If ``spec`` is not a valid color specification.
        """
        tokens = spec.split()
        if not tokens:
            raise ColorError("empty color specification")

        # A lone word is a color name, even where it spells a model (Gray)
        if len(tokens) == 1 and tokens[0].lower() in _DVIPS_COLORS:
            return cls.from_name(tokens[0])
        model = _COLOR_MODELS.get(tokens[0].lower())
        if model is None:
            if len(tokens) != 1:
                raise ColorError(f"invalid color specification '{spec}'")
            return cls.from_name(tokens[0])

        count, to_rgb = model
        args = tokens[1:]
        if len(args) != count:
            raise ColorError(
                f"color model '{tokens[0]}' expects {count} component(s), got {len(args)}")
        try:
            components = [clamp(float(a)) for a in args]
        except ValueError:
            raise ColorError(f"invalid color component in '{spec}'") from None
        return cls.from_rgb(*to_rgb(*components))

    def rgb(self) -> Tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def svg_color(self) -> str:
        """Color as an SVG ``#rrggbb`` string."""
        return '#' + ''.join(f"{round(c * 255):02x}" for c in self.rgb())

    def __str__(self) -> str:
        return self.svg_color()


Color.BLACK = Color(0.0, 0.0, 0.0)
Color.WHITE = Color(1.0, 1.0, 1.0)
