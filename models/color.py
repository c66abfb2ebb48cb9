"""Colour space conversion for Hue lights.

Converts normalised RGB (each component in 0.0-1.0) into the bridge's
xy chromaticity space and into device-scaled HSV.

RGB to xy follows the steps published with the Hue SDK:

1. Gamma-correct each channel so the values are linear in light output.
2. Project the linear RGB triple to XYZ with the Wide RGB D65 matrix.
3. Normalise XYZ to the xy chromaticity plane.

Nothing here clamps or validates its input. Components outside 0.0-1.0
produce numbers, just not meaningful ones.
"""

import math

from models.types import HSV, RGB, XY

# Wide RGB D65 conversion matrix (rows give X, Y, Z)
WIDE_RGB_D65 = (
    (0.649926, 0.103455, 0.197109),
    (0.234327, 0.743075, 0.022598),
    (0.000000, 0.053077, 1.035763),
)

# Gamut triangles as (red, green, blue) corners in xy space
GAMUT_A = (XY(0.704, 0.296), XY(0.2151, 0.7106), XY(0.138, 0.08))
GAMUT_B = (XY(0.675, 0.322), XY(0.4091, 0.518), XY(0.167, 0.04))
GAMUT_C = (XY(0.6915, 0.3038), XY(0.17, 0.7), XY(0.1532, 0.0475))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def gamma_correct(c: float) -> float:
    """Linearise a single sRGB-like component."""
    if c > 0.04045:
        return math.pow((c + 0.055) / (1.0 + 0.055), 2.4)
    return c / 12.92


def rgb_to_xyz(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Apply the Wide RGB D65 matrix to an already gamma-corrected triple."""
    return tuple(row[0] * r + row[1] * g + row[2] * b for row in WIDE_RGB_D65)


def xyz_to_xy(x: float, y: float, z: float) -> XY:
    """Project XYZ onto the xy chromaticity plane.

    Black has no chromaticity; the result is ``XY(nan, nan)``.
    """
    total = x + y + z
    if total == 0:
        return XY(math.nan, math.nan)
    return XY(x / total, y / total)


def rgb_to_xy(r: float, g: float, b: float) -> XY:
    """Convert normalised RGB to Hue xy."""
    linear = (gamma_correct(r), gamma_correct(g), gamma_correct(b))
    return xyz_to_xy(*rgb_to_xyz(*linear))


def rgb(*components) -> XY:
    """Shorthand for rgb_to_xy accepting ``rgb(r, g, b)`` or ``rgb((r, g, b))``."""
    if len(components) == 1:
        components = tuple(components[0])
    return rgb_to_xy(*components)


def rgb_to_hsv(r: float, g: float, b: float) -> HSV:
    """Convert normalised RGB to HSV scaled for the bridge.

    Hue is scaled to 0-65535, saturation and value to 0-255.

    Examples:
        >>> rgb_to_hsv(1, 0, 0)
        HSV(hue=0, saturation=255, value=255)
    """
    c_max = max(r, g, b)
    if c_max == 0:
        return HSV(0, 0, 0)

    c_min = min(r, g, b)
    delta = c_max - c_min

    if delta == 0:
        # Grey: hue is undefined, report 0
        h = 0.0
    elif c_max == r:
        h = 60 * ((g - b) / delta)
    elif c_max == g:
        h = 60 * (2 + (b - r) / delta)
    else:
        h = 60 * (4 + (r - g) / delta)

    if h < 0:
        h += 360

    s = delta / c_max
    v = c_max

    # Hue is circular, so a value that rounds up to 65536 is hue 0
    hue = round_half_up(h * 65536 / 360) % 65536
    return HSV(hue, round_half_up(s * 255), round_half_up(v * 255))


def as_xy(color) -> XY:
    """Return an XY for an XY or RGB colour value."""
    if isinstance(color, RGB):
        return rgb_to_xy(*color)
    return XY(*color)


def _sign(p, a, b) -> float:
    return (p[0] - b[0]) * (a[1] - b[1]) - (a[0] - b[0]) * (p[1] - b[1])


def in_gamut(point: XY, gamut=GAMUT_B) -> bool:
    """Check whether an xy point lies inside (or on) a gamut triangle."""
    red, green, blue = gamut
    d1 = _sign(point, red, green)
    d2 = _sign(point, green, blue)
    d3 = _sign(point, blue, red)

    has_neg = d1 < 0 or d2 < 0 or d3 < 0
    has_pos = d1 > 0 or d2 > 0 or d3 > 0
    return not (has_neg and has_pos)


def _closest_point_on_segment(a: XY, b: XY, p: XY) -> XY:
    ab = (b[0] - a[0], b[1] - a[1])
    ap = (p[0] - a[0], p[1] - a[1])
    ab2 = ab[0] * ab[0] + ab[1] * ab[1]
    t = (ap[0] * ab[0] + ap[1] * ab[1]) / ab2 if ab2 else 0.0
    # Return the corners themselves rather than a recomputed point
    if t <= 0:
        return XY(*a)
    if t >= 1:
        return XY(*b)
    return XY(a[0] + ab[0] * t, a[1] + ab[1] * t)


def constrain_to_gamut(point: XY, gamut=GAMUT_B) -> XY:
    """Move an xy point onto the nearest edge of the gamut if it lies outside.

    Args:
        point: xy chromaticity to constrain
        gamut: (red, green, blue) triangle corners, GAMUT_B by default

    Returns:
        The point itself when already in gamut, otherwise the closest point
        on the triangle
    """
    point = XY(*point)
    if in_gamut(point, gamut):
        return point

    red, green, blue = gamut
    candidates = [
        _closest_point_on_segment(red, green, point),
        _closest_point_on_segment(green, blue, point),
        _closest_point_on_segment(blue, red, point),
    ]
    return min(candidates, key=lambda c: math.dist(c, point))
