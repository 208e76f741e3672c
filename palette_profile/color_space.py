"""
RGB <-> HSL conversion, hex formatting, quantization and color distance.

Scalar functions take 8-bit channels; the *_array variants take (N, 3) arrays
and must agree exactly with their scalar counterparts.
"""

import colorsys
import math

import numpy as np

from palette_profile.config import QUANTIZE_STEP, SIMILARITY_THRESHOLD


# =============================================================================
# Color Conversion
# =============================================================================

def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[int, int, int]:
    """Convert 8-bit RGB to integer (hue degrees, saturation %, lightness %)."""
    r, g, b = r / 255, g / 255, b / 255

    mx = max(r, g, b)
    mn = min(r, g, b)
    l = (mx + mn) / 2

    if mx == mn:
        # Achromatic
        return 0, 0, _round_half_up(l * 100)

    d = mx - mn
    s = d / (2 - mx - mn) if l > 0.5 else d / (mx + mn)

    if mx == r:
        h = (g - b) / d + (6 if g < b else 0)
    elif mx == g:
        h = (b - r) / d + 2
    else:
        h = (r - g) / d + 4

    return _round_half_up(h * 60), _round_half_up(s * 100), _round_half_up(l * 100)


def rgb_to_hsl_array(rgb: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Convert an (N, 3) RGB array (0-255) to integer hue, saturation, lightness arrays."""
    rgb = np.asarray(rgb, dtype=np.float64).reshape(-1, 3) / 255.0
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]

    mx = rgb.max(axis=1)
    mn = rgb.min(axis=1)
    l = (mx + mn) / 2
    d = mx - mn
    chromatic = d > 0

    # Branches not taken may divide by zero; they are masked out below
    with np.errstate(divide='ignore', invalid='ignore'):
        s = np.where(l > 0.5, d / (2.0 - mx - mn), d / (mx + mn))
        h_red = (g - b) / d + np.where(g < b, 6.0, 0.0)
        h_green = (b - r) / d + 2.0
        h_blue = (r - g) / d + 4.0

    h = np.where(mx == r, h_red, np.where(mx == g, h_green, h_blue))
    h = np.where(chromatic, h, 0.0)
    s = np.where(chromatic, s, 0.0)

    return (
        np.floor(h * 60 + 0.5).astype(np.int64),
        np.floor(s * 100 + 0.5).astype(np.int64),
        np.floor(l * 100 + 0.5).astype(np.int64),
    )


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:
    """Convert (hue degrees, saturation %, lightness %) to 8-bit RGB."""
    r, g, b = colorsys.hls_to_rgb((h % 360) / 360, l / 100, s / 100)
    return (_round_half_up(r * 255), _round_half_up(g * 255), _round_half_up(b * 255))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB to a lowercase '#rrggbb' string."""
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


# =============================================================================
# Quantization
# =============================================================================

def quantize_color(r: int, g: int, b: int, step: int = QUANTIZE_STEP) -> tuple[int, int, int]:
    """Floor each channel to a multiple of step."""
    return (r // step) * step, (g // step) * step, (b // step) * step


def quantize_array(rgb: np.ndarray, step: int = QUANTIZE_STEP) -> np.ndarray:
    """Vectorized quantize_color over an (N, 3) array."""
    return (np.asarray(rgb, dtype=np.int32) // step) * step


# =============================================================================
# Color Distance
# =============================================================================

def color_distance(color1, color2) -> float:
    """Euclidean distance in RGB space."""
    dr = color1[0] - color2[0]
    dg = color1[1] - color2[1]
    db = color1[2] - color2[2]
    return math.sqrt(dr * dr + dg * dg + db * db)


def is_similar_color(color1, color2, threshold: float = SIMILARITY_THRESHOLD) -> bool:
    return color_distance(color1, color2) < threshold
