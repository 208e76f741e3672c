"""
Turn a ColorProfile into presentable output: chart and wheel inputs, a prose
report, an HTML page and JSON.
"""

import json
import math
from typing import NamedTuple

from palette_profile.builder import ColorProfile
from palette_profile.categories import CATEGORIES, DISPLAY_COLORS
from palette_profile.color_space import hsl_to_rgb, rgb_to_hex
from palette_profile.config import CHART_MIN_PERCENTAGE, WHEEL_LIGHTNESS_RANGE, WHEEL_SCALE
from palette_profile.hue_histogram import peak_hues


class ChartEntry(NamedTuple):
    label: str
    percentage: float
    display_color: str  # hex


class WheelSegment(NamedTuple):
    hue: int
    extent: float  # 0-1, fraction of the ring between inner and outer radius
    saturation: float
    lightness: float

    @property
    def hex(self) -> str:
        return rgb_to_hex(*hsl_to_rgb(self.hue, self.saturation, self.lightness))


# =============================================================================
# Chart / Wheel Inputs
# =============================================================================

def chart_entries(profile: ColorProfile,
                  min_percentage: float = CHART_MIN_PERCENTAGE) -> list[ChartEntry]:
    """Families above min_percentage, in category order."""
    entries = []
    for name in CATEGORIES:
        percentage = profile.category_distribution.get(name, 0.0)
        if percentage > min_percentage:
            entries.append(ChartEntry(
                label=name.capitalize(),
                percentage=percentage,
                display_color=rgb_to_hex(*DISPLAY_COLORS[name])
            ))
    return entries


def wheel_segments(profile: ColorProfile, scale: float = WHEEL_SCALE,
                   lightness_range: tuple = WHEEL_LIGHTNESS_RANGE) -> list[WheelSegment]:
    """
    One segment per non-empty hue bin.

    A bin's extent is its count relative to scale * the busiest bin, capped
    at 1. Lightness is clamped so very dark or light hues stay visible.
    """
    max_count = max((b.count for b in profile.hue_histogram), default=0)
    if max_count == 0:
        return []

    low, high = lightness_range
    segments = []
    for hue, b in enumerate(profile.hue_histogram):
        if b.count == 0:
            continue
        segments.append(WheelSegment(
            hue=hue,
            extent=min(1.0, b.count / (max_count * scale)),
            saturation=b.saturation,
            lightness=min(max(b.lightness, low), high)
        ))
    return segments


# =============================================================================
# Text
# =============================================================================

def render_text(profile: ColorProfile) -> str:
    """Render the profile as a plain-text report."""
    lines = []

    lines.append(f"Pixels: {profile.total_pixels:,} ({profile.opaque_pixels:,} opaque)")
    if profile.is_empty:
        lines.append("No opaque pixels - nothing to analyze.")
        return "\n".join(lines)
    lines.append("")

    lines.append("DOMINANT COLORS:")
    for c in profile.dominant_colors:
        lines.append(f"  {c.hex}  RGB{tuple(c.color)}  {c.percentage:5.1f}%")
    lines.append("")

    lines.append("DISTRIBUTION:")
    for entry in chart_entries(profile):
        lines.append(f"  {entry.label:<8} {entry.percentage:5.1f}%")
    lines.append("")

    peaks = peak_hues(profile.hue_histogram)
    lines.append("HUE PEAKS:")
    for hue in peaks:
        b = profile.hue_histogram[hue]
        lines.append(f"  {hue:3d}°  {b.count:,} px  (S {b.saturation:.0f}%, L {b.lightness:.0f}%)")

    return "\n".join(lines)


# =============================================================================
# JSON
# =============================================================================

def to_json(profile: ColorProfile, indent: int = 2) -> str:
    return json.dumps(profile.to_dict(), indent=indent)


# =============================================================================
# HTML
# =============================================================================

def text_color_for_background(rgb: tuple) -> str:
    """Return black or white text color based on background lightness."""
    r, g, b = rgb
    return "#000" if (0.299 * r + 0.587 * g + 0.114 * b) > 128 else "#fff"


def _wheel_svg(profile: ColorProfile, size: int = 300) -> str:
    center = size / 2
    outer = size / 2 - 10
    inner = outer * 0.4  # Donut-shaped wheel

    parts = [f'<svg class="wheel" width="{size}" height="{size}" viewBox="0 0 {size} {size}">']
    for seg in wheel_segments(profile):
        radius = inner + (outer - inner) * seg.extent
        start = math.radians(seg.hue - 0.5)
        end = math.radians(seg.hue + 0.5)
        points = [
            (center + inner * math.cos(start), center + inner * math.sin(start)),
            (center + radius * math.cos(start), center + radius * math.sin(start)),
            (center + radius * math.cos(end), center + radius * math.sin(end)),
            (center + inner * math.cos(end), center + inner * math.sin(end)),
        ]
        coords = " ".join(f"{x:.2f},{y:.2f}" for x, y in points)
        parts.append(f'  <polygon points="{coords}" fill="{seg.hex}"/>')
    parts.append(f'  <circle cx="{center}" cy="{center}" r="{outer}" fill="none" stroke="rgba(0,0,0,0.2)"/>')
    parts.append('</svg>')
    return "\n".join(parts)


def render_html(profile: ColorProfile, image_path: str) -> str:
    """Render the profile as a self-contained HTML page."""
    from html import escape

    safe_path = escape(image_path)

    css = """
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body {
            font-family: system-ui, -apple-system, sans-serif;
            background: #f5f5f5;
            color: #333;
            line-height: 1.5;
            padding: 2rem;
            max-width: 900px;
            margin: 0 auto;
        }
        h1 { font-size: 1.25rem; margin-bottom: 1rem; word-break: break-all; }
        h2 { font-size: 1.1rem; margin: 1.5rem 0 0.75rem; }
        .palette { display: flex; flex-wrap: wrap; gap: 0.5rem; }
        .swatch {
            width: 100px; height: 80px; border-radius: 6px;
            display: flex; align-items: flex-end; justify-content: center;
            font-size: 0.8rem; padding-bottom: 0.25rem;
        }
        .bar-row { display: flex; align-items: center; gap: 0.5rem; margin: 0.25rem 0; }
        .bar-label { width: 80px; font-size: 0.9rem; }
        .bar { height: 18px; border-radius: 3px; }
        .empty { color: #888; font-style: italic; }
    """

    lines = [
        '<!DOCTYPE html>',
        '<html lang="en">',
        '<head>',
        '<meta charset="utf-8">',
        f'<title>Color profile: {safe_path}</title>',
        f'<style>{css}</style>',
        '</head>',
        '<body>',
        f'<h1>{safe_path}</h1>',
    ]

    if profile.is_empty:
        lines.append('<p class="empty">No opaque pixels - nothing to analyze.</p>')
        lines.append('</body>')
        lines.append('</html>')
        return '\n'.join(lines)

    # Dominant colors
    lines.append('<h2>Dominant Colors</h2>')
    lines.append('<div class="palette">')
    for c in profile.dominant_colors:
        fg = text_color_for_background(c.color)
        lines.append(
            f'  <div class="swatch" style="background:{c.hex}; color:{fg}">'
            f'{c.hex} {c.percentage:.1f}%</div>'
        )
    lines.append('</div>')

    # Distribution
    lines.append('<h2>Color Distribution</h2>')
    for entry in chart_entries(profile):
        lines.append('<div class="bar-row">')
        lines.append(f'  <span class="bar-label">{entry.label}</span>')
        lines.append(f'  <div class="bar" style="width:{entry.percentage * 5:.1f}px; '
                     f'background:{entry.display_color}"></div>')
        lines.append(f'  <span>{entry.percentage:.1f}%</span>')
        lines.append('</div>')

    # Hue wheel
    lines.append('<h2>Hue Wheel</h2>')
    lines.append(_wheel_svg(profile))

    lines.append('</body>')
    lines.append('</html>')

    return '\n'.join(lines)
