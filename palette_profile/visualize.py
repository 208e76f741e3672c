"""
PNG output for a ColorProfile: distribution bar chart, hue wheel and swatches.

Each function creates and closes its own figure or image.
"""

import math

from PIL import Image, ImageDraw

from palette_profile.builder import ColorProfile
from palette_profile.render import chart_entries, wheel_segments


def plot_distribution(profile: ColorProfile, output_path: str) -> None:
    """Bar chart of the color families above the chart threshold."""
    import matplotlib.pyplot as plt

    entries = chart_entries(profile)

    fig, ax = plt.subplots(figsize=(8, 4))
    if entries:
        labels = [e.label for e in entries]
        values = [e.percentage for e in entries]
        colors = [e.display_color for e in entries]
        ax.bar(labels, values, color=colors, alpha=0.7, edgecolor=colors, linewidth=1)
        for i, value in enumerate(values):
            ax.text(i, value + 1, f"{value:.1f}", ha='center', fontsize=8)
    else:
        ax.text(0.5, 0.5, "No opaque pixels", ha='center', va='center', transform=ax.transAxes)

    ax.set_ylim(0, 100)
    ax.set_ylabel('Color Distribution (%)')
    plt.tight_layout()
    plt.savefig(output_path, dpi=150)
    plt.close(fig)


def plot_color_wheel(profile: ColorProfile, output_path: str) -> None:
    """Radial hue histogram: one wedge per hue, length by pixel count."""
    import matplotlib.pyplot as plt

    inner = 0.4

    fig = plt.figure(figsize=(6, 6))
    ax = fig.add_subplot(projection='polar')

    segments = wheel_segments(profile)
    if segments:
        ax.bar(
            [math.radians(s.hue) for s in segments],
            [(1 - inner) * s.extent for s in segments],
            width=math.radians(1),
            bottom=inner,
            color=[s.hex for s in segments],
            linewidth=0
        )

    # Primary color markers
    for hue, label in [(0, 'Red'), (60, 'Yellow'), (120, 'Green'),
                       (180, 'Cyan'), (240, 'Blue'), (300, 'Magenta')]:
        ax.text(math.radians(hue), inner - 0.1, label, ha='center', va='center',
                fontsize=7, alpha=0.5)

    ax.set_ylim(0, 1)
    ax.set_yticks([])
    ax.set_xticks([])
    plt.savefig(output_path, dpi=150)
    plt.close(fig)


def draw_swatches(profile: ColorProfile, output_path: str) -> None:
    """Swatch strip of the dominant colors with their percentages."""
    swatch_size = 80
    padding = 10
    text_height = 25
    count = max(len(profile.dominant_colors), 1)

    img_width = count * (swatch_size + padding) + padding
    img_height = swatch_size + text_height + 2 * padding

    img = Image.new('RGB', (img_width, img_height), (240, 240, 240))
    draw = ImageDraw.Draw(img)

    for i, c in enumerate(profile.dominant_colors):
        x = padding + i * (swatch_size + padding)
        y = padding

        draw.rectangle([x, y, x + swatch_size, y + swatch_size], fill=tuple(c.color))

        # Center text under swatch
        text = f"{c.percentage:.1f}%"
        bbox = draw.textbbox((0, 0), text)
        text_width = bbox[2] - bbox[0]
        text_x = x + (swatch_size - text_width) // 2
        draw.text((text_x, y + swatch_size + 4), text, fill=(0, 0, 0))

    img.save(output_path)
