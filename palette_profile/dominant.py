"""
Dominant color selection.

Quantized colors are ranked by pixel count, then accepted greedily while
they stay visually distinct from everything already accepted.
"""

from dataclasses import dataclass
from typing import Mapping

import numpy as np

from palette_profile.color_space import is_similar_color, rgb_to_hex
from palette_profile.config import MAX_DOMINANT_COLORS, SIMILARITY_THRESHOLD


@dataclass
class DominantColor:
    """A quantized color and its share of the opaque pixels."""
    color: tuple  # (r, g, b), each a multiple of the quantization step
    count: int
    percentage: float

    @property
    def hex(self) -> str:
        return rgb_to_hex(*self.color)


def build_frequency_table(quantized: np.ndarray) -> dict[tuple, int]:
    """Count occurrences of each quantized (r, g, b) row."""
    quantized = np.asarray(quantized).reshape(-1, 3)
    if len(quantized) == 0:
        return {}

    unique_colors, counts = np.unique(quantized, axis=0, return_counts=True)
    return {
        tuple(int(c) for c in color): int(count)
        for color, count in zip(unique_colors, counts)
    }


def merge_frequency_tables(*tables: Mapping[tuple, int]) -> dict[tuple, int]:
    merged = {}
    for table in tables:
        for color, count in table.items():
            merged[color] = merged.get(color, 0) + count
    return merged


def select_dominant_colors(frequencies: Mapping[tuple, int], total_pixels: int,
                           max_colors: int = MAX_DOMINANT_COLORS,
                           similarity_threshold: float = SIMILARITY_THRESHOLD) -> list[DominantColor]:
    """
    Pick up to max_colors frequent, mutually dissimilar colors.

    Args:
        frequencies: quantized color -> pixel count
        total_pixels: denominator for percentages (opaque pixels)
        max_colors: cap on the result length
        similarity_threshold: colors closer than this (RGB distance) are duplicates

    Returns:
        List of DominantColor, most frequent first.
    """
    if total_pixels <= 0:
        return []

    # Ties broken on the color triple so the result is deterministic
    ranked = sorted(frequencies.items(), key=lambda item: (-item[1], item[0]))

    selected = []
    for color, count in ranked:
        if len(selected) >= max_colors:
            break

        # Skip colors that are too similar to already selected ones
        if any(is_similar_color(s.color, color, similarity_threshold) for s in selected):
            continue

        selected.append(DominantColor(
            color=color,
            count=count,
            percentage=count / total_pixels * 100
        ))

    return selected
