"""
Pixel buffer -> color profile.

One pass over the opaque pixels feeds three accumulators: a quantized color
frequency table, the per-hue histogram and the family tally. The pass can be
split into shards whose partial results are merged afterwards.
"""

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial, reduce
from typing import Optional

import numpy as np

from palette_profile.categories import CategoryTally, classify_array
from palette_profile.color_space import quantize_array, rgb_to_hsl_array
from palette_profile.config import AnalysisConfig
from palette_profile.dominant import (
    build_frequency_table, merge_frequency_tables, select_dominant_colors,
)
from palette_profile.hue_histogram import HueHistogram


class InputShapeError(ValueError):
    """Pixel buffer does not match the declared image dimensions."""


# =============================================================================
# Profile
# =============================================================================

@dataclass
class ColorProfile:
    """Result of analyzing one image."""
    dominant_colors: list  # DominantColor, most frequent first
    category_distribution: dict  # family -> percentage of opaque pixels
    hue_histogram: list  # 360 HueBin, indexed by hue
    total_pixels: int
    opaque_pixels: int

    @property
    def is_empty(self) -> bool:
        """True when the image had no opaque pixels."""
        return self.opaque_pixels == 0

    def to_dict(self) -> dict:
        return {
            'total_pixels': self.total_pixels,
            'opaque_pixels': self.opaque_pixels,
            'dominant_colors': [
                {
                    'color': list(c.color),
                    'hex': c.hex,
                    'count': c.count,
                    'percentage': c.percentage,
                }
                for c in self.dominant_colors
            ],
            'category_distribution': dict(self.category_distribution),
            'hue_histogram': [
                {'hue': hue, 'count': b.count, 'saturation': b.saturation, 'lightness': b.lightness}
                for hue, b in enumerate(self.hue_histogram)
            ],
        }


# =============================================================================
# Pixel Pass
# =============================================================================

@dataclass
class _PassResult:
    frequencies: dict
    tally: CategoryTally
    histogram: HueHistogram
    opaque: int


def _as_rgba(pixels, width: int, height: int) -> np.ndarray:
    """View the buffer as (N, 4) uint8 rows, checking it against width x height."""
    if width < 0 or height < 0:
        raise InputShapeError(f"Image dimensions must be non-negative, got {width}x{height}")

    if isinstance(pixels, (bytes, bytearray, memoryview)):
        if not len(pixels):
            flat = np.empty(0, dtype=np.uint8)
        else:
            try:
                flat = np.frombuffer(pixels, dtype=np.uint8)
            except (BufferError, ValueError) as e:
                raise InputShapeError(f"Pixel buffer cannot be read as bytes: {e}") from e
    else:
        flat = np.asarray(pixels).reshape(-1)
        if flat.size and not np.issubdtype(flat.dtype, np.integer):
            raise InputShapeError(f"Pixel buffer must hold integers, got {flat.dtype}")
        if flat.size and (flat.min() < 0 or flat.max() > 255):
            raise InputShapeError("Pixel values must be in 0..255")
        flat = flat.astype(np.uint8, copy=False)

    expected = width * height * 4
    if flat.size != expected:
        raise InputShapeError(
            f"Pixel buffer has {flat.size} values, expected {expected} "
            f"for a {width}x{height} RGBA image"
        )

    return flat.reshape(-1, 4)


def _scan(rgba: np.ndarray, config: AnalysisConfig) -> _PassResult:
    # Skip transparent pixels
    opaque = rgba[rgba[:, 3] >= config.alpha_threshold, :3]

    frequencies = build_frequency_table(quantize_array(opaque, config.quantize_step))

    h, s, l = rgb_to_hsl_array(opaque)

    histogram = HueHistogram()
    histogram.record_array(h, s, l)

    tally = CategoryTally()
    tally.add_counts(classify_array(h, s, l))

    return _PassResult(frequencies=frequencies, tally=tally, histogram=histogram, opaque=len(opaque))


def _merge_results(a: _PassResult, b: _PassResult) -> _PassResult:
    return _PassResult(
        frequencies=merge_frequency_tables(a.frequencies, b.frequencies),
        tally=a.tally.merge(b.tally),
        histogram=a.histogram.merge(b.histogram),
        opaque=a.opaque + b.opaque,
    )


def _shard_count(workers: int, n_pixels: int) -> int:
    """Threads to use: no more than requested, CPUs available or pixels."""
    return max(1, min(workers, os.cpu_count() or 1, n_pixels))


def _run_pass(rgba: np.ndarray, config: AnalysisConfig) -> _PassResult:
    shard_count = _shard_count(config.workers, len(rgba))
    if shard_count == 1:
        return _scan(rgba, config)

    # Contiguous pixel shards; row boundaries do not matter to any accumulator
    shards = np.array_split(rgba, shard_count)
    with ThreadPoolExecutor(max_workers=shard_count) as executor:
        partials = list(executor.map(partial(_scan, config=config), shards))

    return reduce(_merge_results, partials)


# =============================================================================
# Main Pipeline
# =============================================================================

def analyze(pixels, width: int, height: int,
            config: Optional[AnalysisConfig] = None) -> ColorProfile:
    """
    Build the color profile of an RGBA pixel buffer.

    Args:
        pixels: Row-major RGBA bytes (bytes, bytearray, memoryview or uint8 array)
        width: Image width in pixels
        height: Image height in pixels
        config: Analysis tunables, defaults to AnalysisConfig()

    Returns:
        ColorProfile. A fully transparent image yields an empty profile
        (no dominant colors, all-zero distributions) rather than an error.

    Raises:
        InputShapeError: If the buffer length is not width * height * 4
    """
    if config is None:
        config = AnalysisConfig()

    rgba = _as_rgba(pixels, width, height)
    result = _run_pass(rgba, config)

    dominant = select_dominant_colors(
        result.frequencies, result.opaque,
        max_colors=config.max_colors,
        similarity_threshold=config.similarity_threshold
    )

    return ColorProfile(
        dominant_colors=dominant,
        category_distribution=result.tally.percentages(result.opaque),
        hue_histogram=result.histogram.snapshot(),
        total_pixels=width * height,
        opaque_pixels=result.opaque,
    )


def analyze_image(image_path: str, downscale: bool = False,
                  config: Optional[AnalysisConfig] = None) -> ColorProfile:
    """Decode an image file and analyze it."""
    from palette_profile.image_io import load_pixels

    decoded = load_pixels(image_path, downscale=downscale)
    return analyze(decoded.pixels, decoded.width, decoded.height, config=config)
