"""
Analysis constants and tunables.

Module-level constants hold the defaults; AnalysisConfig bundles the values
a single analysis run may override, optionally from the environment.
"""

import os
from dataclasses import dataclass


# =============================================================================
# Pixel Pass
# =============================================================================

QUANTIZE_STEP = 32  # 8 levels per channel -> at most 512 keys
ALPHA_THRESHOLD = 128  # Pixels with alpha below this are ignored
HUE_BINS = 360

# =============================================================================
# Dominant Colors
# =============================================================================

SIMILARITY_THRESHOLD = 40.0  # Euclidean RGB distance
MAX_DOMINANT_COLORS = 8

# =============================================================================
# Rendering
# =============================================================================

CHART_MIN_PERCENTAGE = 0.5
WHEEL_SCALE = 0.25  # A bin reaches full extent at 25% of the busiest bin
WHEEL_LIGHTNESS_RANGE = (20, 80)

# =============================================================================
# Image Input
# =============================================================================

# Image size limits (security: prevent decompression bombs)
MAX_IMAGE_PIXELS = 50_000_000
MAX_IMAGE_DIMENSION = 10_000
DOWNSCALE_SIZE = 256


ENV_PREFIX = "PALETTE_"


def _env_number(name: str, default, cast):
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}")


@dataclass
class AnalysisConfig:
    """Tunables for one analysis run."""
    quantize_step: int = QUANTIZE_STEP
    alpha_threshold: int = ALPHA_THRESHOLD
    similarity_threshold: float = SIMILARITY_THRESHOLD
    max_colors: int = MAX_DOMINANT_COLORS
    workers: int = 1

    def __post_init__(self):
        if not 1 <= self.quantize_step <= 256:
            raise ValueError(f"quantize_step must be in 1..256, got {self.quantize_step}")
        if not 0 <= self.alpha_threshold <= 256:
            raise ValueError(f"alpha_threshold must be in 0..256, got {self.alpha_threshold}")
        if self.similarity_threshold < 0:
            raise ValueError(f"similarity_threshold must be >= 0, got {self.similarity_threshold}")
        if self.max_colors < 1:
            raise ValueError(f"max_colors must be >= 1, got {self.max_colors}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        """Build a config from PALETTE_* environment variables."""
        return cls(
            quantize_step=_env_number("QUANTIZE_STEP", QUANTIZE_STEP, int),
            alpha_threshold=_env_number("ALPHA_THRESHOLD", ALPHA_THRESHOLD, int),
            similarity_threshold=_env_number("SIMILARITY_THRESHOLD", SIMILARITY_THRESHOLD, float),
            max_colors=_env_number("MAX_COLORS", MAX_DOMINANT_COLORS, int),
            workers=_env_number("WORKERS", 1, int),
        )
