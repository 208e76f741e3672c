"""
Named color families.

Every opaque pixel lands in exactly one of eleven families. Lightness and
saturation gates come first (blacks, whites, grays), then hue ranges. Dark,
saturated warm hues are then corrected to browns.
"""

from bisect import bisect_right
from typing import NamedTuple

import numpy as np

from palette_profile.color_space import rgb_to_hsl


CATEGORIES = (
    'reds', 'oranges', 'yellows', 'greens', 'blues', 'purples',
    'pinks', 'browns', 'whites', 'grays', 'blacks',
)

# Bar colors used when charting each family
DISPLAY_COLORS = {
    'reds': (255, 99, 132),
    'oranges': (255, 159, 64),
    'yellows': (255, 205, 86),
    'greens': (75, 192, 192),
    'blues': (54, 162, 235),
    'purples': (153, 102, 255),
    'pinks': (255, 153, 204),
    'browns': (139, 69, 19),
    'whites': (240, 240, 240),
    'grays': (128, 128, 128),
    'blacks': (0, 0, 0),
}

BLACK_MAX_LIGHTNESS = 10  # l < 10
WHITE_MIN_LIGHTNESS = 90  # l > 90
GRAY_MAX_SATURATION = 10  # s < 10

# Half-open hue ranges [previous bound, bound); 330-360 wraps back to reds
HUE_BOUNDS = (30, 45, 70, 150, 210, 280, 330)
HUE_FAMILIES = ('reds', 'oranges', 'yellows', 'greens', 'blues', 'purples', 'pinks', 'reds')

BROWN_HUE_RANGE = (20, 70)
BROWN_MIN_SATURATION = 10  # s > 10
BROWN_MAX_LIGHTNESS = 40  # l < 40

_INDEX = {name: i for i, name in enumerate(CATEGORIES)}
_FAMILY_INDEX = np.array([_INDEX[name] for name in HUE_FAMILIES])


class Classification(NamedTuple):
    """Primary family of a pixel plus the brown override flag."""
    category: str
    brown: bool = False

    @property
    def final(self) -> str:
        return 'browns' if self.brown else self.category


def is_brown(h: int, s: int, l: int) -> bool:
    return (BROWN_HUE_RANGE[0] <= h < BROWN_HUE_RANGE[1]
            and s > BROWN_MIN_SATURATION and l < BROWN_MAX_LIGHTNESS)


def classify_hsl(h: int, s: int, l: int) -> Classification:
    if l < BLACK_MAX_LIGHTNESS:
        return Classification('blacks')
    if l > WHITE_MIN_LIGHTNESS:
        return Classification('whites')
    if s < GRAY_MAX_SATURATION:
        return Classification('grays')

    family = HUE_FAMILIES[bisect_right(HUE_BOUNDS, h)]
    return Classification(family, is_brown(h, s, l))


def classify(r: int, g: int, b: int) -> str:
    """Final family name for an RGB pixel."""
    return classify_hsl(*rgb_to_hsl(r, g, b)).final


def classify_array(h: np.ndarray, s: np.ndarray, l: np.ndarray) -> np.ndarray:
    """Final family index (into CATEGORIES) for each pixel."""
    h, s, l = np.asarray(h), np.asarray(s), np.asarray(l)
    family = _FAMILY_INDEX[np.searchsorted(HUE_BOUNDS, h, side='right')]
    brown = ((h >= BROWN_HUE_RANGE[0]) & (h < BROWN_HUE_RANGE[1])
             & (s > BROWN_MIN_SATURATION) & (l < BROWN_MAX_LIGHTNESS))

    return np.select(
        [l < BLACK_MAX_LIGHTNESS, l > WHITE_MIN_LIGHTNESS, s < GRAY_MAX_SATURATION, brown],
        [_INDEX['blacks'], _INDEX['whites'], _INDEX['grays'], _INDEX['browns']],
        default=family,
    )


class CategoryTally:
    """Pixel counts per family."""

    def __init__(self):
        self.counts = dict.fromkeys(CATEGORIES, 0)

    def add(self, classification: Classification) -> None:
        self.counts[classification.final] += 1

    def add_counts(self, indices: np.ndarray) -> None:
        """Add pixels given as indices into CATEGORIES."""
        binned = np.bincount(np.asarray(indices, dtype=np.int64), minlength=len(CATEGORIES))
        for name, n in zip(CATEGORIES, binned):
            self.counts[name] += int(n)

    def merge(self, other: "CategoryTally") -> "CategoryTally":
        merged = CategoryTally()
        for name in CATEGORIES:
            merged.counts[name] = self.counts[name] + other.counts[name]
        return merged

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def percentages(self, total: int) -> dict[str, float]:
        """Counts as percentages of total; all zero when total is 0."""
        if total == 0:
            return dict.fromkeys(CATEGORIES, 0.0)
        return {name: count / total * 100 for name, count in self.counts.items()}
