"""
Per-hue pixel counts with running average saturation and lightness.

One bin per integer hue degree. Memory is fixed regardless of image size:
each bin keeps only its count and the two averages.
"""

from dataclasses import dataclass, replace

import numpy as np

from palette_profile.config import HUE_BINS


@dataclass
class HueBin:
    """Aggregate for one hue degree."""
    count: int = 0
    saturation: float = 0.0  # Mean saturation (%) of pixels in this bin
    lightness: float = 0.0  # Mean lightness (%)


def merge_bins(a: HueBin, b: HueBin) -> HueBin:
    """Combine two partial bins, weighting the averages by count."""
    count = a.count + b.count
    if count == 0:
        return HueBin()
    return HueBin(
        count=count,
        saturation=(a.saturation * a.count + b.saturation * b.count) / count,
        lightness=(a.lightness * a.count + b.lightness * b.count) / count,
    )


class HueHistogram:
    """Accumulates pixels by integer hue."""

    def __init__(self):
        self.bins = [HueBin() for _ in range(HUE_BINS)]

    def record(self, hue: int, saturation: float, lightness: float) -> None:
        """Add one pixel. Hues outside [0, 360) are skipped."""
        if hue < 0 or hue >= HUE_BINS:
            return

        bin_ = self.bins[hue]
        previous = bin_.count
        bin_.count += 1
        bin_.saturation = (bin_.saturation * previous + saturation) / bin_.count
        bin_.lightness = (bin_.lightness * previous + lightness) / bin_.count

    def record_array(self, hues: np.ndarray, saturations: np.ndarray,
                     lightnesses: np.ndarray) -> None:
        """Add many pixels at once; equivalent to calling record() for each."""
        hues = np.asarray(hues)
        valid = (hues >= 0) & (hues < HUE_BINS)
        if not valid.any():
            return
        hues = hues[valid]

        counts = np.bincount(hues, minlength=HUE_BINS)
        sat_sums = np.bincount(hues, weights=np.asarray(saturations, dtype=np.float64)[valid],
                               minlength=HUE_BINS)
        light_sums = np.bincount(hues, weights=np.asarray(lightnesses, dtype=np.float64)[valid],
                                 minlength=HUE_BINS)

        for hue in np.flatnonzero(counts):
            n = int(counts[hue])
            batch = HueBin(count=n, saturation=float(sat_sums[hue]) / n,
                           lightness=float(light_sums[hue]) / n)
            self.bins[int(hue)] = merge_bins(self.bins[int(hue)], batch)

    def merge(self, other: "HueHistogram") -> "HueHistogram":
        """Return a new histogram combining this one and other."""
        merged = HueHistogram()
        merged.bins = [merge_bins(a, b) for a, b in zip(self.bins, other.bins)]
        return merged

    def snapshot(self) -> list[HueBin]:
        """Independent copies of all bins, indexed by hue."""
        return [replace(b) for b in self.bins]

    @property
    def total(self) -> int:
        return sum(b.count for b in self.bins)

    @property
    def max_count(self) -> int:
        return max(b.count for b in self.bins)


def peak_hues(bins: list[HueBin], n: int = 5) -> list[int]:
    """Hues of the n most populated non-empty bins, ties broken by lower hue."""
    ranked = sorted(
        (hue for hue, b in enumerate(bins) if b.count > 0),
        key=lambda hue: (-bins[hue].count, hue)
    )
    return ranked[:n]
