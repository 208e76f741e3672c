"""Color profiles of raster images: dominant colors, color families and a hue histogram."""

from palette_profile.builder import ColorProfile, InputShapeError, analyze, analyze_image
from palette_profile.config import AnalysisConfig

__all__ = ['AnalysisConfig', 'ColorProfile', 'InputShapeError', 'analyze', 'analyze_image']
