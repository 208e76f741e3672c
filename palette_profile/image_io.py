"""
Decode image files into flat RGBA pixel buffers.
"""

from typing import NamedTuple

import numpy as np
from PIL import Image

from palette_profile.config import DOWNSCALE_SIZE, MAX_IMAGE_DIMENSION, MAX_IMAGE_PIXELS


class DecodedImage(NamedTuple):
    pixels: np.ndarray  # Flat uint8 RGBA, row-major
    width: int
    height: int


def pixels_from_image(img: Image.Image) -> DecodedImage:
    """Flatten an in-memory PIL image to RGBA bytes."""
    rgba = img.convert('RGBA')
    width, height = rgba.size
    pixels = np.asarray(rgba, dtype=np.uint8).reshape(-1)
    return DecodedImage(pixels=pixels, width=width, height=height)


def load_pixels(image_path: str, downscale: bool = False) -> DecodedImage:
    """
    Load an image file as RGBA pixels.

    Args:
        image_path: Path to the image file
        downscale: Shrink so the longest side is at most DOWNSCALE_SIZE

    Raises:
        FileNotFoundError: If image file doesn't exist
        ValueError: If file is not a valid image or exceeds size limits
    """
    try:
        img = Image.open(image_path)
    except FileNotFoundError:
        raise FileNotFoundError(f"Image not found: {image_path}")
    except Exception as e:
        raise ValueError(f"Could not open image: {e}")

    with img:
        # Validate image dimensions before decoding pixel data
        width, height = img.size
        if width > MAX_IMAGE_DIMENSION or height > MAX_IMAGE_DIMENSION:
            raise ValueError(
                f"Image dimensions {width}x{height} exceed maximum "
                f"{MAX_IMAGE_DIMENSION}x{MAX_IMAGE_DIMENSION}"
            )
        if width * height > MAX_IMAGE_PIXELS:
            raise ValueError(
                f"Image has {width * height:,} pixels, exceeding maximum {MAX_IMAGE_PIXELS:,}"
            )

        # Only the first frame of animated formats is analyzed
        rgba = img.convert('RGBA')

    if downscale:
        rgba.thumbnail((DOWNSCALE_SIZE, DOWNSCALE_SIZE))

    return pixels_from_image(rgba)
