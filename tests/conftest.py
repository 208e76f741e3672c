import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# Add the repository root to the Python path so that palette_profile can be imported in tests
root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path))


@pytest.fixture
def make_image(tmp_path):
    """Write an RGBA numpy array (H, W, 4) to a PNG and return its path."""
    def _make(array, name="image.png"):
        path = tmp_path / name
        Image.fromarray(np.asarray(array, dtype=np.uint8)).save(path)
        return path
    return _make
