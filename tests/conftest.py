"""Pytest configuration for image-combiner tests."""

import pytest
from PIL import Image

from image_combiner.api.fonts import FontResolver


@pytest.fixture
def fonts() -> FontResolver:
    """Resolver using only the built-in face, for stable measurements."""
    return FontResolver([])


@pytest.fixture
def canvas() -> Image.Image:
    return Image.new("RGBA", (100, 80), (255, 255, 255, 255))
