"""
image-combiner: Python package for compositing images, text and rectangles.

Elements are drawn in insertion order onto a single canvas, which is then
encoded to PNG or JPEG.

Basic usage::

    from image_combiner import ImageCombiner, ZoomMode

    combiner = ImageCombiner(500, 300)
    combiner.add_rectangle(0, 0, 500, 300).color = "white"
    combiner.add_image("logo.png", 20, 20, ZoomMode.HEIGHT, height=64)
    combiner.add_text("Hello", 24, 100, 60).color = "red"

    combiner.save("output.png")

Architecture:

- :py:mod:`image_combiner.api`: Combiner, elements and IO (primary interface)
- :py:mod:`image_combiner.composite`: Element rendering engine
"""

from image_combiner.api.combiner import ImageCombiner
from image_combiner.constants import OutputFormat, ZoomMode
from image_combiner.version import __version__

__all__ = ["ImageCombiner", "OutputFormat", "ZoomMode", "__version__"]
