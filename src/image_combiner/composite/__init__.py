"""
Rendering engine for combiner elements.

Key modules:

- :py:mod:`image_combiner.composite.composite`: Per-element drawing
- :py:mod:`image_combiner.composite.geometry`: Zoom, corner radius and rotation math
- :py:mod:`image_combiner.composite.alpha`: Opacity, corner masks and compositing
- :py:mod:`image_combiner.composite.text`: Line wrapping and measurement

Example usage::

    from PIL import Image

    from image_combiner.api.elements import RectangleElement
    from image_combiner.composite import draw_element

    canvas = Image.new("RGBA", (200, 100), "white")
    draw_element(canvas, RectangleElement(10, 10, 50, 50, color="red"))

All drawing happens on RGBA canvases with straight alpha. Elements are
composited with Pillow's alpha compositing, and per-pixel opacity is
computed with NumPy.
"""

from image_combiner.composite.composite import draw_element

__all__ = [
    "draw_element",
]
