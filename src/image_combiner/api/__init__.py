"""
High-level API for composing images.

The main entry point is :py:class:`~image_combiner.api.combiner.ImageCombiner`,
which owns the canvas and the ordered list of elements. Individual elements
are represented by the classes in :py:mod:`image_combiner.api.elements`.

Key modules:

- :py:mod:`image_combiner.api.combiner`: ImageCombiner and canvas settings
- :py:mod:`image_combiner.api.elements`: Image, text and rectangle elements
- :py:mod:`image_combiner.api.fonts`: Font resolution with fallbacks
- :py:mod:`image_combiner.api.pil_io`: Image loading, colors and encoding
"""
