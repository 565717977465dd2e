"""
Exceptions raised by image_combiner.

Out-of-range element settings are not reported here: they render as
visually incorrect but valid output.
"""


class ImageCombinerError(Exception):
    """Base class of image_combiner errors."""


class SourceLoadError(ImageCombinerError):
    """An image source could not be fetched or decoded."""


class DegenerateSourceError(ImageCombinerError, ValueError):
    """A zero-sized source image was used with a proportional zoom mode."""


class FontLoadError(ImageCombinerError):
    """Even the built-in default font face could not be loaded."""


class EncodeError(ImageCombinerError):
    """The rendered canvas could not be encoded."""


class UnsupportedFormatError(EncodeError, ValueError):
    """The requested output format is not one of the known formats."""
