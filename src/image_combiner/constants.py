"""
Various constants for image_combiner
"""
from enum import Enum


class ZoomMode(Enum):
    """
    Zoom mode of an image element.

    Controls how the drawn size is derived from the requested width and
    height and the aspect ratio of the source image.
    """
    #: Keep the source size, requested width and height are ignored.
    ORIGIN = 'origin'
    #: Use the requested width, height follows the source aspect ratio.
    WIDTH = 'width'
    #: Use the requested height, width follows the source aspect ratio.
    HEIGHT = 'height'
    #: Use the requested width and height, the image may be distorted.
    WIDTH_HEIGHT = 'width_height'


class OutputFormat(Enum):
    """
    Encoded output format.
    """
    PNG = 'png'
    JPG = 'jpg'

    @property
    def lossy(self):
        return self is OutputFormat.JPG

    @property
    def pil_format(self):
        """Format name understood by :py:meth:`PIL.Image.Image.save`."""
        return {OutputFormat.PNG: 'PNG', OutputFormat.JPG: 'JPEG'}[self]


WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
TRANSPARENT = (0, 0, 0, 0)

#: Line height relative to the font size when not set explicitly.
LINE_HEIGHT_RATIO = 1.5

#: Strike-through offset above the baseline relative to the font size.
STRIKE_THROUGH_RATIO = 0.4

#: Strike-through stroke width for wrapped and single-line text.
STRIKE_THROUGH_WIDTH = 1
STRIKE_THROUGH_WIDTH_SINGLE = 2

#: Oversampling factor of rounded-corner masks.
MASK_SUPERSAMPLE = 4

#: Largest supported canvas side.
MAX_CANVAS_SIZE = 65535

#: Default JPEG quality in [0.0, 1.0].
DEFAULT_QUALITY = 1.0

#: Timeout in seconds for fetching remote images.
DEFAULT_TIMEOUT = 10.0
