"""
Element module.

Elements are the drawable items of an
:py:class:`~image_combiner.api.combiner.ImageCombiner`. There are exactly
three kinds:

- :py:class:`ImageElement`: a decoded raster image
- :py:class:`TextElement`: a run of text, optionally wrapped
- :py:class:`RectangleElement`: a filled, optionally rounded, rectangle

The ``add_*`` methods of the combiner return the very element object it
stores, so settings can be changed after creation and are read at render
time::

    combiner = ImageCombiner(600, 400)
    title = combiner.add_text("Title", 36, 40, 80)
    title.color = "navy"
    title.max_line_width = 300

    right = 40 + int(title.measure_width())
    subtitle = combiner.add_text("Subtitle", 24, right + 8, 80)
"""

from typing import Union

from attrs import define, field
from attrs.validators import in_
from PIL import Image

from image_combiner.api.fonts import Font, FontResolver
from image_combiner.api.pil_io import get_color
from image_combiner.composite.geometry import resolve_dimensions
from image_combiner.composite.text import measured_width, wrap
from image_combiner.constants import BLACK, LINE_HEIGHT_RATIO, ZoomMode


@define(eq=False)
class ImageElement(object):
    """
    Raster image element.

    .. py:attribute:: image

        Decoded RGBA source :py:class:`PIL.Image.Image`. It is never modified
        by rendering.

    .. py:attribute:: x
    .. py:attribute:: y

        Top-left position on the canvas.

    .. py:attribute:: width
    .. py:attribute:: height

        Requested size, used according to :py:attr:`zoom_mode`.

    .. py:attribute:: zoom_mode

        :py:class:`~image_combiner.constants.ZoomMode`.

    .. py:attribute:: rotation

        Clockwise rotation in degrees about the center of the drawn box.

    .. py:attribute:: opacity

        Opacity in [0, 255].

    .. py:attribute:: corner_radius

        Radius of rounded corners in pixels, clamped to half of the shorter
        side when drawn.
    """

    image: Image.Image = field(repr=False)
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    zoom_mode: ZoomMode = field(
        default=ZoomMode.ORIGIN, converter=ZoomMode, validator=in_(ZoomMode)
    )
    rotation: float = 0.0
    opacity: int = 255
    corner_radius: int = 0

    @property
    def kind(self) -> str:
        return "image"

    @property
    def size(self) -> tuple[int, int]:
        """
        Drawn size after applying the zoom mode.

        :raise DegenerateSourceError: for a zero-sized source scaled
            proportionally.
        """
        return resolve_dimensions(
            self.image.width, self.image.height, self.width, self.height, self.zoom_mode
        )


@define(eq=False)
class TextElement(object):
    """
    Text element.

    The position is the left end of the baseline of the first line. When
    :py:attr:`rotation` is not zero, the text is drawn as a single line
    rotated about that point, without wrapping or strike-through.

    .. py:attribute:: max_line_width

        Wrap lines wider than this many pixels. 0 disables wrapping.

    .. py:attribute:: max_line_count

        Drop lines beyond this count. 0 means unlimited.

    .. py:attribute:: line_height

        Distance between baselines. 0 means 1.5 times the font size.

    A font size of 0 or less draws nothing and measures as empty.
    """

    text: str
    font_size: float
    x: int = 0
    y: int = 0
    color: tuple[int, int, int, int] = field(default=BLACK, converter=get_color)
    rotation: float = 0.0
    max_line_width: int = 0
    max_line_count: int = 0
    line_height: float = 0.0
    strike_through: bool = False
    _fonts: FontResolver = field(factory=FontResolver, repr=False)

    @property
    def kind(self) -> str:
        return "text"

    @property
    def fonts(self) -> FontResolver:
        return self._fonts

    @property
    def effective_line_height(self) -> float:
        if self.line_height <= 0:
            return self.font_size * LINE_HEIGHT_RATIO
        return self.line_height

    def font(self) -> Font:
        """Font face at :py:attr:`font_size`."""
        return self._fonts.resolve(self.font_size)

    def lines(self) -> list[str]:
        """Lines as drawn with the current wrapping settings."""
        if self.font_size <= 0:
            return []
        return wrap(
            self.text, self.max_line_width, self.max_line_count, self.font().getlength
        )

    def measure_width(self) -> float:
        """
        Width of the widest drawn line in pixels.

        Useful to place another element right after this one.
        """
        if self.font_size <= 0:
            return 0
        return measured_width(self.lines(), self.font().getlength)


@define(eq=False)
class RectangleElement(object):
    """
    Filled rectangle element, with rounded corners when
    :py:attr:`corner_radius` is positive.
    """

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    color: tuple[int, int, int, int] = field(default=BLACK, converter=get_color)
    corner_radius: int = 0

    @property
    def kind(self) -> str:
        return "rectangle"


Element = Union[ImageElement, TextElement, RectangleElement]

#: The closed set of element kinds.
ELEMENT_TYPES = (ImageElement, TextElement, RectangleElement)
