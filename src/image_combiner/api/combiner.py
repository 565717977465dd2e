"""
Image combiner module.

This module provides the :py:class:`ImageCombiner` class, the entry point of
image-combiner. A combiner owns a canvas size and an ordered list of
elements; rendering draws the elements in insertion order onto a fresh
white canvas.

Example usage::

    from image_combiner import ImageCombiner, ZoomMode

    combiner = ImageCombiner(500, 300)

    background = combiner.add_rectangle(0, 0, 500, 300)
    background.color = (240, 240, 240)

    photo = combiner.add_image("photo.jpg", 20, 20, ZoomMode.WIDTH, width=200)
    photo.corner_radius = 16
    photo.opacity = 200

    caption = combiner.add_text("A long caption that wraps", 24, 240, 60)
    caption.max_line_width = 240
    caption.max_line_count = 2

    image = combiner.render()
    combiner.save("output.png")

Layouts can also be described as JSON documents, see
:py:meth:`ImageCombiner.open`.
"""

import json
import logging
import os
from typing import Any, BinaryIO, Callable, Iterable, Iterator, Optional, Union

try:
    from typing import Self  # type: ignore[attr-defined]
except ImportError:
    from typing_extensions import Self

import attrs
from attrs import field, frozen
from attrs.validators import and_, ge, le
from PIL import Image

from image_combiner.api import pil_io
from image_combiner.api.elements import (
    ELEMENT_TYPES,
    Element,
    ImageElement,
    RectangleElement,
    TextElement,
)
from image_combiner.api.fonts import FontResolver, FontStrategy
from image_combiner.composite import draw_element
from image_combiner.constants import (
    DEFAULT_QUALITY,
    MAX_CANVAS_SIZE,
    WHITE,
    OutputFormat,
    ZoomMode,
)

logger = logging.getLogger(__name__)

Loader = Callable[[Any], Image.Image]


@frozen
class CanvasSpec(object):
    """
    Canvas size and background of a combiner.

    .. py:attribute:: width
    .. py:attribute:: height

        Canvas size in pixels.

    .. py:attribute:: background

        RGBA background fill, opaque white by default.
    """

    width: int = field(validator=and_(ge(1), le(MAX_CANVAS_SIZE)))
    height: int = field(validator=and_(ge(1), le(MAX_CANVAS_SIZE)))
    background: tuple[int, int, int, int] = field(
        default=WHITE, converter=pil_io.get_color
    )

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def new_canvas(self) -> Image.Image:
        """Allocate a new RGBA canvas filled with the background."""
        return Image.new("RGBA", self.size, self.background)


class ImageCombiner(object):
    """
    Composite images, text and rectangles onto a single canvas.

    :param width: Canvas width in pixels.
    :param height: Canvas height in pixels.
    :param output_format: Default :py:class:`~image_combiner.constants.OutputFormat`
        for :py:meth:`tobytes` and :py:meth:`save`.
    :param quality: Default quality in [0.0, 1.0] for lossy formats.
    :param fonts: :py:class:`~image_combiner.api.fonts.FontResolver`, or an
        ordered list of font candidates to build one from.
    :param loader: Callable decoding an image source, defaults to
        :py:func:`~image_combiner.api.pil_io.load_image`.
    :param background: Canvas background color.
    """

    def __init__(
        self,
        width: int,
        height: int,
        output_format: Union[OutputFormat, str] = OutputFormat.PNG,
        quality: float = DEFAULT_QUALITY,
        fonts: Union[FontResolver, Iterable[FontStrategy], None] = None,
        loader: Optional[Loader] = None,
        background: pil_io.Color = WHITE,
    ):
        self._spec = CanvasSpec(width, height, background)
        self.output_format = output_format  # type: ignore[assignment]
        self.quality = quality
        if not isinstance(fonts, FontResolver):
            fonts = FontResolver(fonts)
        self._fonts = fonts
        self._loader = loader or pil_io.load_image
        self._elements: list[Element] = []

    @classmethod
    def open(
        cls, fp: Union[BinaryIO, str, bytes, os.PathLike], **kwargs: Any
    ) -> Self:
        """
        Create a combiner from a JSON layout file.

        The document has the following form::

            {
                "width": 500,
                "height": 300,
                "background": "white",
                "elements": [
                    {"type": "rectangle", "x": 0, "y": 0, "width": 500,
                     "height": 300, "color": [240, 240, 240]},
                    {"type": "image", "source": "photo.png", "x": 20, "y": 20,
                     "zoom_mode": "width", "width": 200, "corner_radius": 16},
                    {"type": "text", "text": "Hello", "font_size": 24,
                     "x": 240, "y": 60, "max_line_width": 200}
                ]
            }

        Relative image paths are resolved against the directory of the
        layout file.

        :param fp: filename or file-like object.
        :param kwargs: Extra arguments to :py:class:`ImageCombiner`.
        :return: A :py:class:`ImageCombiner` object.
        """
        if isinstance(fp, (str, bytes, os.PathLike)):
            with open(fp, "rb") as f:
                layout = json.load(f)
            base_dir = os.path.dirname(os.path.abspath(os.fsdecode(fp)))
        else:
            layout = json.load(fp)
            base_dir = None
        return cls.from_layout(layout, base_dir=base_dir, **kwargs)

    @classmethod
    def from_layout(
        cls, layout: dict, base_dir: Optional[str] = None, **kwargs: Any
    ) -> Self:
        """
        Create a combiner from a layout `dict`, see :py:meth:`open`.

        :raise ValueError: for an unknown element type or field.
        """
        if "background" in layout:
            kwargs.setdefault("background", layout["background"])
        self = cls(layout["width"], layout["height"], **kwargs)
        for index, item in enumerate(layout.get("elements", [])):
            item = dict(item)
            kind = item.pop("type", None)
            if kind == "image":
                source = item.pop("source")
                if base_dir and isinstance(source, str) and not (
                    source.startswith(("http://", "https://")) or os.path.isabs(source)
                ):
                    source = os.path.join(base_dir, source)
                element: Element = self.add_image(source)
            elif kind == "text":
                element = self.add_text(item.pop("text"), item.pop("font_size"))
            elif kind == "rectangle":
                element = self.add_rectangle()
            else:
                raise ValueError("Unknown element type at %d: %r" % (index, kind))
            _configure(element, item)
        return self

    @property
    def spec(self) -> CanvasSpec:
        """:py:class:`CanvasSpec` of this combiner."""
        return self._spec

    @property
    def width(self) -> int:
        return self._spec.width

    @property
    def height(self) -> int:
        return self._spec.height

    @property
    def size(self) -> tuple[int, int]:
        return self._spec.size

    @property
    def output_format(self) -> OutputFormat:
        """Default output format. Writable, accepts format names."""
        return self._output_format

    @output_format.setter
    def output_format(self, value: Union[OutputFormat, str]) -> None:
        self._output_format = pil_io.get_output_format(value)

    @property
    def fonts(self) -> FontResolver:
        return self._fonts

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self._elements)

    def __getitem__(self, index: int) -> Element:
        return self._elements[index]

    def __repr__(self) -> str:
        return "%s(size=%dx%d, elements=%d)" % (
            self.__class__.__name__,
            self.width,
            self.height,
            len(self),
        )

    def add_element(self, element: Element) -> Element:
        """
        Append an element to be drawn after all existing ones.

        :return: The element itself.
        """
        if not isinstance(element, ELEMENT_TYPES):
            raise TypeError(f"Expected an element, got {type(element).__name__}")
        self._elements.append(element)
        return element

    def add_image(
        self,
        source: Any,
        x: int = 0,
        y: int = 0,
        zoom_mode: Union[ZoomMode, str] = ZoomMode.ORIGIN,
        width: int = 0,
        height: int = 0,
    ) -> ImageElement:
        """
        Load `source` and append it as an image element.

        The source is decoded right away; if that fails nothing is added.

        :param source: Path, URL, bytes, file object or PIL image accepted
            by the loader.
        :param x: Left position.
        :param y: Top position.
        :param zoom_mode: :py:class:`~image_combiner.constants.ZoomMode`.
        :param width: Requested width.
        :param height: Requested height.
        :return: :py:class:`~image_combiner.api.elements.ImageElement`.
        :raise SourceLoadError: if the source cannot be loaded.
        """
        image = self._loader(source)
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        element = ImageElement(
            image, x, y, width=width, height=height, zoom_mode=zoom_mode
        )
        logger.debug("Added image of size %dx%d" % (image.width, image.height))
        self.add_element(element)
        return element

    def add_text(
        self, text: str, font_size: float, x: int = 0, y: int = 0
    ) -> TextElement:
        """
        Append a text element, black by default.

        :param text: Text to draw.
        :param font_size: Font size in pixels.
        :param x: Left end of the first baseline.
        :param y: Baseline of the first line.
        :return: :py:class:`~image_combiner.api.elements.TextElement`.
        """
        element = TextElement(text, font_size, x, y, fonts=self._fonts)
        self.add_element(element)
        return element

    def add_rectangle(
        self, x: int = 0, y: int = 0, width: int = 0, height: int = 0
    ) -> RectangleElement:
        """
        Append a rectangle element, black by default.

        :return: :py:class:`~image_combiner.api.elements.RectangleElement`.
        """
        element = RectangleElement(x, y, width, height)
        self.add_element(element)
        return element

    def render(self) -> Image.Image:
        """
        Draw all elements in insertion order onto a new canvas.

        Rendering does not change the elements, so calling this again gives
        an identical image.

        :return: RGBA :py:class:`PIL.Image.Image`.
        """
        canvas = self._spec.new_canvas()
        for element in self._elements:
            logger.debug("Drawing %r" % (element,))
            draw_element(canvas, element)
        return canvas

    def tobytes(
        self,
        output_format: Union[OutputFormat, str, None] = None,
        quality: Optional[float] = None,
    ) -> bytes:
        """
        Render and encode the canvas.

        :param output_format: Output format, defaults to
            :py:attr:`output_format`.
        :param quality: Quality in [0.0, 1.0] for lossy formats, defaults to
            :py:attr:`quality`.
        :return: `bytes`
        """
        return pil_io.encode(
            self.render(),
            output_format or self._output_format,
            self.quality if quality is None else quality,
            self._spec.background,
        )

    def save(
        self,
        fp: Union[BinaryIO, str, os.PathLike],
        output_format: Union[OutputFormat, str, None] = None,
        quality: Optional[float] = None,
    ) -> None:
        """
        Render and write the canvas to a file.

        Without an explicit `output_format`, the format is guessed from the
        file suffix, falling back to :py:attr:`output_format`.

        :param fp: filename or file-like object.
        :param output_format: Output format.
        :param quality: Quality in [0.0, 1.0] for lossy formats.
        """
        if output_format is None and isinstance(fp, (str, os.PathLike)):
            output_format = pil_io.guess_output_format(fp)
        pil_io.write(
            self.render(),
            fp,
            output_format or self._output_format,
            self.quality if quality is None else quality,
            self._spec.background,
        )


def _configure(element: Element, values: dict) -> None:
    names = {a.name.lstrip("_") for a in attrs.fields(type(element)) if a.init}
    for key, value in values.items():
        if key not in names or key in ("image", "fonts"):
            raise ValueError(
                "Unknown field for %s element: %r" % (element.kind, key)
            )
        setattr(element, key, value)
